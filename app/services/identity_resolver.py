"""Resolve loose item references to canonical content ids.

Callers may reference a problem, note or interview either by its canonical id
or by free text. Resolution rules, first match wins:

1. ``canonical_id``: the reference is already a UUID string; returned as-is
   without touching the database (no existence check).
2. ``exact_title``: case-insensitive exact title match.
3. ``fuzzy``: case-insensitive substring of title or category, or an exact
   (case-insensitive) tag.

When several rows match within a rule, the lowest id wins so the answer does
not depend on storage order.
"""

import re
from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.content import ItemType, content_model_for

logger = get_logger(__name__)

CANONICAL_ID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


class ResolutionStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    LOOKUP_FAILED = "lookup_failed"


class MatchRule(str, Enum):
    CANONICAL_ID = "canonical_id"
    EXACT_TITLE = "exact_title"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one reference."""

    status: ResolutionStatus
    item_id: UUID | None = None
    rule: MatchRule | None = None
    error: Exception | None = None

    @property
    def found(self) -> bool:
        return self.status == ResolutionStatus.FOUND

    @classmethod
    def found_by(cls, item_id: UUID, rule: MatchRule) -> "Resolution":
        return cls(status=ResolutionStatus.FOUND, item_id=item_id, rule=rule)

    @classmethod
    def not_found(cls) -> "Resolution":
        return cls(status=ResolutionStatus.NOT_FOUND)

    @classmethod
    def lookup_failed(cls, error: Exception) -> "Resolution":
        return cls(status=ResolutionStatus.LOOKUP_FAILED, error=error)


def is_canonical_id(reference: str) -> bool:
    """True when the reference is shaped like a canonical (UUID v1-v5) id."""
    return bool(CANONICAL_ID_RE.match(reference))


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _first_exact_title(db: Session, item_type: ItemType, reference: str) -> UUID | None:
    model = content_model_for(item_type)
    stmt = (
        select(model.id)
        .where(func.lower(model.title) == func.lower(reference))
        .order_by(model.id)
        .limit(1)
    )
    return db.execute(stmt).scalar_one_or_none()


def _first_fuzzy(db: Session, item_type: ItemType, reference: str) -> UUID | None:
    model = content_model_for(item_type)
    pattern = f"%{_escape_like(reference)}%"
    text_stmt = (
        select(model.id)
        .where(
            or_(
                model.title.ilike(pattern, escape="\\"),
                model.category.ilike(pattern, escape="\\"),
            )
        )
        .order_by(model.id)
        .limit(1)
    )
    candidates = []
    text_match = db.execute(text_stmt).scalar_one_or_none()
    if text_match is not None:
        candidates.append(text_match)

    # Tags are a JSON list, so membership is checked here rather than in SQL
    # to stay portable across PostgreSQL and SQLite.
    needle = reference.lower()
    tag_stmt = select(model.id, model.tags).order_by(model.id)
    if text_match is not None:
        tag_stmt = tag_stmt.where(model.id < text_match)
    for item_id, tags in db.execute(tag_stmt):
        if any(isinstance(tag, str) and tag.lower() == needle for tag in tags or ()):
            candidates.append(item_id)
            break

    return min(candidates, key=str) if candidates else None


def resolve(db: Session, reference: str, item_type: ItemType) -> Resolution:
    """Map a raw item reference to a canonical id.

    Storage errors are reported as ``lookup_failed`` so callers can tell a
    missing item from an unavailable database.
    """
    reference = (reference or "").strip()
    if not reference:
        return Resolution.not_found()

    if is_canonical_id(reference):
        return Resolution.found_by(UUID(reference), MatchRule.CANONICAL_ID)

    try:
        item_id = _first_exact_title(db, item_type, reference)
        if item_id is not None:
            return Resolution.found_by(item_id, MatchRule.EXACT_TITLE)

        item_id = _first_fuzzy(db, item_type, reference)
        if item_id is not None:
            logger.info(
                "Item reference resolved by fuzzy match",
                extra={"reference": reference, "item_type": item_type.value, "item_id": str(item_id)},
            )
            return Resolution.found_by(item_id, MatchRule.FUZZY)
    except SQLAlchemyError as e:
        logger.error(
            "Item reference lookup failed",
            extra={"reference": reference, "item_type": item_type.value, "error": str(e)},
        )
        return Resolution.lookup_failed(e)

    return Resolution.not_found()
