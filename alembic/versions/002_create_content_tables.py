"""Create problems, notes and interviews tables

Revision ID: 002
Revises: 001
Create Date: 2025-09-01 10:05:00.000000

"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def _common_columns() -> list[sa.Column]:
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "author_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "problems",
        *_common_columns(),
        sa.Column("difficulty", sa.String(20), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("code", sa.Text(), nullable=True),
        sa.Column("test_cases", sa.Text(), nullable=True),
        sa.CheckConstraint("difficulty IN ('Easy', 'Medium', 'Hard')", name="ck_problems_difficulty"),
    )
    op.create_table("notes", *_common_columns(), sa.Column("content", sa.Text(), nullable=False))
    op.create_table("interviews", *_common_columns(), sa.Column("content", sa.Text(), nullable=False))

    for table in ("problems", "notes", "interviews"):
        op.create_index(f"ix_{table}_category", table, ["category"])
        op.create_index(f"ix_{table}_author_id", table, ["author_id"])
    op.create_index("ix_problems_difficulty", "problems", ["difficulty"])


def downgrade() -> None:
    op.drop_index("ix_problems_difficulty", table_name="problems")
    for table in ("interviews", "notes", "problems"):
        op.drop_index(f"ix_{table}_author_id", table_name=table)
        op.drop_index(f"ix_{table}_category", table_name=table)
        op.drop_table(table)
