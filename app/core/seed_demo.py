"""Seed the admin account and sample content for development."""

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import hash_password
from app.db.session import SessionLocal
from app.models.content import Interview, Note, Problem
from app.models.user import User, UserRole

logger = get_logger(__name__)

SAMPLE_PROBLEMS = [
    {
        "title": "Two Sum",
        "difficulty": "Easy",
        "category": "Array",
        "tags": ["array", "hash-table"],
        "description": (
            "Given an array of integers nums and an integer target, return indices of the "
            "two numbers such that they add up to target."
        ),
        "explanation": "Use a hash map to store the complement of each number as you iterate through the array.",
        "code": (
            "def two_sum(nums, target):\n"
            "    seen = {}\n"
            "    for i, n in enumerate(nums):\n"
            "        if target - n in seen:\n"
            "            return [seen[target - n], i]\n"
            "        seen[n] = i\n"
            "    return []\n"
        ),
        "test_cases": '[{"input": {"nums": [2,7,11,15], "target": 9}, "output": [0,1]}]',
    },
    {
        "title": "Reverse String",
        "difficulty": "Easy",
        "category": "String",
        "tags": ["string", "two-pointers"],
        "description": "Write a function that reverses a string. The input string is given as an array of characters s.",
        "explanation": "Swap characters with two pointers moving towards the center.",
        "code": (
            "def reverse_string(s):\n"
            "    left, right = 0, len(s) - 1\n"
            "    while left < right:\n"
            "        s[left], s[right] = s[right], s[left]\n"
            "        left, right = left + 1, right - 1\n"
            "    return s\n"
        ),
        "test_cases": '[{"input": {"s": ["h","e","l","l","o"]}, "output": ["o","l","l","e","h"]}]',
    },
]

SAMPLE_NOTES = [
    {
        "title": "JavaScript Closures",
        "category": "JavaScript",
        "tags": ["javascript", "closures", "scope"],
        "description": "Understanding closures in JavaScript",
        "content": (
            "# JavaScript Closures\n\nA closure is a function that keeps access to variables "
            "of its enclosing scope after the outer function has returned."
        ),
    },
    {
        "title": "Big O Notation",
        "category": "Algorithms",
        "tags": ["algorithms", "complexity", "big-o"],
        "description": "Understanding time and space complexity",
        "content": "# Big O Notation\n\n- O(1) constant\n- O(log n) logarithmic\n- O(n) linear\n- O(n log n)\n- O(n^2) quadratic",
    },
]

SAMPLE_INTERVIEWS = [
    {
        "title": "React Hooks Interview Questions",
        "category": "React",
        "tags": ["react", "hooks", "interview"],
        "description": "Common React Hooks interview questions and answers",
        "content": "# React Hooks Interview Questions\n\n## What is useState?\n\nA hook that adds state to function components.",
    },
    {
        "title": "JavaScript Interview Questions",
        "category": "JavaScript",
        "tags": ["javascript", "interview", "fundamentals"],
        "description": "Essential JavaScript interview questions",
        "content": "# JavaScript Interview Questions\n\n## What is hoisting?\n\nDeclarations are moved to the top of their scope.",
    },
]


def ensure_admin(db: Session, email: str, password: str, name: str = "Admin User") -> User:
    """Create the admin account, or promote an existing user with that email."""
    email = email.lower().strip()
    user = db.query(User).filter(User.email == email).first()
    if user:
        if user.role != UserRole.ADMIN.value:
            user.role = UserRole.ADMIN.value
            logger.info(f"Promoted {email} to admin")
        return user

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=UserRole.ADMIN.value,
        is_active=True,
    )
    db.add(user)
    db.flush()
    logger.info(f"Created admin account: {email}")
    return user


def seed_sample_content(db: Session, author: User) -> int:
    """Insert the sample problems, notes and interviews that are not present yet."""
    created = 0
    for model, rows in ((Problem, SAMPLE_PROBLEMS), (Note, SAMPLE_NOTES), (Interview, SAMPLE_INTERVIEWS)):
        for row in rows:
            if db.query(model).filter(model.title == row["title"]).first():
                continue
            db.add(model(**row, author_id=author.id))
            created += 1
    return created


def seed_demo_data() -> None:
    """Seed the admin account and sample content if enabled in dev environment."""
    if settings.ENV != "dev" or not settings.SEED_DEMO_ACCOUNTS:
        logger.info("Demo seeding skipped (ENV != dev or SEED_DEMO_ACCOUNTS=false)")
        return

    db = SessionLocal()
    try:
        admin = ensure_admin(db, settings.SEED_ADMIN_EMAIL, settings.SEED_ADMIN_PASSWORD)
        created = seed_sample_content(db, admin)
        db.commit()
        logger.info(f"Demo data seeded ({created} content items created)")
    except Exception as e:
        db.rollback()
        logger.error(f"Error seeding demo data: {e}", exc_info=True)
        raise
    finally:
        db.close()
