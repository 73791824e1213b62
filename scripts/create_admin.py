#!/usr/bin/env python3
"""Script to create an admin user for development/testing."""

import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.logging import get_logger, setup_logging
from app.core.seed_demo import ensure_admin, seed_sample_content
from app.db.session import SessionLocal

logger = get_logger(__name__)


def create_admin_user(
    email: str = "admin@example.com",
    password: str = "admin123",
    name: str = "Admin User",
    with_samples: bool = False,
) -> None:
    """Create (or promote) an admin user, optionally with the sample content."""
    db = SessionLocal()
    try:
        admin = ensure_admin(db, email, password, name)
        created = seed_sample_content(db, admin) if with_samples else 0
        db.commit()
        print(f"\n✓ Admin user ready: {admin.email}")
        if with_samples:
            print(f"  Sample content created: {created}")
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating admin user: {e}", exc_info=True)
        print(f"\n✗ Error creating admin user: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create an admin user for development/testing")
    parser.add_argument("--email", type=str, default="admin@example.com", help="Admin email")
    parser.add_argument("--password", type=str, default="admin123", help="Admin password")
    parser.add_argument("--name", type=str, default="Admin User", help="Admin name")
    parser.add_argument(
        "--with-samples",
        action="store_true",
        help="Also insert the sample problems, notes and interviews",
    )

    args = parser.parse_args()

    setup_logging()
    print("Creating admin user...")
    create_admin_user(
        email=args.email,
        password=args.password,
        name=args.name,
        with_samples=args.with_samples,
    )
