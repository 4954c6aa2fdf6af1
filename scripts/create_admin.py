"""Create the initial admin account if it does not exist yet."""
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pricelist.core.auth import get_password_hash
from pricelist.core.database import SessionLocal, init_db
from pricelist.models.user import User


def create_admin(email: str, password: str, name: str = "Admin") -> None:
    init_db()
    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email.lower()).first()
        if existing:
            print(f"User {email} already exists")
            return

        db.add(User(name=name, email=email.lower(), password=get_password_hash(password)))
        db.commit()
        print(f"Created admin user {email}")
    finally:
        db.close()


if __name__ == "__main__":
    create_admin(
        email=os.environ.get("ADMIN_EMAIL", "admin@pricelist.app"),
        password=os.environ.get("ADMIN_PASSWORD", "change-me-now"),
        name=os.environ.get("ADMIN_NAME", "Admin"),
    )
