"""
Setup script for the dealership database.

Creates any missing tables and, optionally, a staff account, since no API
route creates users:

    python setup_db.py --create-user admin@example.com --name "Admin" --role ADMIN
"""

import argparse
import getpass
import logging

from dealership.core.enums import UserRole, enum_values
from dealership.core.security import hash_password
from dealership.db.init_db import init_db
from dealership.db.session import SessionLocal
from dealership.models import User

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def setup_database():
    """Initialize database tables for the dealership API."""
    logger.info("Creating dealership database tables...")
    try:
        init_db()
        logger.info("Database tables created successfully!")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise

def create_user(email: str, name: str, role: str, password: str) -> User:
    """Create an active staff account, or fail if the email is taken."""
    email = email.strip().lower()
    db = SessionLocal()
    try:
        if db.query(User).filter(User.email == email).first():
            raise ValueError(f"A user with email {email} already exists")
        user = User(
            email=email,
            name=name.strip(),
            role=UserRole(role),
            password_hash=hash_password(password),
            is_active=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"User {user.email} created with role {user.role.value}")
        return user
    finally:
        db.close()

def main():
    parser = argparse.ArgumentParser(description="Create dealership tables and staff accounts.")
    parser.add_argument("--create-user", metavar="EMAIL", help="Email of a staff account to create")
    parser.add_argument("--name", default="Administrator", help="Display name of the new account")
    parser.add_argument("--role", default=UserRole.ADMIN.value, choices=enum_values(UserRole))
    parser.add_argument("--password", help="Password (prompted when omitted)")
    args = parser.parse_args()

    setup_database()

    if args.create_user:
        password = args.password or getpass.getpass("Password: ")
        create_user(args.create_user, args.name, args.role, password)

if __name__ == "__main__":
    main()
