"""
User service layer for user management operations.

Handles credential validation, user lookups and administrative deletion.
"""

import re
from typing import Optional

from sqlalchemy.orm import Session

from taskboard.config import get_settings
from taskboard.models.user import User

settings = get_settings()

# Loose shape check; full RFC validation happens at the HTTP boundary
EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def validate_username(username: str) -> tuple[bool, Optional[str]]:
    """
    Validate username format.

    Args:
        username: Username to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not username or not username.strip():
        return False, "Username is required"

    if len(username.strip()) > settings.auth.USERNAME_MAX_LENGTH:
        return False, f"Username must not exceed {settings.auth.USERNAME_MAX_LENGTH} characters"

    return True, None


def validate_email(email: str) -> tuple[bool, Optional[str]]:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not email or not email.strip():
        return False, "Email is required"

    email = email.strip()

    if len(email) > settings.auth.EMAIL_MAX_LENGTH:
        return False, f"Email must not exceed {settings.auth.EMAIL_MAX_LENGTH} characters"

    if not EMAIL_PATTERN.match(email):
        return False, "Email must be a valid email address"

    return True, None


def validate_password(password: str) -> tuple[bool, Optional[str]]:
    """
    Validate password against the length policy.

    Args:
        password: Plaintext password to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password:
        return False, "Password is required"

    if len(password) < settings.auth.PASSWORD_MIN_LENGTH:
        return False, f"Password must be at least {settings.auth.PASSWORD_MIN_LENGTH} characters"

    if len(password) > settings.auth.PASSWORD_MAX_LENGTH:
        return False, f"Password must not exceed {settings.auth.PASSWORD_MAX_LENGTH} characters"

    return True, None


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    """
    Get user by ID.

    Args:
        db: Database session
        user_id: User ID to lookup

    Returns:
        User object if found, None otherwise
    """
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email address, or None."""
    return db.query(User).filter(User.email == email).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """
    Get user by username.

    Args:
        db: Database session
        username: Username to lookup

    Returns:
        User object if found, None otherwise
    """
    return db.query(User).filter(User.username == username).first()


def delete_user(db: Session, user_id: str) -> bool:
    """
    Delete a user by ID.

    Cascades to delete all todos owned by this user.

    Args:
        db: Database session
        user_id: User ID to delete

    Returns:
        True if deleted, False if not found
    """
    user = get_user_by_id(db, user_id)
    if not user:
        return False

    db.delete(user)
    db.commit()

    return True
