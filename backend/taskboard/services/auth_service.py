"""
Authentication service: registration, login and token validation.

Login is by email. Unknown accounts and wrong passwords fail with the
same error so callers cannot probe which emails are registered.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.core import security
from taskboard.models.user import User
from taskboard.services import user_service
from taskboard.services.errors import ConflictError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
USER_EXISTS = "User with this email or username already exists"

# Verified against when the account does not exist, so both failure
# paths pay for one bcrypt comparison.
_DUMMY_HASH = security.get_password_hash("taskboard-dummy-password")


@dataclass
class AuthResult:
    """Access token issued for an authenticated user."""
    access_token: str
    user: User
    token_type: str = "bearer"


def issue_token(user: User) -> str:
    """Issue a signed access token for a user."""
    return security.create_access_token(subject=user.id, extra_claims={"email": user.email})


def register(db: Session, username: str, email: str, password: str) -> AuthResult:
    """
    Register a new user and issue an access token.

    Args:
        db: Database session
        username: Unique username
        email: Unique email address
        password: Plaintext password (only the hash is stored)

    Returns:
        AuthResult with the token and created user

    Raises:
        ValidationError: If any field fails validation
        ConflictError: If the username or email is already taken
    """
    for validate, value in (
        (user_service.validate_username, username),
        (user_service.validate_email, email),
        (user_service.validate_password, password),
    ):
        is_valid, error_message = validate(value)
        if not is_valid:
            raise ValidationError(error_message)

    username = username.strip()
    email = email.strip()

    logger.info("User registration attempt")

    if (
        user_service.get_user_by_username(db, username) is not None
        or user_service.get_user_by_email(db, email) is not None
    ):
        logger.info("Registration failed: user already exists")
        raise ConflictError(USER_EXISTS)

    user = User(
        username=username,
        email=email,
        password_hash=security.get_password_hash(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        db.rollback()
        logger.info("Registration failed: unique constraint violated")
        raise ConflictError(USER_EXISTS)
    db.refresh(user)

    logger.info(f"User registered: {user.id}")

    return AuthResult(access_token=issue_token(user), user=user)


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Check an email/password pair.

    Returns:
        The matching User

    Raises:
        UnauthorizedError: If the account is absent or the password is wrong
    """
    user = user_service.get_user_by_email(db, (email or "").strip())
    if user is None:
        security.verify_password(password or "", _DUMMY_HASH)
        logger.info("Login failed: unknown account")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    if not security.verify_password(password or "", user.password_hash):
        logger.info(f"Login failed: invalid password for user {user.id}")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    return user


def login(db: Session, email: str, password: str) -> AuthResult:
    """
    Log a user in by email and password.

    Raises:
        UnauthorizedError: On any credential mismatch
    """
    user = authenticate(db, email, password)
    logger.info(f"User login successful: {user.id}")
    return AuthResult(access_token=issue_token(user), user=user)


def validate_token(db: Session, token: str) -> User:
    """
    Resolve an access token to its user.

    Raises:
        UnauthorizedError: If the token is invalid or expired, or the
            user it names no longer exists
    """
    payload = security.decode_access_token(token)

    user = user_service.get_user_by_id(db, payload["sub"])
    if user is None:
        logger.info("Token validation failed: user not found")
        raise UnauthorizedError("User not found")

    return user
