"""
Password hashing and access token helpers.

Passwords are hashed with bcrypt through passlib; access tokens are
HS256-signed JWTs carrying the user id in the ``sub`` claim.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from taskboard.config import get_settings
from taskboard.services.errors import UnauthorizedError

logger = logging.getLogger(__name__)

settings = get_settings()

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.auth.BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    subject: str,
    extra_claims: Optional[Dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed access token.

    Args:
        subject: User ID stored in the ``sub`` claim
        extra_claims: Additional claims (e.g. email)
        expires_delta: Token lifetime, defaults to the configured expiry

    Returns:
        Encoded JWT string
    """
    now = datetime.utcnow()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.auth.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode: Dict[str, Any] = dict(extra_claims or {})
    to_encode.update({"sub": subject, "iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, settings.auth.SECRET_KEY, algorithm=settings.auth.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry of an access token.

    Args:
        token: Encoded JWT string

    Returns:
        Decoded claims

    Raises:
        UnauthorizedError: If the token is malformed, tampered with,
            expired, or carries no subject
    """
    try:
        payload = jwt.decode(token, settings.auth.SECRET_KEY, algorithms=[settings.auth.ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Rejected expired access token")
        raise UnauthorizedError("Token has expired")
    except JWTError:
        logger.info("Rejected invalid access token")
        raise UnauthorizedError("Could not validate credentials")

    if not payload.get("sub"):
        raise UnauthorizedError("Could not validate credentials")

    return payload
