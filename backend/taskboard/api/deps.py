"""
Request dependencies shared by the API routes.

The auth guard resolves the bearer token on every protected request and
injects the authenticated user into the handler.
"""

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.models.user import User
from taskboard.services import auth_service
from taskboard.services.errors import ForbiddenError


# Missing or non-bearer Authorization headers are rejected with 401 here,
# before any handler runs.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to an active user.

    Raises:
        UnauthorizedError: Invalid or expired token, or user gone (401)
        ForbiddenError: Account has been deactivated (403)
    """
    user = auth_service.validate_token(db, token)
    if not user.is_active:
        raise ForbiddenError("Inactive user")
    return user
