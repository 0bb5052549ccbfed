"""
Authentication API endpoints.

Provides registration, email/password login and the current-user lookup.
"""

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from sqlalchemy.orm import Session

from taskboard.api.deps import get_current_user
from taskboard.database import get_db
from taskboard.models.user import User
from taskboard.services import auth_service


router = APIRouter(prefix="/auth", tags=["auth"])


# Request/Response models
class RegisterRequest(BaseModel):
    """Request model for user registration."""
    username: str = Field(..., min_length=1, max_length=255, description="Unique username")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., min_length=6, max_length=128, description="Password (6-128 characters)")


class LoginRequest(BaseModel):
    """Request model for email/password login."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Response model for user data. Never includes the password hash."""
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """Bare OAuth2 token response."""
    access_token: str
    token_type: str = "bearer"


class AuthResponse(TokenResponse):
    """Token plus the authenticated user."""
    user: UserResponse


def _auth_response(result: auth_service.AuthResult) -> AuthResponse:
    return AuthResponse(
        access_token=result.access_token,
        token_type=result.token_type,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    request: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user and return an access token.

    Raises:
        400: Invalid username, email or password
        409: Username or email already registered
    """
    result = auth_service.register(db, request.username, request.email, request.password)
    return _auth_response(result)


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Log in with email and password.

    Raises:
        400: Malformed request
        401: Invalid credentials
    """
    result = auth_service.login(db, request.email, request.password)
    return _auth_response(result)


@router.post("/token", response_model=TokenResponse)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    OAuth2 password flow used by the interactive docs.

    The form's ``username`` field carries the account email.
    """
    result = auth_service.login(db, form_data.username, form_data.password)
    return {"access_token": result.access_token, "token_type": result.token_type}


@router.get("/me", response_model=UserResponse)
def read_current_user(current_user: User = Depends(get_current_user)):
    """Return the authenticated user."""
    return current_user
