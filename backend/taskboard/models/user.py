"""
User model for todo ownership and authentication.

Stores the login identity and a salted bcrypt hash; the plaintext
password is never persisted.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from taskboard.database import Base


def generate_id() -> str:
    """Generate an opaque primary key."""
    return str(uuid.uuid4())


class User(Base):
    """
    User model for authentication and todo ownership.

    Attributes:
        id: Opaque UUID primary key
        username: Unique username (1-255 chars)
        email: Unique email address, used as the login identifier
        password_hash: bcrypt hash of the user's password
        is_active: Inactive accounts are refused by the auth guard
        created_at: User registration timestamp
        updated_at: Last modification timestamp
        todos: Relationship to user's todos (one-to-many)
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    todos = relationship(
        "Todo",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
