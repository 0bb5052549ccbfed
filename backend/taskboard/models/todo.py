"""
Todo model for user-owned task records.

Each todo belongs to exactly one user; the owner is set at creation
and never reassigned.
"""

import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from taskboard.database import Base
from taskboard.models.user import generate_id


class TodoStatus(str, enum.Enum):
    """Lifecycle states of a todo."""
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class Todo(Base):
    """
    Todo model for persisting user tasks.

    Attributes:
        id: Opaque UUID primary key
        title: Short task title (1-255 chars)
        description: Optional free text
        status: One of PENDING, IN_PROGRESS, DONE
        user_id: Foreign key to owner user
        created_at: Creation timestamp
        updated_at: Last modification timestamp
        owner: Relationship to User model
    """
    __tablename__ = "todos"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(TodoStatus, name="todo_status"),
        default=TodoStatus.PENDING,
        nullable=False,
    )
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="todos")

    def __repr__(self):
        return f"<Todo(id={self.id}, title='{self.title}', user_id={self.user_id})>"
