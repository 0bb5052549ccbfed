"""
Todo API endpoints for owner-scoped CRUD.

Every route requires a bearer token; todos owned by other users are
reported as not found.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from taskboard.api.deps import get_current_user
from taskboard.database import get_db
from taskboard.models.todo import TodoStatus
from taskboard.models.user import User
from taskboard.services import todo_service


router = APIRouter(prefix="/todos", tags=["todos"])


# Request/Response models
class CreateTodoRequest(BaseModel):
    """Request model for creating a todo."""
    title: str = Field(..., min_length=1, description="Todo title (1-255 characters after trimming)")
    description: Optional[str] = Field(None, description="Optional details")
    status: TodoStatus = Field(TodoStatus.PENDING, description="Initial status")


class UpdateTodoRequest(BaseModel):
    """Request model for updating a todo. All fields optional."""
    title: Optional[str] = Field(None, min_length=1, description="New title (1-255 characters after trimming)")
    description: Optional[str] = Field(None, description="New description (null clears it)")
    status: Optional[TodoStatus] = Field(None, description="New status")


class TodoResponse(BaseModel):
    """Response model for todo data."""
    id: str
    title: str
    description: Optional[str]
    status: TodoStatus
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TodoSummaryResponse(BaseModel):
    """Per-status counts of the user's todos."""
    PENDING: int
    IN_PROGRESS: int
    DONE: int
    total: int


@router.post("", response_model=TodoResponse, status_code=201)
def create_todo(
    request: CreateTodoRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a todo for the authenticated user.

    Raises:
        400: Invalid todo data
    """
    return todo_service.create_todo(
        db, current_user.id, request.title, request.description, request.status
    )


@router.get("", response_model=List[TodoResponse])
def list_todos(
    status: Optional[TodoStatus] = Query(None, description="Only return todos with this status"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List the authenticated user's todos, most recent first.

    Returns an empty list when nothing matches.
    """
    return todo_service.list_todos(db, current_user.id, status)


@router.get("/summary", response_model=TodoSummaryResponse)
def todo_summary(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Count the authenticated user's todos per status."""
    return todo_service.count_todos_by_status(db, current_user.id)


@router.get("/{todo_id}", response_model=TodoResponse)
def get_todo(
    todo_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get a specific todo.

    Raises:
        404: Todo not found (or owned by another user)
    """
    return todo_service.get_todo(db, current_user.id, todo_id)


@router.put("/{todo_id}", response_model=TodoResponse)
def update_todo(
    todo_id: str,
    request: UpdateTodoRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update an existing todo.

    Only fields present in the body are changed.

    Raises:
        400: Invalid update data or empty body
        404: Todo not found (or owned by another user)
    """
    if not request.model_fields_set:
        raise HTTPException(status_code=400, detail="Must provide at least one field to update (title, description or status)")

    return todo_service.update_todo(
        db,
        current_user.id,
        todo_id,
        title=request.title,
        description=request.description,
        status=request.status,
        fields_set=request.model_fields_set,
    )


@router.delete("/{todo_id}", status_code=204)
def delete_todo(
    todo_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete a todo.

    Returns:
        No content (204)

    Raises:
        404: Todo not found (or owned by another user)
    """
    todo_service.delete_todo(db, current_user.id, todo_id)
    return Response(status_code=204)
