"""
Todo service layer for owner-scoped todo operations.

Validates input, maps missing or foreign todos to NotFoundError and
delegates storage to TodoRepository.
"""

import logging
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from taskboard.config import get_settings
from taskboard.models.todo import Todo, TodoStatus
from taskboard.repositories.todo_repository import TodoRepository
from taskboard.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

settings = get_settings()


def validate_title(title: str) -> tuple[bool, Optional[str]]:
    """
    Validate todo title.

    Args:
        title: Title to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not title or not title.strip():
        return False, "Title is required"

    if len(title.strip()) > settings.todo.TITLE_MAX_LENGTH:
        return False, f"Title must not exceed {settings.todo.TITLE_MAX_LENGTH} characters"

    return True, None


def parse_status(status: Union[str, TodoStatus, None]) -> Optional[TodoStatus]:
    """
    Convert a status value to TodoStatus.

    Raises:
        ValidationError: If the value is not a known status
    """
    if status is None or isinstance(status, TodoStatus):
        return status
    try:
        return TodoStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in TodoStatus)
        raise ValidationError(f"Status must be one of: {allowed}")


def _not_found(todo_id: str) -> NotFoundError:
    return NotFoundError(f"Todo with ID {todo_id} not found")


def create_todo(
    db: Session,
    user_id: str,
    title: str,
    description: Optional[str] = None,
    status: Union[str, TodoStatus, None] = None,
) -> Todo:
    """
    Create a new todo owned by the user.

    Args:
        db: Database session
        user_id: Owner user ID
        title: Todo title
        description: Optional free text
        status: Initial status, PENDING if omitted

    Returns:
        Created Todo object

    Raises:
        ValidationError: If the title or status is invalid
    """
    is_valid, error_message = validate_title(title)
    if not is_valid:
        raise ValidationError(error_message)

    todo = TodoRepository(db).create(
        user_id=user_id,
        title=title.strip(),
        description=description,
        status=parse_status(status) or TodoStatus.PENDING,
    )
    logger.info(f"Created todo {todo.id} for user {user_id}")
    return todo


def list_todos(
    db: Session,
    user_id: str,
    status: Union[str, TodoStatus, None] = None,
) -> List[Todo]:
    """
    List the user's todos, newest first, optionally filtered by status.

    Returns an empty list when nothing matches.
    """
    return TodoRepository(db).list_for_owner(user_id, parse_status(status))


def get_todo(db: Session, user_id: str, todo_id: str) -> Todo:
    """
    Get one of the user's todos.

    Raises:
        NotFoundError: If the todo does not exist or belongs to someone else
    """
    todo = TodoRepository(db).find_by_id_for_owner(user_id, todo_id)
    if todo is None:
        raise _not_found(todo_id)
    return todo


def update_todo(
    db: Session,
    user_id: str,
    todo_id: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    status: Union[str, TodoStatus, None] = None,
    fields_set: Optional[Iterable[str]] = None,
) -> Todo:
    """
    Update an existing todo.

    Only the provided fields change. By default a field counts as provided
    when it is not None; pass ``fields_set`` to apply explicit nulls (used
    to clear the description).

    Args:
        db: Database session
        user_id: Owner user ID
        todo_id: Todo ID to update
        title: New title (optional)
        description: New description (optional)
        status: New status (optional)
        fields_set: Names of the fields the caller supplied

    Returns:
        Updated Todo object

    Raises:
        ValidationError: If a supplied field is invalid
        NotFoundError: If the todo does not exist or belongs to someone else
    """
    values = {"title": title, "description": description, "status": status}
    if fields_set is None:
        provided = {key for key, value in values.items() if value is not None}
    else:
        provided = set(fields_set) & set(values)

    patch = {}
    if "title" in provided:
        is_valid, error_message = validate_title(title)
        if not is_valid:
            raise ValidationError(error_message)
        patch["title"] = title.strip()

    if "description" in provided:
        patch["description"] = description

    if "status" in provided:
        if status is None:
            raise ValidationError("Status cannot be null")
        patch["status"] = parse_status(status)

    todo = TodoRepository(db).update_partial(user_id, todo_id, patch)
    if todo is None:
        raise _not_found(todo_id)

    logger.info(f"Updated todo {todo_id} fields={sorted(patch)}")
    return todo


def delete_todo(db: Session, user_id: str, todo_id: str) -> None:
    """
    Delete one of the user's todos.

    Raises:
        NotFoundError: If the todo does not exist, belongs to someone else,
            or was already deleted
    """
    if not TodoRepository(db).delete_for_owner(user_id, todo_id):
        raise _not_found(todo_id)
    logger.info(f"Deleted todo {todo_id}")


def count_todos_by_status(db: Session, user_id: str) -> Dict[str, int]:
    """
    Count the user's todos per status.

    Returns:
        Mapping with every status name plus ``total``
    """
    counts = TodoRepository(db).count_by_status(user_id)
    summary = {status.value: counts.get(status, 0) for status in TodoStatus}
    summary["total"] = sum(summary.values())
    return summary
