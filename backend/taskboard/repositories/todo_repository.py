"""
Owner-scoped persistence for todos.

Every read and write filters on both the todo id and the owner id inside
the SQL statement itself, so a todo belonging to another user is never
loaded, changed or removed.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from taskboard.models.todo import Todo, TodoStatus

UPDATABLE_FIELDS = ("title", "description", "status")


class TodoRepository:
    """Todo storage bound to a database session."""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        user_id: str,
        title: str,
        description: Optional[str] = None,
        status: TodoStatus = TodoStatus.PENDING,
    ) -> Todo:
        todo = Todo(
            title=title,
            description=description,
            status=status,
            user_id=user_id,
        )
        self.db.add(todo)
        self.db.commit()
        self.db.refresh(todo)
        return todo

    def find_by_id_for_owner(self, user_id: str, todo_id: str) -> Optional[Todo]:
        return self.db.execute(
            select(Todo).where(Todo.id == todo_id, Todo.user_id == user_id)
        ).scalar_one_or_none()

    def list_for_owner(self, user_id: str, status: Optional[TodoStatus] = None) -> List[Todo]:
        """List a user's todos, most recently created first."""
        stmt = select(Todo).where(Todo.user_id == user_id)
        if status is not None:
            stmt = stmt.where(Todo.status == status)
        stmt = stmt.order_by(Todo.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def count_by_status(self, user_id: str) -> Dict[TodoStatus, int]:
        rows = self.db.execute(
            select(Todo.status, func.count(Todo.id))
            .where(Todo.user_id == user_id)
            .group_by(Todo.status)
        ).all()
        return {status: count for status, count in rows}

    def update_partial(self, user_id: str, todo_id: str, patch: Dict[str, Any]) -> Optional[Todo]:
        """
        Apply the given fields to an owned todo.

        Returns:
            The refreshed Todo, or None if no todo with that id is owned
            by the user
        """
        values = {key: value for key, value in patch.items() if key in UPDATABLE_FIELDS}
        # Always touch the row so updated_at moves even for a no-op patch
        values["updated_at"] = datetime.utcnow()

        result = self.db.execute(
            update(Todo)
            .where(Todo.id == todo_id, Todo.user_id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            return None

        self.db.commit()
        # Expire any identity-map copy so the reload sees the new row
        self.db.expire_all()
        return self.find_by_id_for_owner(user_id, todo_id)

    def delete_for_owner(self, user_id: str, todo_id: str) -> bool:
        result = self.db.execute(
            delete(Todo)
            .where(Todo.id == todo_id, Todo.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            return False

        self.db.commit()
        return True
