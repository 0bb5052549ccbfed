"""
Tests for the todo service layer.
"""

import pytest

from taskboard.models.todo import TodoStatus
from taskboard.services import todo_service
from taskboard.services.errors import NotFoundError, ValidationError


class TestCreateTodo:
    """Test todo creation."""

    def test_create_minimal(self, db_session, alice):
        todo = todo_service.create_todo(db_session, alice.id, "Buy milk")

        assert todo.title == "Buy milk"
        assert todo.status == TodoStatus.PENDING
        assert todo.user_id == alice.id

    def test_create_with_all_fields(self, db_session, alice):
        todo = todo_service.create_todo(
            db_session, alice.id, "Write report", "Quarterly numbers", "IN_PROGRESS"
        )

        assert todo.description == "Quarterly numbers"
        assert todo.status == TodoStatus.IN_PROGRESS

    def test_title_is_trimmed(self, db_session, alice):
        todo = todo_service.create_todo(db_session, alice.id, "  Buy milk  ")
        assert todo.title == "Buy milk"

    @pytest.mark.parametrize("title", ["", "   ", "x" * 256])
    def test_invalid_title(self, db_session, alice, title):
        with pytest.raises(ValidationError):
            todo_service.create_todo(db_session, alice.id, title)

        assert todo_service.list_todos(db_session, alice.id) == []

    def test_invalid_status(self, db_session, alice):
        with pytest.raises(ValidationError, match="Status must be one of"):
            todo_service.create_todo(db_session, alice.id, "Buy milk", status="ARCHIVED")

    def test_create_then_get_matches(self, db_session, alice):
        created = todo_service.create_todo(db_session, alice.id, "Buy milk", "2 litres")
        fetched = todo_service.get_todo(db_session, alice.id, created.id)

        for field in ("id", "title", "description", "status", "user_id", "created_at"):
            assert getattr(fetched, field) == getattr(created, field)


class TestOwnership:
    """Foreign todos are indistinguishable from missing ones."""

    def test_get_update_delete_foreign_todo(self, db_session, alice, bob):
        todo = todo_service.create_todo(db_session, alice.id, "Alice only")

        for operation in (
            lambda todo_id: todo_service.get_todo(db_session, bob.id, todo_id),
            lambda todo_id: todo_service.update_todo(db_session, bob.id, todo_id, status="DONE"),
            lambda todo_id: todo_service.delete_todo(db_session, bob.id, todo_id),
        ):
            with pytest.raises(NotFoundError) as foreign:
                operation(todo.id)
            with pytest.raises(NotFoundError) as missing:
                operation("does-not-exist")

            assert str(foreign.value) == f"Todo with ID {todo.id} not found"
            assert str(missing.value) == "Todo with ID does-not-exist not found"

        # Alice's todo is untouched
        still_there = todo_service.get_todo(db_session, alice.id, todo.id)
        assert still_there.status == TodoStatus.PENDING

    def test_list_excludes_other_users(self, db_session, alice, bob):
        todo_service.create_todo(db_session, alice.id, "Alice 1")
        todo_service.create_todo(db_session, alice.id, "Alice 2")

        assert todo_service.list_todos(db_session, bob.id) == []
        assert all(t.user_id == alice.id for t in todo_service.list_todos(db_session, alice.id))


class TestUpdateTodo:
    """Test partial updates."""

    def test_status_only_patch(self, db_session, alice):
        todo = todo_service.create_todo(db_session, alice.id, "A", "keep me")

        todo_service.update_todo(db_session, alice.id, todo.id, status="DONE")
        fetched = todo_service.get_todo(db_session, alice.id, todo.id)

        assert fetched.title == "A"
        assert fetched.description == "keep me"
        assert fetched.status == TodoStatus.DONE

    def test_explicit_null_clears_description(self, db_session, alice):
        todo = todo_service.create_todo(db_session, alice.id, "A", "remove me")

        updated = todo_service.update_todo(
            db_session, alice.id, todo.id, description=None, fields_set={"description"}
        )

        assert updated.description is None
        assert updated.title == "A"

    def test_none_without_fields_set_leaves_field(self, db_session, alice):
        todo = todo_service.create_todo(db_session, alice.id, "A", "stay")

        updated = todo_service.update_todo(db_session, alice.id, todo.id, title="B")

        assert updated.title == "B"
        assert updated.description == "stay"

    def test_updated_at_refreshed(self, db_session, alice):
        todo = todo_service.create_todo(db_session, alice.id, "A")
        before = todo.updated_at

        updated = todo_service.update_todo(db_session, alice.id, todo.id, title="B")

        assert updated.updated_at >= before

    @pytest.mark.parametrize("kwargs", [
        {"title": ""},
        {"title": "   "},
        {"status": "NOPE"},
    ])
    def test_invalid_patch(self, db_session, alice, kwargs):
        todo = todo_service.create_todo(db_session, alice.id, "A")

        with pytest.raises(ValidationError):
            todo_service.update_todo(db_session, alice.id, todo.id, **kwargs)

        assert todo_service.get_todo(db_session, alice.id, todo.id).title == "A"

    def test_null_status_rejected(self, db_session, alice):
        todo = todo_service.create_todo(db_session, alice.id, "A")

        with pytest.raises(ValidationError):
            todo_service.update_todo(db_session, alice.id, todo.id, status=None, fields_set={"status"})


class TestDeleteTodo:
    """Test deletion."""

    def test_delete_twice(self, db_session, alice):
        todo_id = todo_service.create_todo(db_session, alice.id, "A").id

        todo_service.delete_todo(db_session, alice.id, todo_id)

        with pytest.raises(NotFoundError):
            todo_service.delete_todo(db_session, alice.id, todo_id)
        with pytest.raises(NotFoundError):
            todo_service.get_todo(db_session, alice.id, todo_id)


def test_list_filter_by_status_string(db_session, alice):
    todo_service.create_todo(db_session, alice.id, "A")
    todo_service.create_todo(db_session, alice.id, "B", status=TodoStatus.DONE)

    assert [t.title for t in todo_service.list_todos(db_session, alice.id, "PENDING")] == ["A"]
    assert [t.title for t in todo_service.list_todos(db_session, alice.id, "DONE")] == ["B"]


def test_count_todos_by_status(db_session, alice):
    todo_service.create_todo(db_session, alice.id, "A")
    todo_service.create_todo(db_session, alice.id, "B", status="IN_PROGRESS")

    assert todo_service.count_todos_by_status(db_session, alice.id) == {
        "PENDING": 1,
        "IN_PROGRESS": 1,
        "DONE": 0,
        "total": 2,
    }
