from __future__ import annotations

import pytest

from tasklist.app.core.errors import TodoValidationError
from tasklist.app.schemas import FlashMessage, TodoForm
from tasklist.app.services.orchestrator import (
    MSG_ADDED,
    MSG_DELETE_FAILED,
    MSG_DELETED,
    MSG_DESCRIPTION_EMPTY,
    MSG_SERVER_FAILED,
    MSG_TOGGLE_FAILED,
    TaskOrchestrator,
    validate_todo,
)
from tasklist.ports.task_store import StoreResult


def _rows(orchestrator):
    return [(t.id, t.description, t.completed) for t in orchestrator.list_tasks()]


class FakeSession:
    def __init__(self):
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False


class FakeStore:
    def __init__(self, result=StoreResult.OK, tasks=None, list_error=None):
        self.result = result
        self.tasks = tasks or []
        self.list_error = list_error
        self.calls = []

    def list_all(self):
        if self.list_error:
            raise self.list_error
        return self.tasks

    def insert(self, description):
        self.calls.append(("insert", description))
        return self.result

    def toggle_by_id(self, task_id):
        self.calls.append(("toggle", task_id))
        return self.result

    def delete_by_id(self, task_id):
        self.calls.append(("delete", task_id))
        return self.result


def _fake_orchestrator(store):
    sessions = []

    def session_factory():
        session = FakeSession()
        sessions.append(session)
        return session

    return TaskOrchestrator(session_factory, store_factory=lambda _session: store), sessions


def test_validate_todo_rejects_only_exact_empty() -> None:
    with pytest.raises(TodoValidationError) as excinfo:
        validate_todo(TodoForm(description=""))
    assert excinfo.value.message == MSG_DESCRIPTION_EMPTY
    assert excinfo.value.field == "description"

    assert validate_todo(TodoForm(description="   ")).description == "   "
    assert validate_todo(TodoForm(description="buy milk")).description == "buy milk"


def test_create_adds_task(orchestrator) -> None:
    outcome = orchestrator.create(TodoForm(description="buy milk"))

    assert outcome.ok
    assert outcome.message == MSG_ADDED
    assert outcome.flash_name == "success"
    assert outcome.context is None
    assert _rows(orchestrator) == [(1, "buy milk", False)]


def test_create_empty_never_touches_storage() -> None:
    def session_factory():
        pytest.fail("validation failure must not acquire a session")

    outcome = TaskOrchestrator(session_factory).create(TodoForm(description=""))

    assert not outcome.ok
    assert outcome.message == MSG_DESCRIPTION_EMPTY
    assert outcome.result is None
    assert outcome.flash_name == "error"


def test_create_empty_leaves_list_unchanged(orchestrator) -> None:
    orchestrator.create(TodoForm(description="existing"))
    before = _rows(orchestrator)

    orchestrator.create(TodoForm(description=""))

    assert _rows(orchestrator) == before


def test_create_storage_failure_reports_server_error() -> None:
    store = FakeStore(result=StoreResult.STORAGE_ERROR)
    orchestrator, sessions = _fake_orchestrator(store)

    outcome = orchestrator.create(TodoForm(description="x"))

    assert not outcome.ok
    assert outcome.message == MSG_SERVER_FAILED
    assert outcome.result is StoreResult.STORAGE_ERROR
    assert outcome.context is None
    assert store.calls == [("insert", "x")]
    assert all(s.closed for s in sessions)


def test_toggle_success_has_no_message(orchestrator) -> None:
    orchestrator.create(TodoForm(description="walk dog"))

    outcome = orchestrator.toggle(1)

    assert outcome.ok
    assert outcome.message is None
    assert outcome.context is None
    assert _rows(orchestrator) == [(1, "walk dog", True)]


def test_toggle_twice_restores_completed(orchestrator) -> None:
    orchestrator.create(TodoForm(description="walk dog"))

    orchestrator.toggle(1)
    orchestrator.toggle(1)

    assert _rows(orchestrator) == [(1, "walk dog", False)]


def test_toggle_missing_renders_error_with_current_list(orchestrator) -> None:
    orchestrator.create(TodoForm(description="a"))
    orchestrator.create(TodoForm(description="b"))

    outcome = orchestrator.toggle(404)

    assert not outcome.ok
    assert outcome.message == MSG_TOGGLE_FAILED
    assert outcome.result is StoreResult.NOT_FOUND
    assert outcome.context.msg == FlashMessage(name="error", msg=MSG_TOGGLE_FAILED)
    assert [t.description for t in outcome.context.tasks] == ["b", "a"]


def test_delete_existing(orchestrator) -> None:
    orchestrator.create(TodoForm(description="a"))
    orchestrator.create(TodoForm(description="b"))

    outcome = orchestrator.delete(1)

    assert outcome.ok
    assert outcome.message == MSG_DELETED
    assert _rows(orchestrator) == [(2, "b", False)]


def test_delete_missing_fails_and_keeps_list(orchestrator) -> None:
    orchestrator.create(TodoForm(description="a"))

    outcome = orchestrator.delete(7)

    assert not outcome.ok
    assert outcome.message == MSG_DELETE_FAILED
    assert outcome.result is StoreResult.NOT_FOUND
    assert [t.id for t in outcome.context.tasks] == [1]
    assert _rows(orchestrator) == [(1, "a", False)]


def test_delete_storage_failure_keeps_reason() -> None:
    store = FakeStore(result=StoreResult.STORAGE_ERROR)
    orchestrator, sessions = _fake_orchestrator(store)

    outcome = orchestrator.delete(3)

    assert outcome.message == MSG_DELETE_FAILED
    assert outcome.result is StoreResult.STORAGE_ERROR
    assert outcome.context.tasks == []
    assert len(sessions) == 1 and sessions[0].closed


def test_index_carries_flash_and_tasks(orchestrator) -> None:
    orchestrator.create(TodoForm(description="read book"))
    flash = FlashMessage(name="success", msg=MSG_ADDED)

    context = orchestrator.index(flash)

    assert context.msg == flash
    assert [t.description for t in context.tasks] == ["read book"]
    assert orchestrator.index().msg is None


def test_list_failure_propagates_and_releases_session() -> None:
    store = FakeStore(list_error=RuntimeError("database is gone"))
    orchestrator, sessions = _fake_orchestrator(store)

    with pytest.raises(RuntimeError):
        orchestrator.index()

    assert sessions[0].closed


def test_buy_milk_scenario(orchestrator) -> None:
    orchestrator.create(TodoForm(description="buy milk"))
    assert _rows(orchestrator) == [(1, "buy milk", False)]

    orchestrator.toggle(1)
    assert _rows(orchestrator) == [(1, "buy milk", True)]

    orchestrator.delete(1)
    assert _rows(orchestrator) == []
