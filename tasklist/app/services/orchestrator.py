"""Validation and delegation between the HTTP layer and the task store.

Each public method acquires exactly one session from the injected factory
and releases it on every exit path, so a request never holds more than one
pooled connection.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from sqlalchemy.orm import Session

from tasklist.app.adapters.repo_sql import SQLAlchemyTaskStore
from tasklist.app.core.errors import TodoValidationError
from tasklist.app.schemas import FlashMessage, IndexContext, TaskOut, TodoForm, ValidatedTodo
from tasklist.ports.task_store import ITaskStore, StoreResult

logger = logging.getLogger(__name__)

MSG_DESCRIPTION_EMPTY = "Description cannot be empty."
MSG_ADDED = "Todo successfully added."
MSG_SERVER_FAILED = "Whoops! The server failed."
MSG_TOGGLE_FAILED = "Couldn't toggle task."
MSG_DELETED = "Todo was deleted."
MSG_DELETE_FAILED = "Couldn't delete task."


def validate_todo(form: TodoForm) -> ValidatedTodo:
    """Turn a raw form into a storable todo.

    Only the exact empty string is rejected; whitespace-only descriptions
    are stored as given.
    """

    if form.description == "":
        raise TodoValidationError(MSG_DESCRIPTION_EMPTY, field="description")
    return ValidatedTodo(description=form.description)


@dataclass
class Outcome:
    ok: bool
    message: Optional[str] = None
    # None for validation failures, which never reach the store
    result: Optional[StoreResult] = None
    # Set when the failure is re-rendered in place instead of redirected
    context: Optional[IndexContext] = None

    @property
    def flash_name(self) -> str:
        return "success" if self.ok else "error"


class TaskOrchestrator:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        store_factory: Callable[[Session], ITaskStore] = SQLAlchemyTaskStore,
    ):
        self._session_factory = session_factory
        self._store_factory = store_factory

    @contextmanager
    def _store(self) -> Iterator[ITaskStore]:
        with self._session_factory() as session:
            yield self._store_factory(session)

    @staticmethod
    def _context(store: ITaskStore, msg: Optional[FlashMessage]) -> IndexContext:
        tasks = [TaskOut.model_validate(task) for task in store.list_all()]
        return IndexContext(msg=msg, tasks=tasks)

    def index(self, flash: Optional[FlashMessage] = None) -> IndexContext:
        with self._store() as store:
            return self._context(store, flash)

    def list_tasks(self) -> list[TaskOut]:
        return self.index().tasks

    def create(self, form: TodoForm) -> Outcome:
        try:
            todo = validate_todo(form)
        except TodoValidationError as exc:
            logger.info("rejected todo: %s", exc.message, extra={"op": "create"})
            return Outcome(ok=False, message=exc.message)

        with self._store() as store:
            result = store.insert(todo.description)
        if result:
            return Outcome(ok=True, message=MSG_ADDED, result=result)
        return Outcome(ok=False, message=MSG_SERVER_FAILED, result=result)

    def toggle(self, task_id: int) -> Outcome:
        with self._store() as store:
            result = store.toggle_by_id(task_id)
            if result:
                return Outcome(ok=True, result=result)
            logger.warning(
                "toggle failed: %s", result.value, extra={"task": task_id, "op": "toggle"}
            )
            error = FlashMessage(name="error", msg=MSG_TOGGLE_FAILED)
            return Outcome(
                ok=False,
                message=MSG_TOGGLE_FAILED,
                result=result,
                context=self._context(store, error),
            )

    def delete(self, task_id: int) -> Outcome:
        with self._store() as store:
            result = store.delete_by_id(task_id)
            if result:
                return Outcome(ok=True, message=MSG_DELETED, result=result)
            logger.warning(
                "delete failed: %s", result.value, extra={"task": task_id, "op": "delete"}
            )
            error = FlashMessage(name="error", msg=MSG_DELETE_FAILED)
            return Outcome(
                ok=False,
                message=MSG_DELETE_FAILED,
                result=result,
                context=self._context(store, error),
            )
