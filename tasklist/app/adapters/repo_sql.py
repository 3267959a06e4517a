import logging
from typing import List

from sqlalchemy import not_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tasklist.app.models import Task
from tasklist.ports.task_store import ITaskStore, StoreResult

logger = logging.getLogger(__name__)

# INTEGER PRIMARY KEY is a signed 64-bit value
MIN_TASK_ID = -(2**63)
MAX_TASK_ID = 2**63 - 1


class SQLAlchemyTaskStore(ITaskStore):
    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[Task]:
        # Errors propagate; there is no failure result for listing
        return self.session.query(Task).order_by(Task.id.desc()).all()

    def insert(self, description: str) -> StoreResult:
        task = Task(description=description, completed=False)
        try:
            self.session.add(task)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("insert failed", extra={"op": "insert"})
            return StoreResult.STORAGE_ERROR
        logger.info("inserted task", extra={"task": task.id, "op": "insert"})
        return StoreResult.OK

    def toggle_by_id(self, task_id: int) -> StoreResult:
        return self._apply(
            "toggle",
            task_id,
            lambda query: query.update(
                {Task.completed: not_(Task.completed)}, synchronize_session=False
            ),
        )

    def delete_by_id(self, task_id: int) -> StoreResult:
        return self._apply(
            "delete",
            task_id,
            lambda query: query.delete(synchronize_session=False),
        )

    def _apply(self, op: str, task_id: int, statement) -> StoreResult:
        """Run one UPDATE/DELETE against a single id and commit it."""

        if not MIN_TASK_ID <= task_id <= MAX_TASK_ID:
            logger.info("%s id out of range", op, extra={"task": task_id, "op": op})
            return StoreResult.NOT_FOUND
        query = self.session.query(Task).filter(Task.id == task_id)
        try:
            matched = statement(query)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("%s failed", op, extra={"task": task_id, "op": op})
            return StoreResult.STORAGE_ERROR
        if not matched:
            logger.info("%s matched no rows", op, extra={"task": task_id, "op": op})
            return StoreResult.NOT_FOUND
        logger.info("%s applied", op, extra={"task": task_id, "op": op})
        return StoreResult.OK
