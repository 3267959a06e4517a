"""Port interface for task persistence (store boundary)."""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, runtime_checkable


class StoreResult(str, Enum):
    """Outcome of a single mutating store call.

    Only ``OK`` is truthy, so callers interested in plain pass/fail can
    use the result as a bool while logs and the JSON API can still tell
    a missing row apart from a failed write.
    """

    OK = "ok"
    NOT_FOUND = "not_found"
    STORAGE_ERROR = "storage_error"

    def __bool__(self) -> bool:
        return self is StoreResult.OK


@runtime_checkable
class ITaskStore(Protocol):
    """Task store abstraction for list/insert/toggle/delete."""

    def list_all(self) -> list[Any]:
        """Return every task, most recently created first."""

    def insert(self, description: str) -> StoreResult:
        """Persist a new, not yet completed task."""

    def toggle_by_id(self, task_id: int) -> StoreResult:
        """Flip the completed flag of one task."""

    def delete_by_id(self, task_id: int) -> StoreResult:
        """Remove one task."""
