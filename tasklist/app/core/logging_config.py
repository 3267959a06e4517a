import logging
import os
from typing import Optional

# Fields passed through ``extra=`` by the store and the orchestrator
TASK_LOG_FIELDS = ("op", "task")

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(op)s task=%(task)s] %(message)s"

_CONFIGURED = False


class TaskFieldsFilter(logging.Filter):
    """Give records from uvicorn and other libraries the task log fields."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key in TASK_LOG_FIELDS:
            if not hasattr(record, key):
                setattr(record, key, "-")
        return True


def configure_logging(level: Optional[str] = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = (level or os.getenv("APP_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO").upper()
    resolved_level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.addFilter(TaskFieldsFilter())
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(resolved_level)

    # uvicorn installs its own handlers; route everything through ours
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True

    _CONFIGURED = True
