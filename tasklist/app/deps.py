"""Dependency providers wiring the session pool into the orchestrator."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import sessionmaker

from tasklist.app.db import get_session_factory
from tasklist.app.services.orchestrator import TaskOrchestrator


def get_task_orchestrator(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> TaskOrchestrator:
    """Return an orchestrator bound to the process-wide session factory."""
    return TaskOrchestrator(session_factory)
