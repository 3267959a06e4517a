from __future__ import annotations

import os
import tempfile

# Keep the app's startup hook away from any real database during the test run.
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="tasklist-tests-"), "startup.db"
)

import pytest
from fastapi.testclient import TestClient

from tasklist.app.adapters.repo_sql import SQLAlchemyTaskStore
from tasklist.app.db import get_session_factory, init_db, make_engine, make_session_factory
from tasklist.app.services.orchestrator import TaskOrchestrator


@pytest.fixture()
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'tasks.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture()
def store(session_factory):
    with session_factory() as session:
        yield SQLAlchemyTaskStore(session)


@pytest.fixture()
def orchestrator(session_factory):
    return TaskOrchestrator(session_factory)


@pytest.fixture()
def client(session_factory):
    from tasklist.app.main import app

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
