from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from tasklist.app.config import get_settings

Base = declarative_base()


def make_engine(database_url: str, echo: bool = False) -> Engine:
    # SQLite requires check_same_thread=False for usage across threads
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args, echo=echo)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False)


@lru_cache()
def get_engine() -> Engine:
    settings = get_settings()
    return make_engine(settings.database_url, echo=settings.database_echo)


@lru_cache()
def get_session_factory() -> sessionmaker:
    return make_session_factory(get_engine())


def init_db(engine: Engine) -> None:
    """Create the tasks relation if it does not exist yet (idempotent)."""

    from tasklist.app import models  # noqa: F401  registers Task on Base.metadata

    Base.metadata.create_all(bind=engine)


def dispose_engine() -> None:
    """Release every pooled connection; called on process shutdown."""

    get_engine().dispose()
