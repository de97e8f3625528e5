"""
Store wiring: one engine per process, one Session per request.

The Session is the transaction boundary the services rely on; nothing else
in the app holds database state.
"""

import os
from pathlib import Path
from typing import Generator

from dotenv import load_dotenv
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./places.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")


def build_engine(url: str, **engine_kwargs) -> Engine:
    """
    Create an engine for ``url``.

    SQLite URLs get ``check_same_thread=False`` (requests run on a thread
    pool) and file databases get their parent directory created.
    """
    if url.startswith("sqlite"):
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        if ":memory:" not in url:
            Path(url.replace("sqlite:///", "", 1)).parent.mkdir(parents=True, exist_ok=True)
    engine_kwargs.setdefault("echo", SQL_ECHO)
    return create_engine(url, **engine_kwargs)


engine: Engine = build_engine(DATABASE_URL)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def create_tables(bind: Engine) -> None:
    # Models must be imported so they are registered on SQLModel.metadata
    from places_api.models.place import Place  # noqa: F401
    from places_api.models.user import User  # noqa: F401

    SQLModel.metadata.create_all(bind)


def init_db() -> None:
    create_tables(engine)
