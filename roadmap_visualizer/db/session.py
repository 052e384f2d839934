# roadmap_visualizer/db/session.py

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from roadmap_visualizer.config import settings  # expects DATABASE_URL


def _engine_kwargs(database_url: str) -> dict:
    # SQLite connections are shared across FastAPI's threadpool workers
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {}


engine = create_engine(settings.DATABASE_URL, future=True, **_engine_kwargs(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_db(bind: Engine = engine) -> None:
    """Create the SQLite data directory (if any) and all tables. Safe to call repeatedly."""
    from roadmap_visualizer.db.base import Base

    url = bind.url
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)

    Base.metadata.create_all(bind=bind)
