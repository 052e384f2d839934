# Shared fixtures: in-memory SQLite schema + corpus builders
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from roadmap_visualizer.db.session import init_db
from roadmap_visualizer.schemas.roadmap import ExternalDependency, Roadmap, RoadmapItem, StoredRoadmap

logger = logging.getLogger(__name__)


@pytest.fixture
def engine():
    """One in-memory database per test, shared by every connection (StaticPool)."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(eng)
    logger.info("test-bootstrap: schema ensured")
    yield eng
    eng.dispose()


@pytest.fixture
def db_session(engine) -> Session:
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    db = TestSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_item() -> Callable[..., RoadmapItem]:
    def _make(
        item_id: str,
        name: Optional[str] = None,
        status: str = "planned",
        dependencies: Iterable[str] = (),
        external: Iterable[dict] = (),
    ) -> RoadmapItem:
        return RoadmapItem(
            id=item_id,
            name=name or f"Item {item_id}",
            start="2025-Q1",
            end="2025-Q2",
            status=status,
            dependencies=list(dependencies),
            external_dependencies=[ExternalDependency(**e) for e in external],
        )

    return _make


@pytest.fixture
def make_stored() -> Callable[..., StoredRoadmap]:
    def _make(roadmap_id: str, name: str, items, service_line: str = "Infrastructure") -> StoredRoadmap:
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        return StoredRoadmap(
            id=roadmap_id,
            roadmap=Roadmap(name=name, service_line=service_line, items=list(items)),
            created_at=now,
            updated_at=now,
            file_name=f"{roadmap_id}.yaml",
        )

    return _make
