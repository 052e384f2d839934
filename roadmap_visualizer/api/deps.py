from __future__ import annotations

from typing import Generator

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from roadmap_visualizer.config import settings
from roadmap_visualizer.db.session import SessionLocal
from roadmap_visualizer.services.roadmap_store import RoadmapStore


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> RoadmapStore:
    return RoadmapStore(db)


async def read_upload_body(request: Request) -> bytes:
    """
    Raw request body (YAML upload), bounded by MAX_UPLOAD_BYTES.
    Read in an async dependency so the route itself can stay sync.
    """
    body = await request.body()
    if len(body) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Request body too large")
    return body
