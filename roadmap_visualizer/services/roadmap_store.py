# roadmap_visualizer/services/roadmap_store.py
"""
Storage collaborator for roadmap documents.

Owns all synchronization: create, delete and the full-corpus snapshot read
share one process-wide lock, and each write is a single DB transaction.
Engine functions receive the materialized snapshot from list_all_documents()
and never read the store themselves.
"""
from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from roadmap_visualizer.db.models.roadmap_document import RoadmapDocument
from roadmap_visualizer.parsers.yaml_parser import roadmap_to_document, serialize_roadmap
from roadmap_visualizer.schemas.roadmap import Roadmap, RoadmapFile, StoredRoadmap

logger = logging.getLogger(__name__)

_corpus_lock = threading.RLock()


class RoadmapNotFoundError(LookupError):
    """Raised when a RoadmapID has no stored document."""


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def to_stored_roadmap(doc: RoadmapDocument) -> StoredRoadmap:
    """Materialize an ORM row into a detached pydantic value."""
    return StoredRoadmap(
        id=doc.id,  # type: ignore[arg-type]
        roadmap=RoadmapFile.model_validate(doc.document_json).roadmap,
        created_at=_as_utc(doc.created_at),  # type: ignore[arg-type]
        updated_at=_as_utc(doc.updated_at),  # type: ignore[arg-type]
        file_name=doc.file_name or "",  # type: ignore[arg-type]
    )


class RoadmapStore:
    """
    Create / get / list / delete for already-validated roadmaps.
    There is no update: a document is immutable once stored.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, roadmap: Roadmap, file_name: str) -> StoredRoadmap:
        """Store a validated roadmap under a freshly assigned RoadmapID."""
        now = datetime.now(timezone.utc)
        doc = RoadmapDocument(
            id=str(uuid.uuid4()),
            name=roadmap.name,
            service_line=roadmap.service_line,
            file_name=file_name,
            document_json=roadmap_to_document(roadmap),
            document_yaml=serialize_roadmap(roadmap),
            created_at=now,
            updated_at=now,
        )

        with _corpus_lock:
            try:
                self.db.add(doc)
                self.db.commit()
            except Exception:
                self.db.rollback()
                logger.exception("roadmaps.create.failed", extra={"roadmap_name": roadmap.name, "file_name": file_name})
                raise
            self.db.refresh(doc)

        logger.info(
            "roadmaps.create.done",
            extra={"roadmap_id": doc.id, "roadmap_name": roadmap.name, "file_name": file_name},
        )
        return to_stored_roadmap(doc)

    def get(self, roadmap_id: str) -> StoredRoadmap:
        with _corpus_lock:
            doc = self.db.get(RoadmapDocument, roadmap_id)
            if doc is None:
                raise RoadmapNotFoundError("roadmap not found")
            return to_stored_roadmap(doc)

    def list_all_documents(self) -> List[StoredRoadmap]:
        """
        Full corpus snapshot, fully materialized, ordered by created_at then id.
        The returned list is detached from the session and safe to hand to engine functions.
        """
        stmt = select(RoadmapDocument).order_by(RoadmapDocument.created_at, RoadmapDocument.id)
        with _corpus_lock:
            docs = self.db.execute(stmt).scalars().all()
            return [to_stored_roadmap(d) for d in docs]

    def delete(self, roadmap_id: str) -> None:
        with _corpus_lock:
            doc = self.db.get(RoadmapDocument, roadmap_id)
            if doc is None:
                raise RoadmapNotFoundError("roadmap not found")
            try:
                self.db.delete(doc)
                self.db.commit()
            except Exception:
                self.db.rollback()
                logger.exception("roadmaps.delete.failed", extra={"roadmap_id": roadmap_id})
                raise

        logger.info("roadmaps.delete.done", extra={"roadmap_id": roadmap_id})


__all__ = ["RoadmapNotFoundError", "RoadmapStore", "to_stored_roadmap"]
