# roadmap_visualizer/db/models/roadmap_document.py

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String, Text

from roadmap_visualizer.db.base import Base


class RoadmapDocument(Base):
    """One uploaded roadmap. Immutable after insert: rows are only created or deleted."""

    __tablename__ = "roadmap_documents"

    # RoadmapID (uuid4), distinct from the non-unique roadmap name
    id = Column(String(36), primary_key=True)

    name = Column(String(255), index=True, nullable=False)
    service_line = Column(String(255), nullable=False)
    file_name = Column(String(255), nullable=False, default="")

    # Validated document in upload shape + the YAML text it was serialized to
    document_json = Column(JSON, nullable=False)
    document_yaml = Column(Text, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
