# roadmap_visualizer/schemas/roadmap.py
"""Roadmap document model + intra-document validation.

A roadmap is uploaded as a single YAML document wrapped in a ``roadmap:`` key.
Fields are parsed leniently (missing scalars become "") so that
``validate_roadmap`` can report the first violated rule with a stable message
instead of a pydantic error dump.

No storage or HTTP concerns live here; the parser and the store import these.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoadmapValidationError(ValueError):
    """Raised when a roadmap document violates an ingestion rule."""


class ItemStatus(str, Enum):
    """Lifecycle status of a roadmap item."""
    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class Criticality(str, Enum):
    """How hard an external dependency blocks the dependent item."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


VALID_STATUSES = frozenset(s.value for s in ItemStatus)
VALID_CRITICALITIES = frozenset(c.value for c in Criticality)


def _scalar_to_str(v: Any) -> Any:
    """Non-string scalars (`id=7`, a `date`, a bool) become text; documents never carry typed values."""
    if v is None:
        return ""
    if isinstance(v, bool):
        return str(v).lower()
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    if isinstance(v, (int, float)):
        return str(v)
    return v


def _optional_scalar_to_str(v: Any) -> Any:
    return None if v is None else _scalar_to_str(v)


class ExternalDependency(BaseModel):
    """Reference to an item in another roadmap, by roadmap ID or roadmap name."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    target_roadmap_name: str = Field(default="", alias="roadmap")
    target_roadmap_id: str = Field(default="", alias="roadmap_id")
    target_item_id: str = Field(default="", alias="item")
    reason: Optional[str] = None
    criticality: Optional[str] = None

    @field_validator("target_roadmap_name", "target_roadmap_id", "target_item_id", mode="before")
    @classmethod
    def to_str(cls, v):
        v = _scalar_to_str(v)
        # whitespace-only counts as not declared
        return "" if isinstance(v, str) and not v.strip() else v

    @field_validator("reason", mode="before")
    @classmethod
    def optional_to_str(cls, v):
        return _optional_scalar_to_str(v)

    @field_validator("criticality", mode="before")
    @classmethod
    def blank_criticality_is_none(cls, v):
        if v is None or str(v).strip() == "":
            return None
        return str(v).strip()


class RoadmapItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    name: str = ""
    start: str = ""  # date or quarter label, never interpreted
    end: str = ""
    status: str = ""
    description: Optional[str] = None
    notes: Optional[str] = None
    dependencies: List[str] = Field(default_factory=list)
    external_dependencies: List[ExternalDependency] = Field(default_factory=list)

    @field_validator("id", "name", "start", "end", "status", mode="before")
    @classmethod
    def to_str(cls, v):
        return _scalar_to_str(v)

    @field_validator("description", "notes", mode="before")
    @classmethod
    def optional_to_str(cls, v):
        return _optional_scalar_to_str(v)

    @field_validator("dependencies", mode="before")
    @classmethod
    def dependency_ids_to_str(cls, v):
        if v is None:
            return []
        if isinstance(v, list):
            return [_scalar_to_str(x) for x in v]
        return v

    @field_validator("external_dependencies", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return [] if v is None else v


class Roadmap(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    service_line: str = ""
    owner: Optional[str] = None
    notes: Optional[str] = None
    items: List[RoadmapItem] = Field(default_factory=list)

    @field_validator("name", "service_line", mode="before")
    @classmethod
    def to_str(cls, v):
        return _scalar_to_str(v)

    @field_validator("owner", "notes", mode="before")
    @classmethod
    def optional_to_str(cls, v):
        return _optional_scalar_to_str(v)

    @field_validator("items", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return [] if v is None else v


class RoadmapFile(BaseModel):
    """Top-level shape of an uploaded YAML document."""
    model_config = ConfigDict(extra="ignore")

    roadmap: Roadmap = Field(default_factory=Roadmap)

    @field_validator("roadmap", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return {} if v is None else v


class StoredRoadmap(BaseModel):
    """A validated roadmap as held by the store, with its assigned RoadmapID."""
    id: str
    roadmap: Roadmap
    created_at: datetime
    updated_at: datetime
    file_name: str = ""


def _blank(v: Optional[str]) -> bool:
    return v is None or str(v).strip() == ""


def validate_item(item: RoadmapItem) -> None:
    """Check one item's required fields, status, and external dependency shapes.

    Raises RoadmapValidationError with the first problem found.
    """
    if _blank(item.id):
        raise RoadmapValidationError("item id is required")
    if _blank(item.name):
        raise RoadmapValidationError("item name is required")
    if _blank(item.start):
        raise RoadmapValidationError("item start is required")
    if _blank(item.end):
        raise RoadmapValidationError("item end is required")
    if item.status not in VALID_STATUSES:
        raise RoadmapValidationError(
            f"invalid status: {item.status} (must be planned, in-progress, completed, or blocked)"
        )

    for i, ext in enumerate(item.external_dependencies):
        if _blank(ext.target_roadmap_name) and _blank(ext.target_roadmap_id):
            raise RoadmapValidationError(
                f"external dependency {i}: either roadmap name or roadmap_id is required"
            )
        if _blank(ext.target_item_id):
            raise RoadmapValidationError(f"external dependency {i}: item id is required")
        if ext.criticality is not None and ext.criticality not in VALID_CRITICALITIES:
            raise RoadmapValidationError(
                f"external dependency {i}: invalid criticality '{ext.criticality}' "
                "(must be low, medium, high, or critical)"
            )


def validate_roadmap(roadmap: Roadmap) -> None:
    """
    Enforce the ingestion rules for a single roadmap document.

    Rules are checked in order and the first violation is raised:
    1. roadmap name present
    2. service_line present
    3. at least one item
    4. per item (declaration order): required fields, status, external dependency shape
    5. item IDs unique within the roadmap
    6. internal dependencies name a sibling item

    Cross-roadmap references are NOT checked here; see services.dependency_resolver.
    """
    if _blank(roadmap.name):
        raise RoadmapValidationError("roadmap name is required")
    if _blank(roadmap.service_line):
        raise RoadmapValidationError("service_line is required")
    if not roadmap.items:
        raise RoadmapValidationError("roadmap must have at least one item")

    for index, item in enumerate(roadmap.items):
        try:
            validate_item(item)
        except RoadmapValidationError as e:
            raise RoadmapValidationError(f"item {index}: {e}") from e

    item_ids: Set[str] = set()
    for item in roadmap.items:
        if item.id in item_ids:
            raise RoadmapValidationError(f"duplicate item id: {item.id}")
        item_ids.add(item.id)

    for item in roadmap.items:
        for dep_id in item.dependencies:
            if dep_id not in item_ids:
                raise RoadmapValidationError(f"item {item.id}: dependency {dep_id} does not exist")


__all__ = [
    "RoadmapValidationError",
    "ItemStatus",
    "Criticality",
    "VALID_STATUSES",
    "VALID_CRITICALITIES",
    "ExternalDependency",
    "RoadmapItem",
    "Roadmap",
    "RoadmapFile",
    "StoredRoadmap",
    "validate_item",
    "validate_roadmap",
]
