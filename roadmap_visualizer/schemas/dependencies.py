# roadmap_visualizer/schemas/dependencies.py
"""
Derived (never persisted) records produced by the dependency engine.
Handed to the API layer / audit job for serialization.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from roadmap_visualizer.schemas.roadmap import ExternalDependency


class ExternalDependencyValidation(BaseModel):
    """Outcome of resolving one declared external dependency."""
    model_config = ConfigDict(frozen=True)

    source_reference: str  # "<roadmap name>:<item id>"
    target_reference: str  # "<declared roadmap name or id>:<item id>"
    valid: bool
    error: Optional[str] = None


class DependentEdge(BaseModel):
    """An item in another roadmap that declares a dependency on the queried roadmap."""
    model_config = ConfigDict(frozen=True)

    source_roadmap_id: str
    source_roadmap_name: str
    source_item_id: str
    source_item_name: str
    target_item_id: str  # item ID inside the queried roadmap, as declared


class ItemDependencies(BaseModel):
    """External dependencies declared by one item of a roadmap."""
    item_id: str
    item_name: str
    external_dependencies: List[ExternalDependency] = Field(default_factory=list)


class DependencyValidationReport(BaseModel):
    """Counts + per-dependency results of a full resolver pass."""
    total: int
    valid: int
    invalid: int
    results: List[ExternalDependencyValidation] = Field(default_factory=list)

    @classmethod
    def from_results(cls, results: List[ExternalDependencyValidation]) -> "DependencyValidationReport":
        valid = sum(1 for r in results if r.valid)
        return cls(total=len(results), valid=valid, invalid=len(results) - valid, results=list(results))


__all__ = [
    "ExternalDependencyValidation",
    "DependentEdge",
    "ItemDependencies",
    "DependencyValidationReport",
]
