# roadmap_visualizer/api/schemas/roadmaps.py

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from roadmap_visualizer.schemas.dependencies import DependentEdge, ItemDependencies
from roadmap_visualizer.schemas.roadmap import StoredRoadmap


class BatchCreateResponse(BaseModel):
    count: int
    roadmaps: List[StoredRoadmap] = Field(default_factory=list)


class RoadmapDependenciesResponse(BaseModel):
    roadmap_id: str
    roadmap_name: str
    dependencies: List[ItemDependencies] = Field(default_factory=list)


class RoadmapDependentsResponse(BaseModel):
    roadmap_id: str
    roadmap_name: str
    dependents: List[DependentEdge] = Field(default_factory=list)
    count: int
