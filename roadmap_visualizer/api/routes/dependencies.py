# roadmap_visualizer/api/routes/dependencies.py

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from roadmap_visualizer.api.deps import get_store
from roadmap_visualizer.schemas.dependencies import DependencyValidationReport
from roadmap_visualizer.services.dependency_resolver import validate_external_dependencies
from roadmap_visualizer.services.roadmap_store import RoadmapStore


router = APIRouter(prefix="/api/dependencies", tags=["dependencies"])


@router.get("/validate", response_model=DependencyValidationReport)
def validate_dependencies(store: RoadmapStore = Depends(get_store)) -> DependencyValidationReport:
    """
    Resolve every external dependency across all stored roadmaps.
    """
    try:
        corpus = store.list_all_documents()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to list roadmaps: {e}") from e

    return DependencyValidationReport.from_results(validate_external_dependencies(corpus))
