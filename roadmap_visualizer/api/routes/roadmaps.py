# roadmap_visualizer/api/routes/roadmaps.py

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Header, HTTPException, Response

from roadmap_visualizer.api.deps import get_store, read_upload_body
from roadmap_visualizer.api.schemas.roadmaps import (
    BatchCreateResponse,
    RoadmapDependenciesResponse,
    RoadmapDependentsResponse,
)
from roadmap_visualizer.config import settings
from roadmap_visualizer.parsers.yaml_parser import parse_multiple_roadmaps, parse_roadmap
from roadmap_visualizer.schemas.roadmap import StoredRoadmap
from roadmap_visualizer.services.dependents import get_external_dependents, list_item_dependencies
from roadmap_visualizer.services.roadmap_store import RoadmapNotFoundError, RoadmapStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/roadmaps", tags=["roadmaps"])


def _get_or_404(store: RoadmapStore, roadmap_id: str) -> StoredRoadmap:
    try:
        return store.get(roadmap_id)
    except RoadmapNotFoundError as e:
        raise HTTPException(status_code=404, detail="Roadmap not found") from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get roadmap: {e}") from e


@router.post("", response_model=StoredRoadmap, status_code=201)
def create_roadmap(
    raw_body: bytes = Depends(read_upload_body),
    x_file_name: str | None = Header(default=None),
    store: RoadmapStore = Depends(get_store),
) -> StoredRoadmap:
    """
    Upload one YAML roadmap. Rejected documents never reach the store.
    """
    try:
        roadmap = parse_roadmap(raw_body)
    except ValueError as e:
        logger.info("roadmaps.create.rejected", extra={"reason": str(e), "file_name": x_file_name})
        raise HTTPException(status_code=400, detail=f"Invalid roadmap: {e}") from e

    try:
        return store.create(roadmap, x_file_name or settings.DEFAULT_UPLOAD_FILE_NAME)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to store roadmap: {e}") from e


@router.post("/batch", response_model=BatchCreateResponse, status_code=201)
def create_multiple_roadmaps(
    raw_body: bytes = Depends(read_upload_body),
    x_file_name: str | None = Header(default=None),
    store: RoadmapStore = Depends(get_store),
) -> BatchCreateResponse:
    """
    Upload a file of ``---`` separated roadmaps.
    Every document is validated before any is stored; storage itself is not
    transactional across documents.
    """
    try:
        roadmaps = parse_multiple_roadmaps(raw_body)
    except ValueError as e:
        logger.info("roadmaps.batch.rejected", extra={"reason": str(e), "file_name": x_file_name})
        raise HTTPException(status_code=400, detail=f"Invalid roadmap file: {e}") from e

    base_name = (x_file_name or settings.DEFAULT_UPLOAD_FILE_NAME).removesuffix(".yaml")
    stored: List[StoredRoadmap] = []
    for i, roadmap in enumerate(roadmaps, start=1):
        try:
            stored.append(store.create(roadmap, f"{base_name}-part{i}.yaml"))
        except Exception as e:
            # Earlier documents stay stored
            raise HTTPException(
                status_code=500,
                detail=f"Failed to store roadmap {i} ({roadmap.name}): {e}",
            ) from e

    logger.info("roadmaps.batch.done", extra={"count": len(stored), "file_name": x_file_name})
    return BatchCreateResponse(count=len(stored), roadmaps=stored)


@router.get("", response_model=List[StoredRoadmap])
def list_roadmaps(store: RoadmapStore = Depends(get_store)) -> List[StoredRoadmap]:
    try:
        return store.list_all_documents()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to list roadmaps: {e}") from e


@router.get("/{roadmap_id}", response_model=StoredRoadmap)
def get_roadmap(roadmap_id: str, store: RoadmapStore = Depends(get_store)) -> StoredRoadmap:
    return _get_or_404(store, roadmap_id)


@router.delete("/{roadmap_id}", status_code=204)
def delete_roadmap(roadmap_id: str, store: RoadmapStore = Depends(get_store)) -> Response:
    """
    Remove a roadmap. References to it elsewhere are not touched; they show up
    as dangling on the next /api/dependencies/validate pass.
    """
    try:
        store.delete(roadmap_id)
    except RoadmapNotFoundError as e:
        raise HTTPException(status_code=404, detail="Roadmap not found") from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete roadmap: {e}") from e
    return Response(status_code=204)


@router.get("/{roadmap_id}/dependencies", response_model=RoadmapDependenciesResponse)
def get_roadmap_dependencies(roadmap_id: str, store: RoadmapStore = Depends(get_store)) -> RoadmapDependenciesResponse:
    """External dependencies declared by the items of this roadmap."""
    stored = _get_or_404(store, roadmap_id)
    return RoadmapDependenciesResponse(
        roadmap_id=stored.id,
        roadmap_name=stored.roadmap.name,
        dependencies=list_item_dependencies(stored),
    )


@router.get("/{roadmap_id}/dependents", response_model=RoadmapDependentsResponse)
def get_roadmap_dependents(roadmap_id: str, store: RoadmapStore = Depends(get_store)) -> RoadmapDependentsResponse:
    """Items in other roadmaps that depend on this roadmap."""
    stored = _get_or_404(store, roadmap_id)
    try:
        corpus = store.list_all_documents()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to list roadmaps: {e}") from e

    dependents = get_external_dependents(roadmap_id, corpus)
    return RoadmapDependentsResponse(
        roadmap_id=stored.id,
        roadmap_name=stored.roadmap.name,
        dependents=dependents,
        count=len(dependents),
    )
