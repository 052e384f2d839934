# roadmap_visualizer/services/dependents.py

from __future__ import annotations

from typing import List, Sequence

from roadmap_visualizer.schemas.dependencies import DependentEdge, ItemDependencies
from roadmap_visualizer.schemas.roadmap import StoredRoadmap
from roadmap_visualizer.services.corpus_index import build_corpus_index


def get_external_dependents(target_roadmap_id: str, corpus: Sequence[StoredRoadmap]) -> List[DependentEdge]:
    """Items in *other* roadmaps that declare an external dependency on the target roadmap.

    A dependency matches on the literal roadmap ID or on the target's current
    name. Target item IDs are not checked (that is the resolver's job).
    An unknown target roadmap yields an empty list.
    """
    target = build_corpus_index(corpus).by_id.get(target_roadmap_id)
    if target is None:
        return []

    target_name = target.roadmap.name
    dependents: List[DependentEdge] = []
    for stored in corpus:
        if stored.id == target_roadmap_id:
            continue  # self references are not dependents
        for item in stored.roadmap.items:
            for ext in item.external_dependencies:
                if ext.target_roadmap_id == target_roadmap_id or ext.target_roadmap_name == target_name:
                    dependents.append(
                        DependentEdge(
                            source_roadmap_id=stored.id,
                            source_roadmap_name=stored.roadmap.name,
                            source_item_id=item.id,
                            source_item_name=item.name,
                            target_item_id=ext.target_item_id,
                        )
                    )
    return dependents


def list_item_dependencies(stored: StoredRoadmap) -> List[ItemDependencies]:
    """External dependencies declared by each item of one roadmap (items without any are skipped)."""
    return [
        ItemDependencies(
            item_id=item.id,
            item_name=item.name,
            external_dependencies=list(item.external_dependencies),
        )
        for item in stored.roadmap.items
        if item.external_dependencies
    ]


__all__ = ["get_external_dependents", "list_item_dependencies"]
