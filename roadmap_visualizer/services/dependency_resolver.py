# roadmap_visualizer/services/dependency_resolver.py
"""
Cross-roadmap audit of external dependencies.

Runs over the whole corpus snapshot every time. Dangling references never
raise: each one becomes an invalid ExternalDependencyValidation and the pass
continues with the next dependency.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from roadmap_visualizer.schemas.dependencies import ExternalDependencyValidation
from roadmap_visualizer.schemas.roadmap import ExternalDependency, StoredRoadmap
from roadmap_visualizer.services.corpus_index import CorpusIndex, build_corpus_index

logger = logging.getLogger(__name__)


def resolve_target_roadmap(
    ext: ExternalDependency, index: CorpusIndex
) -> Tuple[Optional[StoredRoadmap], Optional[str]]:
    """
    Find the roadmap an external dependency points at.

    Lookup is by ID when the dependency declares one; the name is only used
    when no ID is declared (a declared-but-unknown ID does not fall back).

    Returns:
        (roadmap, None) when found, (None, error message) otherwise.
    """
    if ext.target_roadmap_id:
        target = index.by_id.get(ext.target_roadmap_id)
        if target is None:
            return None, f"roadmap with ID '{ext.target_roadmap_id}' not found"
        return target, None

    target = index.by_name.get(ext.target_roadmap_name)
    if target is None:
        return None, f"roadmap named '{ext.target_roadmap_name}' not found"
    return target, None


def _target_reference(ext: ExternalDependency) -> str:
    roadmap_ref = ext.target_roadmap_name or ext.target_roadmap_id
    return f"{roadmap_ref}:{ext.target_item_id}"


def validate_external_dependencies(corpus: Sequence[StoredRoadmap]) -> List[ExternalDependencyValidation]:
    """
    Resolve every external dependency declared anywhere in the corpus.

    Results follow corpus order, then item order, then declaration order;
    exactly one result per declared dependency.
    """
    index = build_corpus_index(corpus)
    results: List[ExternalDependencyValidation] = []

    for stored in corpus:
        for item in stored.roadmap.items:
            source_reference = f"{stored.roadmap.name}:{item.id}"
            for ext in item.external_dependencies:
                target, error = resolve_target_roadmap(ext, index)
                if target is not None and index.find_item(target.id, ext.target_item_id) is None:
                    error = f"item '{ext.target_item_id}' not found in roadmap '{target.roadmap.name}'"

                results.append(
                    ExternalDependencyValidation(
                        source_reference=source_reference,
                        target_reference=_target_reference(ext),
                        valid=error is None,
                        error=error,
                    )
                )

    logger.debug(
        "dependencies.validate.done",
        extra={"count": len(corpus), "total": len(results), "invalid": sum(1 for r in results if not r.valid)},
    )
    return results


__all__ = ["resolve_target_roadmap", "validate_external_dependencies"]
