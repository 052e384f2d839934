# roadmap_visualizer/services/corpus_index.py
"""
Transient lookup maps over a corpus snapshot.

Built from scratch on every call; nothing is cached between calls, so a
roadmap created or deleted by another request is seen by the next pass.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from roadmap_visualizer.schemas.roadmap import RoadmapItem, StoredRoadmap


@dataclass(frozen=True)
class CorpusIndex:
    """Lookups by RoadmapID, by roadmap name, and by item ID within a roadmap."""
    by_id: Dict[str, StoredRoadmap] = field(default_factory=dict)
    # Names are not unique: the last roadmap indexed under a name wins.
    by_name: Dict[str, StoredRoadmap] = field(default_factory=dict)
    items_by_roadmap: Dict[str, Dict[str, RoadmapItem]] = field(default_factory=dict)

    def find_item(self, roadmap_id: str, item_id: str) -> Optional[RoadmapItem]:
        return self.items_by_roadmap.get(roadmap_id, {}).get(item_id)


def build_corpus_index(corpus: Sequence[StoredRoadmap]) -> CorpusIndex:
    """Index every roadmap and item of the snapshot in one pass (O(total items))."""
    by_id: Dict[str, StoredRoadmap] = {}
    by_name: Dict[str, StoredRoadmap] = {}
    items_by_roadmap: Dict[str, Dict[str, RoadmapItem]] = {}

    for stored in corpus:
        by_id[stored.id] = stored
        by_name[stored.roadmap.name] = stored
        items_by_roadmap[stored.id] = {item.id: item for item in stored.roadmap.items}

    return CorpusIndex(by_id=by_id, by_name=by_name, items_by_roadmap=items_by_roadmap)


__all__ = ["CorpusIndex", "build_corpus_index"]
