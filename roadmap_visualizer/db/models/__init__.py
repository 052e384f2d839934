# roadmap_visualizer/db/models/__init__.py

from .roadmap_document import RoadmapDocument

__all__ = [
    "RoadmapDocument",
]
