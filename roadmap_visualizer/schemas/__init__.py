from .roadmap import (
	RoadmapValidationError,
	ItemStatus,
	Criticality,
	ExternalDependency,
	RoadmapItem,
	Roadmap,
	RoadmapFile,
	StoredRoadmap,
	validate_item,
	validate_roadmap,
)
from .dependencies import (
	ExternalDependencyValidation,
	DependentEdge,
	ItemDependencies,
	DependencyValidationReport,
)

__all__ = [
	"RoadmapValidationError",
	"ItemStatus",
	"Criticality",
	"ExternalDependency",
	"RoadmapItem",
	"Roadmap",
	"RoadmapFile",
	"StoredRoadmap",
	"validate_item",
	"validate_roadmap",
	"ExternalDependencyValidation",
	"DependentEdge",
	"ItemDependencies",
	"DependencyValidationReport",
]
