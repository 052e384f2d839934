# roadmap_visualizer/parsers/yaml_parser.py
"""YAML <-> Roadmap conversion.

Every parsed document is run through validate_roadmap before it is returned,
so callers only ever see roadmaps that may enter the corpus.
"""

from __future__ import annotations

from typing import List, Union

import yaml
from pydantic import ValidationError

from roadmap_visualizer.schemas.roadmap import (
	Roadmap,
	RoadmapFile,
	RoadmapValidationError,
	validate_roadmap,
)


class RoadmapParseError(ValueError):
	"""Raised when an uploaded YAML payload cannot become a valid roadmap."""


_TEXT_ONLY_TAGS = frozenset(
	{
		"tag:yaml.org,2002:bool",
		"tag:yaml.org,2002:float",
		"tag:yaml.org,2002:int",
		"tag:yaml.org,2002:timestamp",
	}
)


class RoadmapLoader(yaml.SafeLoader):
	"""SafeLoader that leaves plain scalars as text.

	``start: 2025-02-30`` and ``name: No`` stay exactly as written.
	Only null is still resolved, so empty fields read as missing.
	"""


RoadmapLoader.yaml_implicit_resolvers = {
	first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TEXT_ONLY_TAGS]
	for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}



def _load_roadmap_file(raw: object) -> Roadmap:
	if raw is None:
		raw = {}
	if not isinstance(raw, dict):
		raise RoadmapParseError("failed to parse YAML: top-level document must be a mapping")
	try:
		return RoadmapFile.model_validate(raw).roadmap
	except ValidationError as e:
		raise RoadmapParseError(f"failed to parse YAML: {e}") from e


def parse_roadmap(data: Union[bytes, str]) -> Roadmap:
	"""Parse and validate one ``roadmap:`` document.

	If the payload holds several ``---`` separated documents only the first
	is read; anything after it is ignored.
	"""
	try:
		raw = next(iter(yaml.load_all(data, Loader=RoadmapLoader)), None)
	except yaml.YAMLError as e:
		raise RoadmapParseError(f"failed to parse YAML: {e}") from e

	roadmap = _load_roadmap_file(raw)
	try:
		validate_roadmap(roadmap)
	except RoadmapValidationError as e:
		raise RoadmapParseError(f"validation failed: {e}") from e
	return roadmap


def parse_multiple_roadmaps(data: Union[bytes, str]) -> List[Roadmap]:
	"""Parse a file holding several roadmap documents separated by ``---``.

	All-or-nothing: the first bad document fails the whole file.
	Empty documents (e.g. a leading or trailing ``---``) are skipped.
	"""
	roadmaps: List[Roadmap] = []
	try:
		for raw in yaml.load_all(data, Loader=RoadmapLoader):
			if raw is None:
				continue
			try:
				roadmap = _load_roadmap_file(raw)
			except RoadmapParseError as e:
				raise RoadmapParseError(f"failed to parse YAML document {len(roadmaps) + 1}: {e}") from e
			try:
				validate_roadmap(roadmap)
			except RoadmapValidationError as e:
				raise RoadmapParseError(
					f"validation failed for roadmap {len(roadmaps) + 1} ({roadmap.name}): {e}"
				) from e
			roadmaps.append(roadmap)
	except yaml.YAMLError as e:
		raise RoadmapParseError(f"failed to parse YAML document {len(roadmaps) + 1}: {e}") from e

	if not roadmaps:
		raise RoadmapParseError("no roadmaps found in file")
	return roadmaps


def _prune_empty(value):
	if isinstance(value, dict):
		return {k: _prune_empty(v) for k, v in value.items() if v not in (None, "", [])}
	if isinstance(value, list):
		return [_prune_empty(v) for v in value]
	return value


def roadmap_to_document(roadmap: Roadmap) -> dict:
	"""Plain dict in the upload shape (aliased keys, empty optionals omitted)."""
	return {"roadmap": _prune_empty(roadmap.model_dump(mode="json", by_alias=True))}


def serialize_roadmap(roadmap: Roadmap) -> str:
	"""Serialize back to YAML with the ``roadmap:`` wrapper, keeping field order."""
	return yaml.safe_dump(
		roadmap_to_document(roadmap),
		sort_keys=False,
		allow_unicode=True,
		default_flow_style=False,
	)


__all__ = [
	"RoadmapLoader",
	"RoadmapParseError",
	"parse_roadmap",
	"parse_multiple_roadmaps",
	"roadmap_to_document",
	"serialize_roadmap",
]
