# roadmap_visualizer/jobs/dependency_audit_job.py

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List

from sqlalchemy.orm import Session

from roadmap_visualizer.parsers.yaml_parser import parse_multiple_roadmaps
from roadmap_visualizer.schemas.dependencies import DependencyValidationReport
from roadmap_visualizer.schemas.roadmap import StoredRoadmap
from roadmap_visualizer.services.dependency_resolver import validate_external_dependencies
from roadmap_visualizer.services.roadmap_store import RoadmapStore

logger = logging.getLogger(__name__)


def _log_report(source: str, report: DependencyValidationReport) -> None:
    logger.info(
        "dependency_audit.done",
        extra={"reason": source, "total": report.total, "valid": report.valid, "invalid": report.invalid},
    )
    for r in report.results:
        if not r.valid:
            logger.warning(
                "dependency_audit.invalid",
                extra={"source_reference": r.source_reference, "reason": r.error},
            )


def run_dependency_audit(db: Session) -> DependencyValidationReport:
    """Validate external dependencies of every stored roadmap."""
    corpus = RoadmapStore(db).list_all_documents()
    report = DependencyValidationReport.from_results(validate_external_dependencies(corpus))
    _log_report("store", report)
    return report


def load_corpus_from_files(paths: Iterable[Path]) -> List[StoredRoadmap]:
    """Parse YAML files (one or many roadmaps each) into a transient corpus.

    Each document gets the ID ``<file name>#<n>``; references by stored
    RoadmapID therefore cannot resolve here, references by name can.
    Raises RoadmapParseError for the first invalid file.
    """
    now = datetime.now(timezone.utc)
    corpus: List[StoredRoadmap] = []
    for path in paths:
        path = Path(path)
        roadmaps = parse_multiple_roadmaps(path.read_bytes())
        for n, roadmap in enumerate(roadmaps, start=1):
            corpus.append(
                StoredRoadmap(
                    id=f"{path.name}#{n}",
                    roadmap=roadmap,
                    created_at=now,
                    updated_at=now,
                    file_name=path.name,
                )
            )
    return corpus


def audit_yaml_files(paths: Iterable[Path]) -> DependencyValidationReport:
    """Offline audit: same resolver pass over roadmaps read from disk instead of the store."""
    corpus = load_corpus_from_files(paths)
    report = DependencyValidationReport.from_results(validate_external_dependencies(corpus))
    _log_report("files", report)
    return report


__all__ = ["run_dependency_audit", "load_corpus_from_files", "audit_yaml_files"]
