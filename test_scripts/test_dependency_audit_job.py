# roadmap_visualizer tests: dependency audit job (stored corpus + offline files)

from __future__ import annotations

import pytest

from roadmap_visualizer.jobs.dependency_audit_job import audit_yaml_files, load_corpus_from_files, run_dependency_audit
from roadmap_visualizer.parsers.yaml_parser import RoadmapParseError
from roadmap_visualizer.services.roadmap_store import RoadmapStore

PLATFORM = """roadmap:
  name: Platform
  service_line: Infrastructure
  items:
    - {id: a, name: Auth, start: 2025-Q1, end: 2025-Q2, status: planned}
"""

CONSUMERS = """roadmap:
  name: Checkout
  service_line: Commerce
  items:
    - id: b
      name: Checkout
      start: 2025-Q2
      end: 2025-Q3
      status: planned
      external_dependencies:
        - {roadmap: Platform, item: a}
        - {roadmap: Platform, item: zz}
---
roadmap:
  name: Search
  service_line: Discovery
  items:
    - id: s
      name: Search
      start: 2025-Q2
      end: 2025-Q3
      status: blocked
      external_dependencies:
        - {roadmap: Checkout, item: b, criticality: low}
"""


def test_audit_yaml_files(tmp_path):
    (tmp_path / "platform.yaml").write_text(PLATFORM, encoding="utf-8")
    (tmp_path / "consumers.yaml").write_text(CONSUMERS, encoding="utf-8")

    report = audit_yaml_files([tmp_path / "platform.yaml", tmp_path / "consumers.yaml"])

    assert (report.total, report.valid, report.invalid) == (3, 2, 1)
    assert report.results[1].error == "item 'zz' not found in roadmap 'Platform'"


def test_load_corpus_from_files_assigns_per_document_ids(tmp_path):
    path = tmp_path / "consumers.yaml"
    path.write_text(CONSUMERS, encoding="utf-8")

    corpus = load_corpus_from_files([path])

    assert [s.id for s in corpus] == ["consumers.yaml#1", "consumers.yaml#2"]
    assert {s.file_name for s in corpus} == {"consumers.yaml"}


def test_audit_yaml_files_rejects_invalid_file(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text(PLATFORM.replace("status: planned", "status: later"), encoding="utf-8")

    with pytest.raises(RoadmapParseError):
        audit_yaml_files([path])


def test_run_dependency_audit_on_store(db_session, make_item, make_stored):
    store = RoadmapStore(db_session)
    target = store.create(make_stored("x", "Platform", [make_item("a")]).roadmap, "platform.yaml")
    store.create(
        make_stored(
            "y",
            "Checkout",
            [make_item("b", external=[{"target_roadmap_id": target.id, "target_item_id": "a"}])],
        ).roadmap,
        "checkout.yaml",
    )

    report = run_dependency_audit(db_session)

    assert (report.total, report.valid, report.invalid) == (1, 1, 0)


def test_load_corpus_from_files_propagates_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_corpus_from_files([tmp_path / "absent.yaml"])
