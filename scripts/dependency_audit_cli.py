#!/usr/bin/env python3
"""CLI entrypoint for the cross-roadmap dependency audit.

Usage examples:
    python scripts/dependency_audit_cli.py                 # audit the stored corpus
    python scripts/dependency_audit_cli.py a.yaml b.yaml   # audit YAML files offline

Flags:
    --log-level LEVEL   Logging level (INFO, DEBUG, WARNING, ERROR).

Exit codes:
    0 when every external dependency resolves, 1 when some do not,
    2 when an input file cannot be read or is not a valid roadmap, 130 on interrupt.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from roadmap_visualizer.config import setup_json_logging
from roadmap_visualizer.db.session import SessionLocal, init_db
from roadmap_visualizer.jobs.dependency_audit_job import audit_yaml_files, run_dependency_audit
from roadmap_visualizer.parsers.yaml_parser import RoadmapParseError


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate external dependencies between roadmaps.")
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Roadmap YAML files to audit instead of the stored corpus.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (e.g. INFO, DEBUG).",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    setup_json_logging(getattr(logging, args.log_level.upper(), logging.WARNING))
    log = logging.getLogger("roadmap_visualizer.cli")

    try:
        if args.files:
            report = audit_yaml_files(args.files)
        else:
            init_db()
            db = SessionLocal()
            try:
                report = run_dependency_audit(db)
            finally:
                db.close()
    except RoadmapParseError as e:
        print(f"✗ {e}")
        return 2
    except OSError as e:
        print(f"✗ cannot read {e.filename}: {e.strerror}")
        return 2
    except KeyboardInterrupt:
        log.warning("dependency_audit.cli.interrupted")
        return 130

    print(f"✓ {report.valid}/{report.total} external dependencies resolve")
    for r in report.results:
        if not r.valid:
            print(f"  ✗ {r.source_reference} -> {r.target_reference}: {r.error}")
    return 0 if report.invalid == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
