# roadmap_visualizer tests: dependency audit CLI exit codes

from __future__ import annotations

import sys

import pytest

import scripts.dependency_audit_cli as cli

PLATFORM = """roadmap:
  name: Platform
  service_line: Infrastructure
  items:
    - {id: a, name: Auth, start: 2025-Q1, end: 2025-Q2, status: planned}
"""

CHECKOUT = """roadmap:
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
"""


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    # keep the CLI from reconfiguring the package logger for later tests
    monkeypatch.setattr(cli, "setup_json_logging", lambda level: None)


def _run(monkeypatch, *files) -> int:
    monkeypatch.setattr(sys, "argv", ["dependency_audit_cli.py", *[str(f) for f in files]])
    return cli.main()


def test_exit_zero_when_every_dependency_resolves(tmp_path, monkeypatch, capsys):
    (tmp_path / "platform.yaml").write_text(PLATFORM, encoding="utf-8")
    (tmp_path / "checkout.yaml").write_text(CHECKOUT, encoding="utf-8")

    assert _run(monkeypatch, tmp_path / "platform.yaml", tmp_path / "checkout.yaml") == 0
    assert "1/1 external dependencies resolve" in capsys.readouterr().out


def test_exit_one_when_a_dependency_dangles(tmp_path, monkeypatch, capsys):
    path = tmp_path / "checkout.yaml"
    path.write_text(CHECKOUT, encoding="utf-8")

    assert _run(monkeypatch, path) == 1
    out = capsys.readouterr().out
    assert "0/1 external dependencies resolve" in out
    assert "Checkout:b -> Platform:a: roadmap named 'Platform' not found" in out


def test_exit_two_on_invalid_roadmap(tmp_path, monkeypatch, capsys):
    path = tmp_path / "broken.yaml"
    path.write_text(PLATFORM.replace("status: planned", "status: later"), encoding="utf-8")

    assert _run(monkeypatch, path) == 2
    assert "invalid status: later" in capsys.readouterr().out


def test_impossible_date_is_audited_as_text(tmp_path, monkeypatch):
    path = tmp_path / "platform.yaml"
    path.write_text(PLATFORM.replace("start: 2025-Q1", "start: 2025-02-30"), encoding="utf-8")

    assert _run(monkeypatch, path) == 0


def test_exit_two_on_missing_file(tmp_path, monkeypatch, capsys):
    missing = tmp_path / "nope.yaml"

    assert _run(monkeypatch, missing) == 2
    assert f"cannot read {missing}" in capsys.readouterr().out
