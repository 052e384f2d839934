"""Verify the JSON logging configuration drops empty fields and stays idempotent."""

from __future__ import annotations

import io
import json
import logging

from roadmap_visualizer.config import LOGGER_NAME, CustomJsonFormatter, setup_json_logging


def _capture(logger_name: str) -> io.StringIO:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        CustomJsonFormatter("%(levelname)s %(name)s %(message)s %(roadmap_id)s %(count)s %(reason)s")
    )
    log = logging.getLogger(logger_name)
    log.handlers = [handler]
    log.propagate = False
    log.setLevel(logging.DEBUG)
    return stream


def test_none_fields_are_dropped():
    stream = _capture("roadmap_visualizer.test.json")

    logging.getLogger("roadmap_visualizer.test.json").info("roadmaps.batch.done", extra={"count": 2})

    payload = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert payload["message"] == "roadmaps.batch.done"
    assert payload["levelname"] == "INFO"
    assert payload["count"] == 2
    assert "roadmap_id" not in payload
    assert "reason" not in payload


def test_extra_fields_outside_format_are_kept():
    stream = _capture("roadmap_visualizer.test.json_extra")

    logging.getLogger("roadmap_visualizer.test.json_extra").warning(
        "dependency_audit.invalid",
        extra={"source_reference": "Checkout:b", "reason": "roadmap named 'Ghost' not found"},
    )

    payload = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert payload["source_reference"] == "Checkout:b"
    assert payload["reason"] == "roadmap named 'Ghost' not found"


def test_setup_json_logging_does_not_stack_handlers():
    setup_json_logging(logging.DEBUG)
    setup_json_logging(logging.INFO)

    root = logging.getLogger(LOGGER_NAME)
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
    assert root.level == logging.INFO
    assert root.propagate is False
