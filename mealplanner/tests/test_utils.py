"""Tests for formatting helpers and logging setup."""

import json
import logging

from mealplanner.logger import JSONLogger, configure_logging
from mealplanner.utils import format_meal, format_ratio, format_ratios


def test_format_ratio():
    assert format_ratio(0.953) == "95.3%"
    assert format_ratio(1.0) == "100.0%"
    assert format_ratio(float("inf")) == "inf"


def test_format_ratios_keeps_order():
    assert format_ratios({"protein": 0.9, "calories": 1.02}) == "protein=90.0%, calories=102.0%"
    assert format_ratios({}) == ""


def test_format_meal():
    assert format_meal({"Rice": 150, "Broccoli": 120}) == "Rice 150g, Broccoli 120g"


def test_configure_logging_adds_file_handler(tmp_path):
    log_path = tmp_path / "logs" / "planner.log"
    root = logging.getLogger()
    before = list(root.handlers)

    try:
        configure_logging("debug", str(log_path))
        added = [h for h in root.handlers if h not in before]

        assert root.level == logging.DEBUG
        assert len(added) == 2
        assert log_path.parent.exists()
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
                handler.close()


def test_json_logger_appends_records(tmp_path):
    log_path = tmp_path / "gens.jsonl"

    with JSONLogger(str(log_path)) as json_logger:
        json_logger.log_generation(0, [3, 2], {"calories": {"min": 0.1, "max": 0.9, "avg": 0.5}}, 0.2, 0.7)
    with JSONLogger(str(log_path)) as json_logger:
        json_logger.log_generation(1, [5], {}, 0.0, 0.8)

    records = [json.loads(line) for line in log_path.read_text().splitlines()]
    assert [r["generation"] for r in records] == [0, 1]
    assert records[0]["front_sizes"] == [3, 2]
    assert records[1]["best_score"] == 0.8
