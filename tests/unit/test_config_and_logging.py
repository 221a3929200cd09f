import json
import logging
from pathlib import Path

import pytest

from selkit.selectors import OrderViolationError, SelectorBuilder
from selkit.utils import logger as logger_mod
from selkit.utils.config import LogLevel, Settings, get_settings


@pytest.fixture
def file_log(tmp_path: Path, monkeypatch):
    log_file = tmp_path / "logs" / "selkit.log"
    monkeypatch.setenv("LOG_TO_FILE", "true")
    monkeypatch.setenv("LOG_FILE", str(log_file))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    get_settings.cache_clear()
    logger_mod._configured = False
    yield log_file
    base = logging.getLogger("selkit")
    for h in list(base.handlers):
        base.removeHandler(h)
        h.close()
    logger_mod.unbind("source")
    logger_mod._configured = False


def read_records(path: Path) -> list[dict]:
    for h in logging.getLogger("selkit").handlers:
        h.flush()
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


@pytest.mark.parametrize("raw", ["info", "Info", " INFO "])
def test_log_level_env_is_case_insensitive(raw, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", raw)
    assert Settings().LOG_LEVEL is LogLevel.INFO


def test_file_log_writes_json_with_bound_context(file_log: Path):
    log = logger_mod.get_logger("selkit.tests")
    logger_mod.bind(source="selectors/demo.yaml")
    log.info("rendered 2 selector(s)")

    rec = read_records(file_log)[-1]
    assert rec["msg"] == "rendered 2 selector(s)"
    assert rec["level"] == "INFO"
    assert rec["logger"] == "selkit.tests"
    assert rec["source"] == "selectors/demo.yaml"


def test_builder_rejection_logged_with_selector_context(file_log: Path):
    b = SelectorBuilder().element("a").pseudo_class("hover")
    with pytest.raises(OrderViolationError):
        b.class_("late")

    rec = read_records(file_log)[-1]
    assert rec["level"] == "DEBUG"
    assert rec["logger"] == "selkit.selectors.builder"
    assert rec["fragment"] == "class"
    assert rec["selector"] == "a:hover"


def test_set_log_level_filters_records(file_log: Path):
    log = logger_mod.get_logger("selkit.tests")
    logger_mod.set_log_level("warning")
    log.info("hidden")
    log.warning("shown")

    msgs = [r["msg"] for r in read_records(file_log)]
    assert "shown" in msgs
    assert "hidden" not in msgs
