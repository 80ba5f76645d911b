import json
import logging

import pytest

from battleship.game.infra.logging import JsonFormatter, build_logging_config, resolve_logs_dir, setup_logging
from battleship.runtime.logging import shutdown_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        yield root
    finally:
        shutdown_logging()
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_json_formatter_includes_fields_and_message() -> None:
    logger = logging.getLogger("test.json.formatter")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg="shot %s",
        args=("hit",),
        exc_info=None,
        extra={"round": 3},
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "shot hit"
    assert payload["level"] == "INFO"
    assert payload["fields"] == {"round": 3}


def test_resolve_logs_dir_prefers_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("BATTLESHIP_LOG_DIR", str(tmp_path / "logs"))
    assert resolve_logs_dir() == tmp_path / "logs"


def test_build_logging_config_reads_level_and_format(monkeypatch) -> None:
    monkeypatch.delenv("BATTLESHIP_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    config = build_logging_config(to_file=False)
    assert config.level_name == "DEBUG"
    assert config.console_format == "json"
    assert config.file_path is None

    monkeypatch.setenv("BATTLESHIP_LOG_LEVEL", "warning")
    assert build_logging_config(to_file=False).level_name == "WARNING"


def test_setup_logging_console_only(monkeypatch, restore_root_logger) -> None:
    monkeypatch.setenv("BATTLESHIP_LOG_LEVEL", "DEBUG")
    setup_logging(to_file=False)
    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1


def test_setup_logging_writes_json_lines_under_log_dir(monkeypatch, tmp_path, restore_root_logger) -> None:
    monkeypatch.setenv("BATTLESHIP_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("BATTLESHIP_LOG_LEVEL", "INFO")
    setup_logging()
    logging.getLogger("test.logging.file").info("game_started seed=%d", 7)
    shutdown_logging()

    files = list((tmp_path / "logs").glob("battleship_run_*.jsonl"))
    assert len(files) == 1
    lines = [json.loads(line) for line in files[0].read_text(encoding="utf-8").splitlines()]
    assert any(line["msg"] == "game_started seed=7" for line in lines)
