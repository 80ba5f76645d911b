"""App-level logging policy over the runtime logging pipeline."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime
from pathlib import Path

from battleship.runtime.logging import JsonFormatter, LoggingConfig, configure_logging

__all__ = ["JsonFormatter", "build_logging_config", "resolve_logs_dir", "setup_logging"]


def resolve_logs_dir() -> Path:
    """Log directory: ``BATTLESHIP_LOG_DIR`` or ``./appdata/logs``."""
    configured = os.getenv("BATTLESHIP_LOG_DIR", "").strip()
    if configured:
        return Path(configured)
    return Path.cwd() / "appdata" / "logs"


def build_logging_config(*, to_file: bool = True) -> LoggingConfig:
    """Build logging config from env vars."""
    level_name = os.getenv("BATTLESHIP_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).upper()
    console_format = os.getenv("LOG_FORMAT", "text").lower()
    return LoggingConfig(
        level_name=level_name,
        console_format=console_format,
        file_path=_resolve_run_log_file_path() if to_file else None,
        file_format="json",
    )


def setup_logging(*, to_file: bool = True) -> None:
    """Configure application logging."""
    config = build_logging_config(to_file=to_file)
    configure_logging(config)
    if config.file_path:
        logging.getLogger(__name__).info("logging_file=%s", config.file_path)


def _resolve_run_log_file_path() -> str:
    base_dir = resolve_logs_dir()
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return str(base_dir / f"battleship_run_{stamp}.jsonl")
