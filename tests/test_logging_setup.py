"""Tests for logger setup."""

import logging
import logging.handlers
from pathlib import Path

from bookstore.config import Settings
from bookstore.logging_setup import LOGGER_NAME, setup_logging


def _settings(log_dir: Path) -> Settings:
    return Settings(LOGS_DIR=str(log_dir), LOG_FILE=str(log_dir / "app.log"))


def _file_handlers(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if isinstance(h, logging.handlers.TimedRotatingFileHandler)]


class TestSetupLogging:
    def test_file_handler_follows_configured_path(self, tmp_path: Path) -> None:
        logger = setup_logging(_settings(tmp_path / "first"))
        logger = setup_logging(_settings(tmp_path / "second"))

        handlers = _file_handlers(logger)
        assert len(handlers) == 1
        assert Path(handlers[0].baseFilename) == (tmp_path / "second" / "app.log").resolve()

        logger.warning("written to the second file")
        handlers[0].flush()
        assert "written to the second file" in (tmp_path / "second" / "app.log").read_text(encoding="utf-8")

    def test_same_path_is_idempotent(self, tmp_path: Path) -> None:
        cfg = _settings(tmp_path / "logs")
        setup_logging(cfg)
        count = len(logging.getLogger(LOGGER_NAME).handlers)
        setup_logging(cfg)
        assert len(logging.getLogger(LOGGER_NAME).handlers) == count

    def test_console_handler_not_duplicated(self, tmp_path: Path) -> None:
        setup_logging(_settings(tmp_path / "a"))
        logger = setup_logging(_settings(tmp_path / "b"))
        streams = [
            h for h in logger.handlers
            if type(h) is logging.StreamHandler
        ]
        assert len(streams) == 1
