import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from .config import Settings, settings as default_settings

LOGGER_NAME = "bookstore"


def _file_handler(logger: logging.Logger) -> Optional[logging.handlers.TimedRotatingFileHandler]:
    for handler in logger.handlers:
        if isinstance(handler, logging.handlers.TimedRotatingFileHandler):
            return handler
    return None


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    cfg = settings or default_settings
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(cfg.log_level_value)
    log_file = Path(cfg.log_file).resolve()

    existing = _file_handler(logger)
    if existing is not None and Path(existing.baseFilename) == log_file:
        return logger

    fmt = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    Path(cfg.logs_dir).mkdir(parents=True, exist_ok=True)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.TimedRotatingFileHandler(
        str(log_file), when="D", interval=7, backupCount=10, encoding="utf-8"
    )
    file_handler.suffix = "_%Y-%m-%d"
    file_handler.setFormatter(fmt)

    if existing is not None:
        # Same logger, new destination: swap only the file handler
        logger.removeHandler(existing)
        existing.close()
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(fmt)
        logger.addHandler(console_handler)

    logger.addHandler(file_handler)
    logger.info(f"Logging to {log_file} with 7-day rotation")
    return logger
