from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict

from repokit.core.settings import Settings, settings as default_settings


def _build_logging_config(
    log_dir: Path | None, config: Settings
) -> Dict[str, Any]:
    formatter = {
        "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    }
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": config.log_level,
            "formatter": "standard",
        },
    }
    if log_dir is not None:
        handlers["app_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": config.log_level,
            "formatter": "standard",
            "filename": str(log_dir / "app.log"),
            "maxBytes": config.log_max_bytes,
            "backupCount": config.log_backup_count,
            "encoding": "utf-8",
        }
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "standard",
            "filename": str(log_dir / "errors.log"),
            "maxBytes": config.log_max_bytes,
            "backupCount": config.log_backup_count,
            "encoding": "utf-8",
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"standard": formatter},
        "handlers": handlers,
        "root": {
            "level": config.log_level,
            "handlers": list(handlers),
        },
    }


def setup_logging(config: Settings | None = None) -> None:
    """Configure logging once at application start."""

    config = config or default_settings
    log_dir: Path | None = None
    if config.log_to_file:
        log_dir = Path(config.log_directory).resolve()
        log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(_build_logging_config(log_dir, config))


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or "repokit")
