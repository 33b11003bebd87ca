from __future__ import annotations

import logging

from repokit.core.logging import _build_logging_config, get_logger, setup_logging
from repokit.core.settings import Settings


def test_console_only_config_without_log_directory():
    config = _build_logging_config(None, Settings(_env_file=None, log_level="WARNING"))
    assert list(config["handlers"]) == ["console"]
    assert config["root"] == {"level": "WARNING", "handlers": ["console"]}


def test_setup_logging_creates_rotating_files(tmp_path):
    log_dir = tmp_path / "logs"
    config = Settings(_env_file=None, log_directory=str(log_dir), log_to_file=True)
    root = logging.getLogger()
    previous_handlers = list(root.handlers)
    try:
        setup_logging(config)
        get_logger("repokit.test").error("boom")
        for handler in root.handlers:
            handler.flush()
        assert (log_dir / "app.log").exists()
        assert "boom" in (log_dir / "errors.log").read_text(encoding="utf-8")
    finally:
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)
        for handler in previous_handlers:
            root.addHandler(handler)


def test_get_logger_defaults_to_package_name():
    assert get_logger().name == "repokit"
    assert get_logger("repokit.repositories").name == "repokit.repositories"
