import logging
import os

from app.platform.config import settings
from app.platform.logger import get_logger


def test_level_follows_debug_flag(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "LOG_LEVEL", None)
    monkeypatch.setattr(settings, "DEBUG", False)

    logger = get_logger("tests.logger.debug_off")

    assert logger.level == logging.INFO
    assert all(handler.level == logging.INFO for handler in logger.handlers)


def test_explicit_level_and_file_location(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "LOG_LEVEL", "warning")
    monkeypatch.setattr(settings, "LOG_DIR", "custom_logs")
    monkeypatch.setattr(settings, "LOG_FILE", "preview.log")

    logger = get_logger("tests.logger.explicit")

    assert logger.level == logging.WARNING
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    assert file_handlers[0].baseFilename == os.path.join(str(tmp_path), "custom_logs", "preview.log")


def test_handlers_are_added_once(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    first = get_logger("tests.logger.once")
    second = get_logger("tests.logger.once")

    assert first is second
    assert len(second.handlers) == 2
