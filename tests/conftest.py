"""Pytest configuration and shared fixtures for FTP File Sender tests."""

import logging
import pytest
from pathlib import Path


TEST_FILE_CONTENT = b"This is a test FTP file."


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Create the standard upload fixture file."""
    source = tmp_path / "test_file.txt"
    source.write_bytes(TEST_FILE_CONTENT)
    return source


@pytest.fixture
def test_logger() -> logging.Logger:
    """Logger injected into FileSender, captured through caplog."""
    logger = logging.getLogger("ftp_sender.tests")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """Provide a temporary settings file path for testing."""
    return tmp_path / "config" / "settings.json"


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers installed by setup_logging after each test."""
    yield
    logger = logging.getLogger("ftp_sender")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
