import sys

import pytest
from loguru import logger

from settingsbinder.core.logging import setup_logging


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_setup_logging_writes_file(tmp_path, restore_logger):
    log_dir = tmp_path / "logs"

    setup_logging(debug_mode=False, log_dir=str(log_dir))
    logger.info("hello from test")
    logger.complete()

    files = list(log_dir.glob("settingsbinder_*.log"))
    assert len(files) == 1
    assert "hello from test" in files[0].read_text()


def test_setup_logging_console_only(tmp_path, restore_logger, monkeypatch):
    monkeypatch.chdir(tmp_path)

    setup_logging(debug_mode=True, log_dir=None)

    assert not (tmp_path / "logs").exists()
