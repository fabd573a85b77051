import os

import pytest
from loguru import logger

# Headless Qt for widget tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from settingsbinder import SettingsBinder
from support import SampleSettings


@pytest.fixture(scope="module")
def qapp():
    """Ensure a QApplication exists for Qt tests."""
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def settings():
    return SampleSettings()


@pytest.fixture
def binder(settings):
    b = SettingsBinder(settings)
    yield b
    b.close()


@pytest.fixture
def loguru_messages():
    """Collect loguru output (caplog does not see loguru)."""
    messages = []
    handler_id = logger.add(lambda msg: messages.append(str(msg)), level="DEBUG")
    yield messages
    logger.remove(handler_id)
