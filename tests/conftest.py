import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def isolated_logging(tmp_path, monkeypatch):
    import logging

    from list_sidebar import logging_setup
    from list_sidebar.settings import LOGGER_NAME

    monkeypatch.setattr(logging_setup, "LOG_PATH", tmp_path / "logs" / "list-sidebar.log")
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    yield tmp_path / "logs" / "list-sidebar.log"

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
