"""Pytest fixtures for keyguide tests."""

from __future__ import annotations

import pytest

from keyguide.core.scheduler import ManualScheduler


@pytest.fixture()
def scheduler() -> ManualScheduler:
    """Virtual-clock scheduler; advance it to fire timers."""
    return ManualScheduler()


@pytest.fixture(scope="session")
def qt_app():
    """A QCoreApplication so QTimer-based scheduling can run."""
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
