"""Test fixtures for BatchNote."""

import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from PyQt6.QtGui import QGuiApplication, QImage, QColor  # noqa: E402

from batch_note.events.event_bus import EventBus  # noqa: E402
from batch_note.services.history_service import HistoryService  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """One QGuiApplication for the whole run (fonts need it)."""
    app = QGuiApplication.instance() or QGuiApplication([])
    yield app


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def make_image():
    def _make(width: int = 120, height: int = 80, color=(30, 144, 255)) -> QImage:
        image = QImage(width, height, QImage.Format.Format_ARGB32)
        image.fill(QColor(*color))
        return image
    return _make


class FakeClock:
    """Monotonic clock advancing one second per call."""

    def __init__(self, start: datetime = datetime(2026, 10, 18, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def history_service(tmp_path: Path, clock: FakeClock, event_bus: EventBus) -> HistoryService:
    return HistoryService(
        history_dir=tmp_path / "history",
        max_history_count=5,
        clock=clock,
        event_bus=event_bus,
    )
