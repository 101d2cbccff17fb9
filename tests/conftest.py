"""Pytest bootstrap configuration.

Environment defaults are set before test collection so that module-level
settings pick them up.
"""
import os
from typing import Iterator, List

import pytest

os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("GRPC__TLS__ENABLED", "false")

from domain.route_guide import Feature, Point  # noqa: E402
from infrastructure.repositories.feature_repository import InMemoryFeatureRepository  # noqa: E402
from infrastructure.repositories.route_note_repository import InMemoryRouteNoteRepository  # noqa: E402


SAMPLE_FEATURES: List[Feature] = [
    Feature(name="Origin", location=Point(latitude=0, longitude=0)),
    Feature(name="One North", location=Point(latitude=10_000_000, longitude=0)),
    Feature(name="", location=Point(latitude=5_000_000, longitude=5_000_000)),
    Feature(name="Far East", location=Point(latitude=0, longitude=20_000_000)),
    Feature(name="South West", location=Point(latitude=-10_000_000, longitude=-10_000_000)),
]


class FakeClock:
    """Returns queued timestamps; fails loudly when read more than expected."""

    def __init__(self, *ticks: float) -> None:
        self._ticks: Iterator[float] = iter(ticks)
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return next(self._ticks)


@pytest.fixture
def feature_repo() -> InMemoryFeatureRepository:
    return InMemoryFeatureRepository(SAMPLE_FEATURES)


@pytest.fixture
def note_repo() -> InMemoryRouteNoteRepository:
    return InMemoryRouteNoteRepository()


@pytest.fixture
def fake_clock():
    return FakeClock
