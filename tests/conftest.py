from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from vibematch.data import JsonDocumentStore


class FakeClock:
    """Controllable UTC clock for services that take a `clock` callable."""

    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def store(tmp_path: Path) -> JsonDocumentStore:
    return JsonDocumentStore(tmp_path / "store.json")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
