"""Shared test fixtures for tdsync tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tdsync.engine.engine import SyncEngine
from tdsync.engine.progress import SyncProgress
from tests.fakes.clock import ENGINE_NOW
from tests.fakes.provider import FakeProvider
from tests.fakes.td import FakeTdClient


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def state_dir(work_dir: Path) -> Path:
    return work_dir / ".todos"


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def td() -> FakeTdClient:
    return FakeTdClient()


@pytest.fixture
def make_engine(
    work_dir: Path, state_dir: Path, td: FakeTdClient
) -> Callable[..., SyncEngine]:
    """Build a ``SyncEngine`` over fakes with a fixed clock."""

    def _make(provider: FakeProvider, *, progress: SyncProgress | None = None) -> SyncEngine:
        return SyncEngine(
            provider,
            work_dir=work_dir,
            state_dir=state_dir,
            local=td,  # type: ignore[arg-type]
            progress=progress,
            now=lambda: ENGINE_NOW,
        )

    return _make
