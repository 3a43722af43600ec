"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import random
import sys
from collections.abc import Callable, Iterator

import pytest

from matchgrid.game.controller import GameController
from matchgrid.game.interfaces import GameConfig
from matchgrid.game.scheduler import VirtualScheduler

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for Qt tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_controller(
    scheduler: VirtualScheduler, rng: random.Random
) -> Callable[..., GameController]:
    """Factory: controller on the shared virtual scheduler."""

    def _make(
        cols: int = 2,
        rows: int = 2,
        time_limit_seconds: int = 10,
        mismatch_delay_ms: int = 600,
    ) -> GameController:
        config = GameConfig(
            cols=cols,
            rows=rows,
            time_limit_seconds=time_limit_seconds,
            mismatch_delay_ms=mismatch_delay_ms,
        )
        return GameController(scheduler, config, rng=rng)

    return _make
