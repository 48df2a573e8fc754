"""Shared test fixtures for GoalBar tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml

from goalbar.controller import AppController
from goalbar.scheduling import ManualScheduler
from goalbar.settings import Settings


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary config root with a settings.yaml."""
    root = tmp_path / "goalbar"
    root.mkdir(parents=True)

    settings = {
        "default_goal": 100,
        "default_type": "currency",
        "locale": "en",
        "log_level": "WARNING",
        "entry_delay_ms": 200,
        "add_pulse_ms": 600,
        "complete_pulse_ms": 1100,
        "reset_shake_ms": 500,
    }
    (root / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    # Set env var
    os.environ["GOALBAR_ROOT"] = str(root)
    yield root
    # Cleanup
    for key in ("GOALBAR_ROOT", "GOALBAR_LOCALE", "GOALBAR_LOG_LEVEL"):
        os.environ.pop(key, None)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def controller(scheduler: ManualScheduler) -> AppController:
    ctrl = AppController(Settings(), scheduler)
    yield ctrl
    ctrl.close()

