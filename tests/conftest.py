"""Pytest configuration - shared fixtures.

Qt runs offscreen so controller and view tests work without a display.
"""
from __future__ import annotations

import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from flock_sim.boids import Agent, SimulationConfig, Field  # noqa: E402

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def project_root():
    """Return path to project root."""
    return ROOT


@pytest.fixture
def config():
    """Default run settings (800x600 field, margin 200)."""
    return SimulationConfig()


@pytest.fixture
def open_config():
    """No boundary band, so only the flocking rules act."""
    return SimulationConfig(margin=0.0, field=Field(800.0, 600.0))


@pytest.fixture
def pair():
    """Two agents 10 apart heading toward each other."""
    a = Agent()
    a.initialize((0.0, 0.0), (1.0, 0.0))
    b = Agent()
    b.initialize((10.0, 0.0), (-1.0, 0.0))
    return a, b


@pytest.fixture(scope="session")
def qapp():
    """Single QApplication for the test session."""
    from PyQt5.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
