"""Pytest configuration and shared fixtures for the path tracer tests."""

from __future__ import annotations

import logging
import random
import sys
from pathlib import Path

import pytest

# Make the src/ layout importable without an editable install
SRC_DIR = Path(__file__).parent.parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from pathtracer.core.vector import Vector3  # noqa: E402
from pathtracer.geometry.sphere import Sphere  # noqa: E402
from pathtracer.geometry.world import World  # noqa: E402
from pathtracer.materials import Diffuse, Metal  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Configure logging for tests."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s [%(levelname)s] %(message)s",
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so stochastic tests are repeatable."""
    return random.Random(1234)


@pytest.fixture
def grey() -> Diffuse:
    return Diffuse(Vector3(0.5, 0.5, 0.5))


@pytest.fixture
def mirror() -> Metal:
    return Metal(Vector3(0.8, 0.8, 0.8), 0.0)


@pytest.fixture
def ground_and_ball(grey: Diffuse, mirror: Metal) -> World:
    """Large diffuse ground sphere plus a small metal sphere resting on it."""
    return (World.builder()
            .add_object(Sphere(Vector3(0, -1000, 0), 1000, grey))
            .add_object(Sphere(Vector3(0, 0.5, 0), 0.5, mirror))
            .build(rng=random.Random(7)))
