"""Pytest configuration and shared fixtures for calepinage tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from calepinage.domain.value_objects import Point, TileConfig

FIXTURES_PATH = Path(__file__).parent / "fixtures"
PLANS_PATH = FIXTURES_PATH / "plans"
EVENTS_PATH = FIXTURES_PATH / "events"


# =============================================================================
# Shared outlines (pixels, scale 100 px/m)
# =============================================================================


@pytest.fixture
def scale() -> float:
    """100 pixels per meter keeps pixel and centimeter values equal."""
    return 100.0


@pytest.fixture
def rectangle() -> tuple[Point, ...]:
    """Closed 4 m x 3 m rectangle."""
    return (
        Point(0, 0),
        Point(400, 0),
        Point(400, 300),
        Point(0, 300),
        Point(0, 0),
    )


@pytest.fixture
def l_shape() -> tuple[Point, ...]:
    """Closed L-shaped outline of 8 m²."""
    return (
        Point(0, 0),
        Point(400, 0),
        Point(400, 100),
        Point(200, 100),
        Point(200, 300),
        Point(0, 300),
        Point(0, 0),
    )


@pytest.fixture
def tiles_100x60() -> TileConfig:
    """100 x 60 cm tiles laid without joint."""
    return TileConfig(tile_w=100, tile_h=60, spacing=0)


@pytest.fixture
def plans_path() -> Path:
    return PLANS_PATH


@pytest.fixture
def events_path() -> Path:
    return EVENTS_PATH
