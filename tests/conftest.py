# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import json
import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop SPATIALMIN_* variables so a developer's shell can't leak into settings."""
    for key in list(os.environ):
        if key.startswith("SPATIALMIN_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Undo configure_logging() so handlers bound to CliRunner streams don't outlive the test."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    structlog.reset_defaults()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


# =============================================================================
# Documents
# =============================================================================


def make_spatial_document() -> dict[str, Any]:
    """A small export in the shape the spatial editor produces.

    Expected aliases (first-discovery order):
        TEAM_1_HQ -> a, HQArea -> b, SpawnPoint_1_1 -> c,
        SpawnPoint_1_2 -> d, Badwater_Terrain -> e
    with compound ids TEAM_1_HQ/HQArea -> a/b, TEAM_1_HQ/SpawnPoint_1_1 -> a/c,
    TEAM_1_HQ/SpawnPoint_1_2 -> a/d. Static/Badwater_Terrain is excluded.
    """
    return {
        "Portal_Dynamic": [
            {
                "name": "TEAM_1_HQ",
                "id": "TEAM_1_HQ",
                "type": "HQ_PlayerSpawner",
                "HQArea": "TEAM_1_HQ/HQArea",
                "InfantrySpawns": ["TEAM_1_HQ/SpawnPoint_1_1", "TEAM_1_HQ/SpawnPoint_1_2"],
                "position": {"x": 12.3456789, "y": -0.5, "z": 100.0},
            },
            {
                "name": "HQArea",
                "id": "TEAM_1_HQ/HQArea",
                "type": "PolygonVolume",
                "points": [{"x": 1.00000001, "y": 2.5}, {"x": -3.1415926535, "y": 0.0}],
            },
            {
                "name": "SpawnPoint_1_1",
                "id": "TEAM_1_HQ/SpawnPoint_1_1",
                "type": "SpawnPoint",
            },
            {
                "name": "SpawnPoint_1_2",
                "id": "TEAM_1_HQ/SpawnPoint_1_2",
                "type": "SpawnPoint",
            },
        ],
        "Static": [
            {
                "name": "Badwater_Terrain",
                "id": "Static/Badwater_Terrain",
                "type": "Terrain",
                "scale": 1.0,
            },
        ],
    }


@pytest.fixture
def spatial_document() -> dict[str, Any]:
    return make_spatial_document()


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[..., Path]:
    """Write a document to tmp_path and return its path."""

    def _write(document: Any, name: str = "map.spatial.json", **dump_kwargs: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document, **dump_kwargs), encoding="utf-8")
        return path

    return _write
