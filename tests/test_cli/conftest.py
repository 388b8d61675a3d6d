"""Shared fixtures for CLI tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from labstuff.core import Plate, store


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def plate_path(tmp_path: Path, filled_plate: Plate) -> Path:
    """A stored 8-well plate with row A filled."""
    return store(filled_plate, tmp_path / "plate.labstuff")
