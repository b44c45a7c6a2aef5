"""
Pytest configuration and shared fixtures.
"""

import random
import tempfile
from pathlib import Path

import pytest

from chuk_mcp_chords.models.level import LevelConfiguration


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible generation."""
    return random.Random(1234)


@pytest.fixture
def labeled_config() -> LevelConfiguration:
    """A wide-range level that requires inversion labeling."""
    return LevelConfiguration(
        roots=list(range(12)),
        qualities=["major", "maj7", "maj9"],
        inversions=[0, 1, 2, 3],
        octave_range=(3, 6),
        require_inversion_labeling=True,
    )


@pytest.fixture
def unlabeled_config() -> LevelConfiguration:
    """The same level without inversion labeling."""
    return LevelConfiguration(
        roots=list(range(12)),
        qualities=["major", "maj7", "maj9"],
        inversions=[0, 1, 2, 3],
        octave_range=(3, 6),
        require_inversion_labeling=False,
    )
