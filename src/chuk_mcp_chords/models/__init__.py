"""
Pydantic models for the chord engine.

This module provides:
- LevelConfiguration: Candidate sets for chord problems
- ProgressionLevel: Candidate keys and patterns for progression problems
- GeneratedChord: One voiced chord problem with its expected answer
- Progression: One voiced 4-chord progression problem
"""

from chuk_mcp_chords.models.chord import GeneratedChord
from chuk_mcp_chords.models.level import LevelConfiguration, LevelMetadata, ProgressionLevel
from chuk_mcp_chords.models.progression import Progression, ProgressionChord, ProgressionStep

__all__ = [
    "GeneratedChord",
    "LevelConfiguration",
    "LevelMetadata",
    "Progression",
    "ProgressionChord",
    "ProgressionLevel",
    "ProgressionStep",
]
