"""
Problem generation - voiced chords and progressions from level configurations.
"""

from chuk_mcp_chords.generator.chord import build_chord, generate_chord, render_chord_symbol
from chuk_mcp_chords.generator.progression import (
    DEFAULT_PATTERNS,
    build_progression,
    generate_progression,
    generate_progression_for_level,
)
from chuk_mcp_chords.generator.voicing import place_ascending, refit_to_range, voice_chord

__all__ = [
    "DEFAULT_PATTERNS",
    "build_chord",
    "build_progression",
    "generate_chord",
    "generate_progression",
    "generate_progression_for_level",
    "place_ascending",
    "refit_to_range",
    "render_chord_symbol",
    "voice_chord",
]
