"""
Core chord primitives - the Radix layer.

These are the invariants that everything else composes on:
- PitchClass: The 12 chromatic pitch classes (0-11) and note-name helpers
- ChordQuality: Interval stacks plus accepted aliases, in a static catalog
- InversionScheme: Which chord tone sits in the bass
- ScaleType / Key: Spelled keys for scale-degree-relative chords
"""

from chuk_mcp_chords.core.chord import (
    QUALITIES,
    ChordQuality,
    alias_matches,
    all_qualities,
    lookup_quality,
    quality_for_intervals,
    resolve_alias,
)
from chuk_mcp_chords.core.inversion import (
    InversionScheme,
    bass_pitch_class,
    figured_bass,
    inversion_scheme,
    reorder,
)
from chuk_mcp_chords.core.notation import normalize_quality_text
from chuk_mcp_chords.core.pitch import (
    PitchClass,
    names_are_enharmonic_equivalent,
    parse_note_name,
    pitch_class_to_names,
    split_note_prefix,
)
from chuk_mcp_chords.core.scale import Key, ScaleType

__all__ = [
    # Pitch
    "PitchClass",
    "names_are_enharmonic_equivalent",
    "parse_note_name",
    "pitch_class_to_names",
    "split_note_prefix",
    # Chord
    "QUALITIES",
    "ChordQuality",
    "alias_matches",
    "all_qualities",
    "lookup_quality",
    "normalize_quality_text",
    "quality_for_intervals",
    "resolve_alias",
    # Inversion
    "InversionScheme",
    "bass_pitch_class",
    "figured_bass",
    "inversion_scheme",
    "reorder",
    # Scale
    "Key",
    "ScaleType",
]
