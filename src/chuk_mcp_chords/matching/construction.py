"""
Chord construction matcher - do placed notes build the requested chord?

For construction problems the user places notes for a named chord
instead of naming sounding notes. A placement is right when it has one
note per chord tone, covers exactly the chord's pitch classes and puts
the requested inversion's tone in the bass. The octaves of the upper
tones are free.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from chuk_mcp_chords.core.chord import ChordQuality
from chuk_mcp_chords.core.inversion import bass_pitch_class
from chuk_mcp_chords.core.pitch import PitchClass

logger = logging.getLogger(__name__)


def validate_construction(
    pitches: Sequence[int],
    root: PitchClass | int,
    quality: ChordQuality,
    inversion: int = 0,
) -> bool:
    """
    Check placed pitches against a requested chord.

    Args:
        pitches: Absolute pitches as placed, in any order
        root: Root pitch class of the requested chord
        quality: Requested quality
        inversion: Requested inversion index (0 = root position)

    Returns:
        True when the placement builds the chord, False otherwise

    Raises:
        InvalidInversion: If the requested inversion is outside the quality's tones

    Examples:
        validate_construction([64, 67, 72], 0, ChordQuality.MAJOR, 1) -> True
        validate_construction([60, 64, 67], 0, ChordQuality.MAJOR, 1) -> False
    """
    root = PitchClass(root)
    bass = bass_pitch_class(root, quality, inversion)

    if not isinstance(pitches, (list, tuple)) or not pitches:
        return False
    if not all(isinstance(p, int) and not isinstance(p, bool) for p in pitches):
        return False
    if len(pitches) != quality.tone_count:
        logger.debug("Placed %d notes for a %d-tone chord", len(pitches), quality.tone_count)
        return False

    placed = sorted(pitches)
    expected = sorted(pc.value for pc in quality.get_pitch_classes(root))
    if sorted(p % 12 for p in placed) != expected:
        return False
    return placed[0] % 12 == bass.value
