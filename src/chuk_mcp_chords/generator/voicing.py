"""
Voicing - turning a (root, quality, inversion) into concrete pitches.

Chords are voiced "close": the bass tone is placed in the lowest octave of
the range and every following tone is lifted by octaves until it sits
strictly above the previous one. The whole chord is then re-fitted into
the octave window, down first and then up.
"""

from __future__ import annotations

import logging

from chuk_mcp_chords.constants import ErrorMessages
from chuk_mcp_chords.core.chord import ChordQuality
from chuk_mcp_chords.core.inversion import reorder
from chuk_mcp_chords.core.pitch import PitchClass
from chuk_mcp_chords.errors import ConfigurationError

logger = logging.getLogger(__name__)


def place_ascending(root_pitch_class: int, offsets: list[int], min_octave: int) -> list[int]:
    """
    Place interval offsets as a strictly ascending pitch sequence.

    Args:
        root_pitch_class: Root of the chord (0-11)
        offsets: Interval offsets from the root, bass first
        min_octave: Octave the root is anchored in

    Returns:
        Ascending absolute pitches, one per offset
    """
    base = PitchClass(root_pitch_class).to_pitch(min_octave)
    pitches: list[int] = []
    for offset in offsets:
        pitch = base + offset
        while pitches and pitch <= pitches[-1]:
            pitch += 12
        pitches.append(pitch)
    return pitches


def refit_to_range(pitches: list[int], floor: int, ceiling: int) -> list[int]:
    """
    Shift a whole chord by octaves so it fits [floor, ceiling].

    Too high: shift down by the smallest multiple of 12 that brings the
    top back under the ceiling. Then, if the bottom is under the floor,
    shift up instead.

    Raises:
        ConfigurationError: If no octave shift fits the chord in the window
    """
    shifted = list(pitches)
    if shifted[-1] > ceiling:
        octaves = -(-(shifted[-1] - ceiling) // 12)
        shifted = [p - 12 * octaves for p in shifted]
    if shifted[0] < floor:
        octaves = -(-(floor - shifted[0]) // 12)
        shifted = [p + 12 * octaves for p in shifted]
    if shifted[0] < floor or shifted[-1] > ceiling:
        raise ConfigurationError(
            f"Pitches {pitches} span {pitches[-1] - pitches[0]} semitones and cannot fit "
            f"between {floor} and {ceiling}"
        )
    if shifted != pitches:
        logger.debug("Re-fitted %s to %s within [%d, %d]", pitches, shifted, floor, ceiling)
    return shifted


def voice_chord(
    root_pitch_class: int,
    quality: ChordQuality,
    inversion: int,
    octave_range: tuple[int, int],
) -> tuple[int, ...]:
    """
    Voice a chord inside an octave range.

    Args:
        root_pitch_class: Root of the chord (0-11)
        quality: Chord quality
        inversion: Inversion index
        octave_range: (min octave, max octave), inclusive

    Returns:
        Ascending pitches, exactly one per chord tone

    Raises:
        InvalidInversion: If the inversion is outside the quality's tones
        ConfigurationError: If the octave range is too narrow for the chord
    """
    low, high = octave_range
    placed = place_ascending(root_pitch_class, reorder(quality, inversion), low)
    try:
        pitches = refit_to_range(placed, low * 12, (high + 1) * 12 - 1)
    except ConfigurationError as e:
        raise ConfigurationError(
            ErrorMessages.RANGE_TOO_NARROW.format(
                low=low,
                high=high,
                symbol=quality.symbol or "major",
                inversion=inversion,
                span=placed[-1] - placed[0],
            )
        ) from e

    if len(pitches) != quality.tone_count:
        raise ConfigurationError(
            f"Voicing produced {len(pitches)} tones for '{quality.symbol}' "
            f"({quality.tone_count} expected)"
        )
    return tuple(pitches)
