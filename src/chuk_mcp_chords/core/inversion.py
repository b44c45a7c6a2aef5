"""
Inversion primitives - which chord tone sits in the bass.

An inversion is a cyclic rotation of a quality's tone order: inversion
``n`` starts from tone ``n`` and wraps around to the root. Inversion 0
(root position) is the identity and is valid for every quality.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from chuk_mcp_chords.constants import ErrorMessages
from chuk_mcp_chords.core.chord import ChordQuality
from chuk_mcp_chords.core.pitch import PitchClass
from chuk_mcp_chords.errors import InvalidInversion


@dataclass(frozen=True)
class InversionScheme:
    """
    A tone ordering for one inversion of a chord.

    permutation holds tone indices (into the quality's intervals) from
    the bass upwards.
    """

    index: int
    permutation: tuple[int, ...]

    def __post_init__(self) -> None:
        size = len(self.permutation)
        expected = tuple((self.index + i) % size for i in range(size)) if size else ()
        if self.permutation != expected:
            raise ValueError(
                f"Permutation {self.permutation} is not a rotation starting at {self.index}"
            )

    @property
    def bass_tone(self) -> int:
        """Index of the chord tone in the bass."""
        return self.permutation[0]


# Figured-bass suffixes by tone count, indexed by inversion
FIGURED_BASS: Mapping[int, tuple[str, ...]] = MappingProxyType(
    {
        3: ("", "6", "64"),
        4: ("7", "65", "43", "42"),
    }
)

# Accepted figures when reading answers; "2" is shorthand for "42"
FIGURED_BASS_INDEX: Mapping[int, Mapping[str, int]] = MappingProxyType(
    {
        3: MappingProxyType({"6": 1, "64": 2}),
        4: MappingProxyType({"65": 1, "43": 2, "42": 3, "2": 3}),
    }
)

# Descriptive inversion words (lower-case, no spaces)
INVERSION_WORDS: Mapping[str, int] = MappingProxyType(
    {
        "first": 1,
        "1st": 1,
        "second": 2,
        "2nd": 2,
        "third": 3,
        "3rd": 3,
        "fourth": 4,
        "4th": 4,
        "fifth": 5,
        "5th": 5,
        "sixth": 6,
        "6th": 6,
    }
)

_ORDINALS = ("root position", "1st", "2nd", "3rd", "4th", "5th", "6th")


def inversion_scheme(quality: ChordQuality, index: int) -> InversionScheme:
    """
    Build the inversion scheme for a quality.

    Args:
        quality: The chord quality
        index: Inversion index (0 = root position)

    Returns:
        The scheme whose permutation starts at the requested tone

    Raises:
        InvalidInversion: If index is negative or past the last tone
    """
    size = quality.tone_count
    if not 0 <= index < size:
        raise InvalidInversion(
            ErrorMessages.INVERSION_OUT_OF_RANGE.format(
                inversion=index, symbol=quality.symbol or "major", tones=size
            )
        )
    return InversionScheme(index, tuple((index + i) % size for i in range(size)))


def reorder(quality: ChordQuality, index: int) -> list[int]:
    """
    Interval offsets of a quality, starting from the tone in the bass.

    Offsets are unchanged (not folded into an octave); the voicing
    step lifts wrapped tones above the bass.

    Examples:
        reorder(MAJOR_7, 0) -> [0, 4, 7, 11]
        reorder(MAJOR_7, 2) -> [7, 11, 0, 4]
    """
    scheme = inversion_scheme(quality, index)
    return [quality.intervals[tone] for tone in scheme.permutation]


def bass_pitch_class(root: PitchClass, quality: ChordQuality, index: int) -> PitchClass:
    """The pitch class sounding in the bass for an inversion."""
    return root.transpose(quality.intervals[inversion_scheme(quality, index).bass_tone])


def valid_inversions(quality: ChordQuality, candidates: tuple[int, ...]) -> list[int]:
    """Filter candidate inversion indices down to those the quality supports."""
    return [i for i in candidates if 0 <= i < quality.tone_count]


def figured_bass(quality: ChordQuality, index: int) -> str | None:
    """Figured-bass suffix for an inversion, or None when there is no figure."""
    figures = FIGURED_BASS.get(quality.tone_count)
    if figures is None or not 0 < index < len(figures):
        return None
    return figures[index]


def describe_inversion(index: int) -> str:
    """Human-readable inversion name, e.g. '2nd inversion'."""
    if index == 0:
        return _ORDINALS[0]
    if index < len(_ORDINALS):
        return f"{_ORDINALS[index]} inversion"
    return f"{index}th inversion"
