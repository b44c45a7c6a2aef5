"""
Scale primitives - ScaleType and Key.

Scales are interval patterns from a root. Keys are scale types applied to
a tonic, spelled with one letter per degree (F# major contains E#, not F).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from chuk_mcp_chords.constants import ErrorMessages, KeyMode
from chuk_mcp_chords.core.chord import ChordQuality, quality_for_intervals
from chuk_mcp_chords.core.pitch import PitchClass, parse_note_name

_LETTERS = "CDEFGAB"
_LETTER_VALUES = (0, 2, 4, 5, 7, 9, 11)
_ACCIDENTALS = {-2: "bb", -1: "b", 0: "", 1: "#", 2: "##"}

_KEY_NAME = re.compile(
    r"^\s*([A-Ga-g])([#♯b♭]?)\s*[_\s]?\s*(m|min|minor|M|maj|major)?\s*$"
)
_MINOR_WORDS = {"m", "min", "minor"}


@dataclass(frozen=True)
class ScaleType:
    """
    A scale defined by its interval pattern.

    The intervals are from one degree to the next (not cumulative).
    A major scale is: W W H W W W H (2 2 1 2 2 2 1 semitones)

    Immutable and hashable.
    """

    intervals: tuple[int, ...]
    name: str = ""

    # Scale types used by the progression generator (defined after class)
    MAJOR: ClassVar[ScaleType]
    NATURAL_MINOR: ClassVar[ScaleType]

    def __post_init__(self) -> None:
        # Validate that intervals sum to an octave (12 semitones)
        total = sum(self.intervals)
        if total != 12:
            raise ValueError(f"Scale intervals must sum to 12 semitones, got {total}")

    def degree_offsets(self) -> list[int]:
        """Semitones from the root to each of the 7 degrees."""
        offsets = [0]
        for step in self.intervals[:-1]:  # Don't include last (octave return)
            offsets.append(offsets[-1] + step)
        return offsets

    def __str__(self) -> str:
        return self.name or f"ScaleType({self.intervals})"


ScaleType.MAJOR = ScaleType((2, 2, 1, 2, 2, 2, 1), "major")
ScaleType.NATURAL_MINOR = ScaleType((2, 1, 2, 2, 1, 2, 2), "natural minor")


@dataclass(frozen=True)
class Key:
    """
    A key: a spelled tonic plus a mode.

    This is the context for resolving scale degrees to pitch classes
    and for building diatonic triads.

    Examples:
        Key.parse("Am") = A minor
        Key.parse("F#") = F# major
    """

    tonic: PitchClass
    tonic_name: str
    mode: KeyMode = KeyMode.MAJOR

    @property
    def scale(self) -> ScaleType:
        """The scale type for this key's mode."""
        return ScaleType.MAJOR if self.mode == KeyMode.MAJOR else ScaleType.NATURAL_MINOR

    @property
    def prefer_flats(self) -> bool:
        """Whether chromatic notes in this key read better as flats."""
        return "b" in self.tonic_name or self.tonic_name in _FLAT_SIDE[self.mode]

    def degree_to_pitch_class(self, degree: int) -> PitchClass:
        """
        Resolve a scale degree (1-7) to a pitch class.

        Raises:
            ValueError: If degree is outside 1-7
        """
        if not 1 <= degree <= 7:
            raise ValueError(f"Degree must be 1-7, got {degree}")
        return self.tonic.transpose(self.scale.degree_offsets()[degree - 1])

    def spelled_notes(self) -> list[str]:
        """
        Letter-correct names of the 7 scale notes.

        Each letter appears once, so F# major spells its 7th as E#.
        """
        start = _LETTERS.index(self.tonic_name[0])
        names = []
        for i, offset in enumerate(self.scale.degree_offsets()):
            letter_index = (start + i) % 7
            pc = (self.tonic.value + offset) % 12
            diff = (pc - _LETTER_VALUES[letter_index]) % 12
            if diff > 6:
                diff -= 12
            names.append(_LETTERS[letter_index] + _ACCIDENTALS[diff])
        return names

    def triad_quality(self, degree: int) -> ChordQuality:
        """
        The diatonic triad quality on a scale degree.

        Built by stacking the scale's own third and fifth above the degree.
        """
        offsets = self.scale.degree_offsets()
        root = offsets[degree - 1]
        third = (offsets[(degree + 1) % 7] - root) % 12
        fifth = (offsets[(degree + 3) % 7] - root) % 12
        quality = quality_for_intervals((0, third, fifth))
        if quality is None:
            raise ValueError(f"No catalog triad for degree {degree} of {self}")
        return quality

    @property
    def short_name(self) -> str:
        """Compact name, e.g. 'Am' or 'Eb'."""
        return self.tonic_name + ("m" if self.mode == KeyMode.MINOR else "")

    def __str__(self) -> str:
        return f"{self.tonic_name} {self.mode.value}"

    @classmethod
    def parse(cls, name: str) -> Key:
        """
        Parse a key from a string like 'C', 'Am', 'A minor', 'F#_minor', 'Bb'.

        Args:
            name: Key name; the mode defaults to major

        Returns:
            Parsed Key object
        """
        match = _KEY_NAME.match(name)
        if not match:
            raise ValueError(ErrorMessages.INVALID_KEY.format(key=name))

        letter, accidental, mode_word = match.groups()
        tonic_name = letter.upper() + accidental.replace("♯", "#").replace("♭", "b")
        tonic = parse_note_name(tonic_name)
        if tonic is None:
            raise ValueError(ErrorMessages.INVALID_KEY.format(key=name))

        mode = KeyMode.MINOR if mode_word in _MINOR_WORDS else KeyMode.MAJOR
        return cls(tonic, tonic_name, mode)


# Natural-letter tonics whose key signatures use flats
_FLAT_SIDE: dict[KeyMode, frozenset[str]] = {
    KeyMode.MAJOR: frozenset({"F"}),
    KeyMode.MINOR: frozenset({"D", "G", "C", "F"}),
}
