"""
Pitch primitives - PitchClass and note-name helpers.

A pitch is a plain integer on an absolute semitone scale where pitch 0
is the C of the reference octave: pitch = octave * 12 + pitch class.
PitchClass represents the 12 chromatic pitches (octave-independent).

Note names are parsed arithmetically (letter + accidentals), so every
spelling of a pitch class resolves to the same value: C# == Db, E# == F.
"""

from __future__ import annotations

import re
from enum import IntEnum

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
_FLAT_NAMES: list[str] = [
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]

_LETTER_VALUES: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
_ACCIDENTAL_VALUES: dict[str, int] = {"#": 1, "♯": 1, "b": -1, "♭": -1}

_NOTE_NAME = re.compile(r"^([A-Ga-g])([#♯b♭]*)$")
_NOTE_PREFIX = re.compile(r"^([A-Ga-g])([#♯b♭]?)")


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).

    Spelling is a display concern, handled at serialization.
    Internally, we use sharp names (Cs, Ds, etc.).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def to_pitch(self, octave: int) -> int:
        """Convert to an absolute pitch. C of octave 5 = 60."""
        return self.value + octave * 12

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @classmethod
    def from_pitch(cls, pitch: int) -> PitchClass:
        """Extract pitch class from an absolute pitch."""
        return cls(pitch % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'C#', 'Db', 'e#'."""
        pitch_class = parse_note_name(name)
        if pitch_class is not None:
            return pitch_class

        # Try enum names (C, Cs, D, Ds, etc.)
        name_upper = name.strip().upper()
        for member in cls:
            if member.name.upper() == name_upper:
                return member

        raise ValueError(f"Unknown pitch class: {name}")


def parse_note_name(name: str) -> PitchClass | None:
    """
    Parse a letter name with any number of accidentals.

    Case-insensitive on the letter; accepts ASCII (#, b) and Unicode
    (♯, ♭) accidentals.

    Returns:
        The pitch class, or None if the text is not a note name
    """
    match = _NOTE_NAME.match(name.strip())
    if not match:
        return None
    letter, accidentals = match.groups()
    value = _LETTER_VALUES[letter.upper()]
    value += sum(_ACCIDENTAL_VALUES[a] for a in accidentals)
    return PitchClass(value % 12)


def split_note_prefix(text: str) -> tuple[str, str] | None:
    """
    Split a leading note name (letter + optional accidental) off a string.

    Returns:
        (note, remainder), or None if the text does not start with a letter A-G
    """
    match = _NOTE_PREFIX.match(text)
    if not match:
        return None
    return match.group(0), text[match.end() :]


def pitch_class_to_names(pitch_class: int) -> list[str]:
    """
    All conventional letter names for a pitch class.

    The sharp spelling comes first; the flat spelling follows when it
    differs (natural notes have a single name).
    """
    pc = pitch_class % 12
    names = [_SHARP_NAMES[pc]]
    if _FLAT_NAMES[pc] != _SHARP_NAMES[pc]:
        names.append(_FLAT_NAMES[pc])
    return names


def names_are_enharmonic_equivalent(a: str, b: str) -> bool:
    """
    Whether two note names denote the same pitch class.

    Unknown names are never equivalent to anything.
    """
    first = parse_note_name(a)
    second = parse_note_name(b)
    if first is None or second is None:
        return False
    return first == second


def pitch_name(pitch: int, prefer_flats: bool = False) -> str:
    """Scientific-style name of an absolute pitch, e.g. 60 -> 'C5'."""
    return f"{PitchClass.from_pitch(pitch).spell(prefer_flats)}{pitch // 12}"
