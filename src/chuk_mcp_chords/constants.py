"""
Constants and enums for the chord engine.

No magic strings - use enums for constrained values.
"""

from enum import Enum


class InversionEncoding(str, Enum):
    """
    How an inversion is written into an expected answer.

    AUTO picks figured bass for triads and sevenths and a slash bass
    note for extended and suspended chords.
    """

    AUTO = "auto"
    FIGURED = "figured"  # C6, C64, Cmaj7(65)
    SLASH = "slash"  # C/E, Dmaj9/F#
    NUMBERED = "numbered"  # C/1, Dmaj9/2


class KeyMode(str, Enum):
    """Key modes supported by the progression generator."""

    MAJOR = "major"
    MINOR = "minor"


class ChordFamily(str, Enum):
    """Catalog families, grouped by the highest chord extension."""

    TRIAD = "triad"
    SEVENTH = "seventh"
    NINTH = "ninth"
    ELEVENTH = "eleventh"
    THIRTEENTH = "thirteenth"
    SUSPENDED = "suspended"


# Redraw limit for duplicate avoidance between successive problems
MAX_DRAW_ATTEMPTS = 20

# Progressions are always four chords long
PROGRESSION_LENGTH = 4

# Separator between numerals in a rendered progression answer
PROGRESSION_SEPARATOR = " "

# Octave bounds accepted by level configurations
MIN_OCTAVE = 0
MAX_OCTAVE = 9


class ErrorMessages:
    """Standardized error messages."""

    LEVEL_NOT_FOUND = "Level '{name}' not found."
    WRONG_LEVEL_KIND = "Level '{name}' is not a {kind} level."
    UNKNOWN_QUALITY = "Unknown chord quality: '{symbol}'."
    INVALID_KEY = "Invalid key: '{key}'. Expected a form like 'C', 'Am', 'F#_minor'."
    INVERSION_OUT_OF_RANGE = (
        "Inversion {inversion} is out of range for '{symbol}' ({tones} tones)."
    )
    NO_VALID_INVERSIONS = "No configured inversion is valid for '{symbol}'."
    RANGE_TOO_NARROW = (
        "Octave range {low}-{high} cannot hold '{symbol}' inversion {inversion} "
        "(span {span} semitones)."
    )
    UNKNOWN_NUMERAL = "Unknown numeral '{symbol}' for a {mode} key."
