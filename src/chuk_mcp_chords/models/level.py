"""
Level models - the configuration a chord or progression problem is drawn from.

A level narrows the solution space: which roots, qualities and inversions
may appear, in which octave window, and whether the answer must name the
inversion. Levels are read-only inputs to every generation call.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_mcp_chords.constants import (
    MAX_OCTAVE,
    MIN_OCTAVE,
    PROGRESSION_LENGTH,
    ErrorMessages,
    InversionEncoding,
    KeyMode,
)
from chuk_mcp_chords.core.chord import ChordQuality, lookup_quality
from chuk_mcp_chords.core.pitch import parse_note_name
from chuk_mcp_chords.core.roman import split_figure
from chuk_mcp_chords.core.scale import Key


def _check_octave_range(value: tuple[int, int]) -> tuple[int, int]:
    low, high = value
    if not MIN_OCTAVE <= low <= high <= MAX_OCTAVE:
        raise ValueError(
            f"Octave range must satisfy {MIN_OCTAVE} <= min <= max <= {MAX_OCTAVE}, got {value}"
        )
    return value


class LevelConfiguration(BaseModel):
    """
    Candidate sets for chord problems.

    Roots may be given as pitch classes (0-11) or note names; qualities as
    catalog symbols ("maj7", "m7b5", "") or catalog keys ("major7").
    Both are stored canonically: roots as pitch classes, qualities as
    catalog symbols.
    """

    name: str = Field("custom", description="Level identifier")
    title: str = Field("", description="Display title")
    description: str = Field("", description="What the level drills")
    roots: tuple[int, ...] = Field(..., min_length=1, description="Candidate root pitch classes")
    qualities: tuple[str, ...] = Field(..., min_length=1, description="Candidate quality symbols")
    inversions: tuple[int, ...] = Field((0,), min_length=1, description="Candidate inversions")
    octave_range: tuple[int, int] = Field((4, 5), description="Lowest and highest octave")
    require_inversion_labeling: bool = Field(
        False, description="Answers must name the inversion"
    )
    inversion_encoding: InversionEncoding = Field(
        InversionEncoding.AUTO, description="How inversions are written in expected answers"
    )
    prefer_flats: bool = Field(False, description="Spell black keys with flats")

    model_config = {"frozen": True}

    @field_validator("roots", mode="before")
    @classmethod
    def validate_roots(cls, v: Any) -> tuple[int, ...]:
        """Accept pitch classes or note names, dropping duplicates."""
        roots: list[int] = []
        for item in v:
            if isinstance(item, str):
                pitch_class = parse_note_name(item)
                if pitch_class is None:
                    raise ValueError(f"Unknown root note: {item}")
                value = pitch_class.value
            else:
                value = int(item)
                if not 0 <= value <= 11:
                    raise ValueError(f"Root pitch class must be 0-11, got {value}")
            if value not in roots:
                roots.append(value)
        return tuple(roots)

    @field_validator("qualities", mode="before")
    @classmethod
    def validate_qualities(cls, v: Any) -> tuple[str, ...]:
        """Resolve every quality to its catalog symbol."""
        symbols: list[str] = []
        for item in v:
            quality = lookup_quality(str(item))
            if quality is None:
                raise ValueError(ErrorMessages.UNKNOWN_QUALITY.format(symbol=item))
            if quality.symbol not in symbols:
                symbols.append(quality.symbol)
        return tuple(symbols)

    @field_validator("inversions")
    @classmethod
    def validate_inversions(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Inversion indices are non-negative."""
        if any(i < 0 for i in v):
            raise ValueError(f"Inversions must be non-negative, got {v}")
        return tuple(dict.fromkeys(v))

    @field_validator("octave_range")
    @classmethod
    def validate_octave_range(cls, v: tuple[int, int]) -> tuple[int, int]:
        """Octave bounds are ordered and within the supported range."""
        return _check_octave_range(v)

    @property
    def min_octave(self) -> int:
        return self.octave_range[0]

    @property
    def max_octave(self) -> int:
        return self.octave_range[1]

    @property
    def floor_pitch(self) -> int:
        """Lowest pitch allowed by the octave range."""
        return self.min_octave * 12

    @property
    def ceiling_pitch(self) -> int:
        """Highest pitch allowed by the octave range."""
        return (self.max_octave + 1) * 12 - 1

    def quality_objects(self) -> list[ChordQuality]:
        """The configured qualities as catalog entries."""
        return [q for symbol in self.qualities if (q := lookup_quality(symbol)) is not None]


class ProgressionLevel(BaseModel):
    """
    Candidate sets for 4-chord progression problems.

    Patterns are Roman-numeral sequences, one list per key mode. A
    numeral may carry a figured-bass suffix (bII6) to pin its inversion.
    """

    name: str = Field("custom", description="Level identifier")
    title: str = Field("", description="Display title")
    description: str = Field("", description="What the level drills")
    keys: tuple[str, ...] = Field(
        ("C", "G", "D", "F", "Am", "Em", "Dm"), min_length=1, description="Candidate keys"
    )
    major_patterns: tuple[tuple[str, ...], ...] = Field(
        (), description="Numeral patterns used in major keys"
    )
    minor_patterns: tuple[tuple[str, ...], ...] = Field(
        (), description="Numeral patterns used in minor keys"
    )
    inversions: tuple[int, ...] = Field((0,), min_length=1, description="Candidate inversions")
    octave_range: tuple[int, int] = Field((4, 5), description="Lowest and highest octave")
    require_inversion_labeling: bool = Field(
        False, description="Answers must carry figured bass"
    )
    require_non_diatonic: bool = Field(
        False, description="Every progression contains a borrowed chord"
    )

    model_config = {"frozen": True}

    @field_validator("keys")
    @classmethod
    def validate_keys(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Every key must parse."""
        for key in v:
            Key.parse(key)
        return v

    @field_validator("octave_range")
    @classmethod
    def validate_octave_range(cls, v: tuple[int, int]) -> tuple[int, int]:
        """Octave bounds are ordered and within the supported range."""
        return _check_octave_range(v)

    @model_validator(mode="after")
    def validate_patterns(self) -> ProgressionLevel:
        """Patterns are four numerals long and parse in their mode."""
        for mode, patterns in (
            (KeyMode.MAJOR, self.major_patterns),
            (KeyMode.MINOR, self.minor_patterns),
        ):
            for pattern in patterns:
                if len(pattern) != PROGRESSION_LENGTH:
                    raise ValueError(
                        f"Pattern {list(pattern)} must have {PROGRESSION_LENGTH} numerals"
                    )
                for symbol in pattern:
                    split_figure(symbol, mode)
        return self

    def patterns_for(self, mode: KeyMode) -> tuple[tuple[str, ...], ...]:
        """Configured patterns for a key mode (may be empty)."""
        return self.major_patterns if mode == KeyMode.MAJOR else self.minor_patterns


LevelKind = Literal["chord", "progression"]


class LevelMetadata(BaseModel):
    """Lightweight metadata for listing levels."""

    name: str
    kind: LevelKind
    title: str
    description: str

    model_config = {"frozen": True}

    @classmethod
    def from_level(cls, level: LevelConfiguration | ProgressionLevel) -> LevelMetadata:
        """Create metadata from a level."""
        return cls(
            name=level.name,
            kind="progression" if isinstance(level, ProgressionLevel) else "chord",
            title=level.title,
            description=level.description,
        )
