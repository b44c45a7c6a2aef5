"""
Progression models - a 4-chord, scale-degree-relative problem.

Each step is either a diatonic degree or a non-diatonic chord given by
its semitone offset from the tonic and its quality; every step carries
its own inversion.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from chuk_mcp_chords.constants import PROGRESSION_SEPARATOR, KeyMode


class ProgressionStep(BaseModel):
    """One step descriptor: a diatonic degree or an explicit non-diatonic chord."""

    numeral: str = Field(..., description="Roman-numeral symbol")
    degree: int | None = Field(None, ge=1, le=7, description="Diatonic scale degree")
    root_offset: int | None = Field(None, ge=0, le=11, description="Semitones above the tonic")
    quality: str | None = Field(None, description="Quality symbol for non-diatonic steps")
    inversion: int = Field(0, ge=0, description="Inversion index")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_kind(self) -> ProgressionStep:
        """Exactly one of degree / (root_offset, quality) describes the step."""
        if self.degree is None:
            if self.root_offset is None or self.quality is None:
                raise ValueError("Non-diatonic steps need root_offset and quality")
        elif self.root_offset is not None:
            raise ValueError("A step is either diatonic or non-diatonic, not both")
        return self

    @property
    def is_diatonic(self) -> bool:
        return self.degree is not None


class ProgressionChord(BaseModel):
    """A step resolved in a key and voiced."""

    numeral: str = Field(..., description="Roman-numeral symbol")
    rendered: str = Field(..., description="Numeral as written in the answer")
    alternatives: tuple[str, ...] = Field((), description="Other accepted numeral spellings")
    root_pitch_class: int = Field(..., ge=0, le=11)
    root_name: str
    quality: str
    inversion: int = Field(0, ge=0)
    pitches: tuple[int, ...]

    model_config = {"frozen": True}


class Progression(BaseModel):
    """A generated progression and its expected answer."""

    key: str = Field(..., description="Key name, e.g. 'Am'")
    mode: KeyMode
    steps: tuple[ProgressionStep, ...]
    chords: tuple[ProgressionChord, ...]
    require_inversion_labeling: bool = False
    expected_answer: str

    model_config = {"frozen": True}

    @property
    def numerals(self) -> list[str]:
        """The rendered numerals, in order."""
        return [chord.rendered for chord in self.chords]

    @classmethod
    def render_answer(cls, numerals: list[str]) -> str:
        """Join rendered numerals with the answer separator."""
        return PROGRESSION_SEPARATOR.join(numerals)
