"""
Generated chord model - one concrete chord problem.

Created fresh per problem by the generator and immutable once returned.
The caller keeps it for the lifetime of one problem and hands it back
to the matcher (and to the generator, for duplicate avoidance).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from chuk_mcp_chords.core.chord import ChordQuality, lookup_quality


class GeneratedChord(BaseModel):
    """A voiced chord plus the answer that names it."""

    root_pitch_class: int = Field(..., ge=0, le=11, description="Root pitch class")
    root_name: str = Field(..., description="Root letter name as displayed")
    quality: str = Field(..., description="Catalog quality symbol")
    inversion: int = Field(0, ge=0, description="Inversion index (0 = root position)")
    pitches: tuple[int, ...] = Field(..., description="Ascending absolute pitches")
    bass_name: str = Field(..., description="Letter name of the bass tone")
    expected_answer: str = Field(..., description="Canonical answer text")

    model_config = {"frozen": True}

    @property
    def key(self) -> tuple[int, str, int]:
        """Identity used for duplicate avoidance: (root, quality, inversion)."""
        return (self.root_pitch_class, self.quality, self.inversion)

    @property
    def chord_quality(self) -> ChordQuality:
        """The catalog entry for this chord's quality."""
        quality = lookup_quality(self.quality)
        if quality is None:
            raise ValueError(f"Unknown chord quality: {self.quality}")
        return quality
