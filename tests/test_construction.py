"""
Tests for checking placed notes against a requested chord.
"""

import pytest

from chuk_mcp_chords.core import ChordQuality, PitchClass, all_qualities, lookup_quality
from chuk_mcp_chords.errors import InvalidInversion
from chuk_mcp_chords.generator import build_chord
from chuk_mcp_chords.matching import validate_construction
from chuk_mcp_chords.models.level import LevelConfiguration


class TestValidateConstruction:
    """Tests for validate_construction."""

    def test_first_inversion_triad(self) -> None:
        """The third in the bass and every tone present builds C/E."""
        assert validate_construction([64, 67, 72], PitchClass.C, ChordQuality.MAJOR, 1)
        assert validate_construction([72, 52, 67], 0, ChordQuality.MAJOR, 1)

    def test_wrong_bass(self) -> None:
        """The right tones with the wrong bass are the wrong inversion."""
        assert not validate_construction([60, 64, 67], 0, ChordQuality.MAJOR, 1)
        assert not validate_construction([67, 72, 76], 0, ChordQuality.MAJOR, 1)
        assert validate_construction([60, 64, 67], 0, ChordQuality.MAJOR, 0)

    def test_note_count(self) -> None:
        """One note per chord tone, no more and no fewer."""
        assert not validate_construction([64, 67], 0, ChordQuality.MAJOR, 1)
        assert not validate_construction([64, 67, 72, 76], 0, ChordQuality.MAJOR, 1)
        assert not validate_construction([], 0, ChordQuality.MAJOR, 0)

    def test_pitch_classes(self) -> None:
        """A foreign tone is wrong even with the right bass and count."""
        assert not validate_construction([64, 67, 71], 0, ChordQuality.MAJOR, 1)
        assert not validate_construction([60, 63, 67], 0, ChordQuality.MAJOR, 0)

    def test_repeated_pitch_class(self) -> None:
        """A quality with a doubled pitch class needs both copies."""
        quality = lookup_quality("sus2add9")
        assert validate_construction([62, 72, 74, 79], 0, quality, 3)
        assert not validate_construction([62, 72, 79, 84], 0, quality, 3)

    def test_unreadable_placements(self) -> None:
        """Non-numeric placements are wrong, not errors."""
        assert not validate_construction("CEG", 0, ChordQuality.MAJOR, 0)  # type: ignore[arg-type]
        placed = [60, 64.0, 67]
        assert not validate_construction(placed, 0, ChordQuality.MAJOR, 0)  # type: ignore[arg-type]
        assert not validate_construction([True, 64, 67], 0, ChordQuality.MAJOR, 0)
        assert not validate_construction(None, 0, ChordQuality.MAJOR, 0)  # type: ignore[arg-type]

    def test_invalid_inversion(self) -> None:
        """Requesting an inversion the quality lacks is a caller error."""
        with pytest.raises(InvalidInversion):
            validate_construction([60, 64, 67], 0, ChordQuality.MAJOR, 3)

    def test_generated_voicings_build_their_chord(self) -> None:
        """Every generated voicing is a correct construction of itself."""
        config = LevelConfiguration(roots=["C"], qualities=["major"], octave_range=(2, 5))
        for quality in all_qualities():
            for inversion in range(quality.tone_count):
                chord = build_chord(5, quality, inversion, config)
                assert validate_construction(list(chord.pitches), 5, quality, inversion), (
                    quality.symbol,
                    inversion,
                )
