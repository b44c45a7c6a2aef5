"""
Tests for chord answer normalization and matching.
"""

from chuk_mcp_chords.constants import InversionEncoding
from chuk_mcp_chords.core import all_qualities, pitch_class_to_names
from chuk_mcp_chords.core.inversion import INVERSION_WORDS, bass_pitch_class
from chuk_mcp_chords.core.pitch import PitchClass
from chuk_mcp_chords.generator import build_chord
from chuk_mcp_chords.matching import normalize_answer, split_root, validate_answer
from chuk_mcp_chords.models.level import LevelConfiguration


def make_config(labeled: bool = True, **overrides) -> LevelConfiguration:
    """Build a wide-range level configuration."""
    fields = {
        "roots": list(range(12)),
        "qualities": ["major"],
        "inversions": [0, 1, 2, 3],
        "octave_range": (3, 6),
        "require_inversion_labeling": labeled,
    }
    fields.update(overrides)
    return LevelConfiguration(**fields)


class TestNormalizeAnswer:
    """Tests for answer normalization."""

    def test_root_and_quality(self) -> None:
        """Root is lower-cased after the quality keeps its M."""
        assert normalize_answer("CM7") == "cmaj7"
        assert normalize_answer("Cm7") == "cm7"
        assert normalize_answer(" C m7♭5 ") == "cm7b5"
        assert normalize_answer("Dmaj9 / F#") == "dmaj9/f#"
        assert normalize_answer("Bbm7") == "bbm7"
        assert normalize_answer("Db Major 7") == "dbmaj7"

    def test_split_root(self) -> None:
        """Normalized answers split into root and remainder."""
        assert split_root("dmaj9/f#") == ("d", "maj9/f#")
        assert split_root("bbm7") == ("bb", "m7")
        assert split_root("xyz") is None


class TestValidateAnswer:
    """Tests for chord answer matching."""

    def test_major_seventh_aliases(self) -> None:
        """CM7 answers Cmaj7, Cm7 does not."""
        config = make_config(labeled=False, qualities=["maj7"], octave_range=(5, 5))
        chord = build_chord(0, "maj7", 0, config)
        assert chord.expected_answer == "Cmaj7"
        assert validate_answer("CM7", chord, config)
        assert validate_answer("Cmaj7", chord, config)
        assert validate_answer("C maj 7", chord, config)
        assert validate_answer("CΔ7", chord, config)
        assert validate_answer("B#maj7", chord, config)
        assert not validate_answer("Cm7", chord, config)
        assert not validate_answer("DM7", chord, config)

    def test_half_diminished(self) -> None:
        """Unicode flats and half-diminished spellings match."""
        config = make_config(labeled=False, qualities=["m7b5"])
        chord = build_chord(0, "m7b5", 0, config)
        assert validate_answer("cm7♭5", chord, config)
        assert validate_answer("Cø7", chord, config)
        assert validate_answer("Cø", chord, config)
        assert validate_answer("C half-diminished", chord, config)
        assert validate_answer("Cmin7b5", chord, config)
        assert not validate_answer("Cdim7", chord, config)

    def test_labeled_slash_inversion(self) -> None:
        """A labeled Dmaj9/F# accepts every way of naming the first inversion."""
        config = make_config(qualities=["maj9"], octave_range=(4, 6))
        chord = build_chord(2, "maj9", 1, config)
        assert chord.expected_answer == "Dmaj9/F#"
        for answer in (
            "Dmaj9/F#",
            "Dmaj9/Gb",
            "DM9/F#",
            "Dmaj9/1",
            "Dmaj9/first",
            "Dmaj9 first inversion",
            "Dmaj9 (1st inv)",
            "dmaj9/f#",
        ):
            assert validate_answer(answer, chord, config), answer

    def test_labeled_requires_the_right_inversion(self) -> None:
        """Missing or wrong inversion markers are wrong when labeling is required."""
        config = make_config(qualities=["maj9"], octave_range=(4, 6))
        chord = build_chord(2, "maj9", 1, config)
        for answer in ("Dmaj9", "Dmaj9/A", "Dmaj9/2", "Dmaj9/G", "Dmaj9 second inversion"):
            assert not validate_answer(answer, chord, config), answer

    def test_unlabeled_ignores_inversion(self) -> None:
        """Without labeling any inversion marker (or none) is accepted."""
        config = make_config(labeled=False, qualities=["maj9"], octave_range=(4, 6))
        chord = build_chord(2, "maj9", 1, config)
        assert validate_answer("Dmaj9", chord, config)
        assert validate_answer("Dmaj9/A", chord, config)
        assert validate_answer("Dmaj9/F#", chord, config)
        assert not validate_answer("Dm9", chord, config)

    def test_labeled_root_position(self) -> None:
        """A labeled root-position chord rejects any inversion marker."""
        config = make_config()
        chord = build_chord(0, "", 0, config)
        assert validate_answer("C", chord, config)
        assert validate_answer("Cmaj", chord, config)
        assert validate_answer("C major", chord, config)
        assert not validate_answer("C/E", chord, config)
        assert not validate_answer("C6", chord, config)
        assert not validate_answer("C first inversion", chord, config)

    def test_figured_triad(self) -> None:
        """A figured first-inversion triad accepts slash and word forms."""
        config = make_config(inversion_encoding=InversionEncoding.FIGURED)
        chord = build_chord(0, "", 1, config)
        assert chord.expected_answer == "C6"
        assert validate_answer("C6", chord, config)
        assert validate_answer("C/E", chord, config)
        assert validate_answer("C/1", chord, config)
        assert validate_answer("C first inversion", chord, config)
        assert not validate_answer("C64", chord, config)
        assert not validate_answer("C", chord, config)

    def test_figured_seventh(self) -> None:
        """Seventh-chord figures are interchangeable with slash forms."""
        config = make_config(qualities=["maj7"])
        chord = build_chord(0, "maj7", 2, config)
        assert chord.expected_answer == "Cmaj7(43)"
        assert validate_answer("Cmaj743", chord, config)
        assert validate_answer("Cmaj7/G", chord, config)
        assert validate_answer("CM7 second inversion", chord, config)
        assert validate_answer("Cmaj7/2", chord, config)
        assert not validate_answer("Cmaj7(65)", chord, config)

    def test_third_inversion_seventh(self) -> None:
        """The short figure 2 names the third inversion of a seventh chord."""
        config = make_config(qualities=["7"])
        chord = build_chord(7, "7", 3, config)
        assert chord.expected_answer == "G7(42)"
        assert validate_answer("G7/F", chord, config)
        assert validate_answer("G72", chord, config)
        assert validate_answer("G7 3rd inversion", chord, config)

    def test_every_alias_answers_its_chord(self) -> None:
        """Root plus any catalog alias names the chord."""
        for labeled in (True, False):
            config = make_config(labeled=labeled, octave_range=(2, 5))
            for quality in all_qualities():
                chord = build_chord(0, quality, 0, config)
                for alias in quality.aliases:
                    assert validate_answer("C" + alias, chord, config), (alias, labeled)

    def test_enharmonic_roots(self) -> None:
        """Enharmonic root spellings match in both directions."""
        config = make_config(labeled=False, qualities=["m7"])
        sharp = build_chord(1, "m7", 0, config)
        assert sharp.expected_answer == "C#m7"
        assert validate_answer("Dbm7", sharp, config)
        flat = build_chord(1, "m7", 0, make_config(labeled=False, prefer_flats=True))
        assert flat.expected_answer == "Dbm7"
        assert validate_answer("C#m7", flat, config)

    def test_garbage_is_wrong(self) -> None:
        """Unreadable answers are simply wrong."""
        config = make_config(qualities=["maj7"])
        chord = build_chord(0, "maj7", 0, config)
        for answer in ("", "   ", "xyz", "H7", "C/", "Cmaj7//", "Cfoo", "/"):
            assert validate_answer(answer, chord, config) is False, answer

    def test_non_string_is_wrong(self) -> None:
        """Non-text answers are wrong, not errors."""
        config = make_config()
        chord = build_chord(0, "", 0, config)
        assert validate_answer(None, chord, config) is False  # type: ignore[arg-type]
        assert validate_answer(60, chord, config) is False  # type: ignore[arg-type]

    def test_uppercase_words(self) -> None:
        """Shouted word forms match; only a standalone M means major."""
        config = make_config(labeled=False)
        for quality, answers in (
            ("dim", ("CDIM", "C DIMINISHED")),
            ("dim7", ("CDIM7",)),
            ("7", ("CDOM7", "C DOMINANT 7")),
            ("aug", ("CAUG",)),
            ("sus4", ("CSUS4",)),
            ("maj7", ("CMAJ7", "CMA7", "CM7")),
            ("m7", ("CMIN7", "CMINOR7")),
            ("mMaj7", ("CmM7", "Cm(M7)", "CMINMAJ7")),
        ):
            chord = build_chord(0, quality, 0, config)
            for answer in answers:
                assert validate_answer(answer, chord, config), answer

    def test_odd_digit_tokens_are_wrong(self) -> None:
        """Superscripts, non-ASCII digits and huge numbers are wrong answers."""
        config = make_config(inversion_encoding=InversionEncoding.FIGURED)
        chord = build_chord(0, "", 1, config)
        assert chord.expected_answer == "C6"
        for answer in ("C/²", "C/١", "C/" + "1" * 5000, "C²", "C/1²", "1" * 5000):
            assert validate_answer(answer, chord, config) is False, answer[:20]
        assert validate_answer("C/01", chord, config)

    def test_repeated_bass_pitch_class(self) -> None:
        """A bass note sounding twice in the chord still reads the right inversion."""
        config = make_config(qualities=["sus2add9"])
        third = build_chord(0, "sus2add9", 3, config)
        assert third.expected_answer == "Csus2add9/D"
        assert validate_answer("Csus2add9/3", third, config)
        assert validate_answer("Csus2add9 third inversion", third, config)
        assert validate_answer("Csus2add9/D", third, config)
        assert not validate_answer("Csus2add9/1", third, config)
        assert not validate_answer("Csus2add9 first inversion", third, config)

        first = build_chord(0, "sus2add9", 1, config)
        assert validate_answer("Csus2add9/1", first, config)
        assert validate_answer("Csus2add9/D", first, config)
        assert not validate_answer("Csus2add9/3", first, config)


class TestEveryEncoding:
    """Every catalog chord is named by each inversion encoding, and only its own."""

    ORDINALS = {index: word for word, index in INVERSION_WORDS.items() if word.isalpha()}

    def names(self, pitch_class: PitchClass) -> list[str]:
        return pitch_class_to_names(pitch_class.value)

    def test_encodings_accept_the_inversion(self) -> None:
        """Slash bass letters, numbers and words all name the drawn inversion."""
        config = make_config(octave_range=(2, 5))
        for quality in all_qualities():
            for root in PitchClass:
                for inversion in range(quality.tone_count):
                    chord = build_chord(root.value, quality, inversion, config)
                    for root_name in self.names(root):
                        base = root_name + quality.symbol
                        if inversion == 0:
                            assert validate_answer(base, chord, config), base
                            assert not validate_answer(base + "/1", chord, config), base
                            continue
                        bass = bass_pitch_class(root, quality, inversion)
                        answers = [f"{base}/{name}" for name in self.names(bass)]
                        answers.append(f"{base}/{inversion}")
                        answers.append(f"{base} {self.ORDINALS[inversion]} inversion")
                        for answer in answers:
                            assert validate_answer(answer, chord, config), answer
                        assert not validate_answer(base, chord, config), base

    def test_encodings_reject_other_inversions(self) -> None:
        """Numbers and words naming another inversion are wrong."""
        config = make_config(octave_range=(2, 5))
        for quality in all_qualities():
            for root in PitchClass:
                for inversion in range(1, quality.tone_count):
                    chord = build_chord(root.value, quality, inversion, config)
                    base = root.spell() + quality.symbol
                    for other in range(quality.tone_count):
                        if other == inversion:
                            continue
                        answer = f"{base}/{other}"
                        assert not validate_answer(answer, chord, config), answer
                        if other:
                            answer = f"{base} {self.ORDINALS[other]} inversion"
                            assert not validate_answer(answer, chord, config), answer

    def test_unlabeled_accepts_any_marker(self) -> None:
        """Without labeling, any marker (or none) is accepted for every chord."""
        config = make_config(labeled=False, octave_range=(2, 5))
        for quality in all_qualities():
            for inversion in range(quality.tone_count):
                chord = build_chord(9, quality, inversion, config)
                base = "A" + quality.symbol
                assert validate_answer(base, chord, config), base
                assert validate_answer(base + "/1", chord, config), base
