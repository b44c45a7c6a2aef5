"""
Chord primitives - ChordQuality and the quality catalog.

Chords are stacks of intervals. A chord quality defines the interval
pattern from the root plus every text form accepted as its name.

The catalog is static: built once at import, exposed through read-only
mappings, never mutated at runtime.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar

from chuk_mcp_chords.constants import ChordFamily
from chuk_mcp_chords.core.notation import normalize_quality_text
from chuk_mcp_chords.core.pitch import PitchClass


@dataclass(frozen=True)
class ChordQuality:
    """
    A chord quality defined by its intervals from the root.

    Intervals are measured from the root, not stacked, and are strictly
    increasing. For example, a major triad is (0, 4, 7) and a dominant
    ninth is (0, 4, 7, 10, 14).

    The symbol is always one of the aliases. Immutable and hashable.
    """

    symbol: str
    intervals: tuple[int, ...]
    aliases: frozenset[str] = frozenset()
    name: str = ""
    key: str = ""
    family: ChordFamily = ChordFamily.TRIAD
    normalized_aliases: frozenset[str] = field(
        init=False, repr=False, compare=False, default=frozenset()
    )

    # Common chord qualities (defined after class)
    MAJOR: ClassVar[ChordQuality]
    MINOR: ClassVar[ChordQuality]
    DIMINISHED: ClassVar[ChordQuality]
    AUGMENTED: ClassVar[ChordQuality]
    MAJOR_7: ClassVar[ChordQuality]
    MINOR_7: ClassVar[ChordQuality]
    DOMINANT_7: ClassVar[ChordQuality]
    DIMINISHED_7: ClassVar[ChordQuality]
    HALF_DIMINISHED_7: ClassVar[ChordQuality]

    def __post_init__(self) -> None:
        if not self.intervals or self.intervals[0] != 0:
            raise ValueError(f"Intervals must start at 0, got {self.intervals}")
        if any(b <= a for a, b in zip(self.intervals, self.intervals[1:], strict=False)):
            raise ValueError(f"Intervals must be strictly increasing, got {self.intervals}")

        aliases = frozenset(self.aliases) | {self.symbol}
        object.__setattr__(self, "aliases", aliases)
        object.__setattr__(
            self,
            "normalized_aliases",
            frozenset(normalize_quality_text(alias) for alias in aliases),
        )

    @property
    def tone_count(self) -> int:
        """Number of tones in the chord."""
        return len(self.intervals)

    def get_pitch_classes(self, root: PitchClass) -> list[PitchClass]:
        """
        Get all pitch classes in this chord, in interval order.

        Args:
            root: The root pitch class

        Returns:
            List of pitch classes, root first
        """
        return [root.transpose(interval) for interval in self.intervals]

    def __str__(self) -> str:
        return self.name or self.symbol


def _quality(
    key: str,
    symbol: str,
    intervals: Iterable[int],
    name: str,
    family: ChordFamily,
    aliases: Iterable[str] = (),
) -> ChordQuality:
    return ChordQuality(
        symbol=symbol,
        intervals=tuple(intervals),
        aliases=frozenset(aliases),
        name=name,
        key=key,
        family=family,
    )


_T = ChordFamily.TRIAD
_S7 = ChordFamily.SEVENTH
_N9 = ChordFamily.NINTH
_E11 = ChordFamily.ELEVENTH
_T13 = ChordFamily.THIRTEENTH
_SUS = ChordFamily.SUSPENDED

_CATALOG: tuple[ChordQuality, ...] = (
    # Triads
    _quality("major", "", (0, 4, 7), "major", _T, ("maj", "M", "major")),
    _quality("minor", "m", (0, 3, 7), "minor", _T, ("min", "mi", "minor", "-")),
    _quality("diminished", "dim", (0, 3, 6), "diminished", _T, ("°", "o", "diminished")),
    _quality("augmented", "aug", (0, 4, 8), "augmented", _T, ("+", "augmented")),
    # Sevenths
    _quality(
        "major7",
        "maj7",
        (0, 4, 7, 11),
        "major 7th",
        _S7,
        ("M7", "ma7", "Maj7", "Δ7", "major7", "maj7th"),
    ),
    _quality(
        "minor7", "m7", (0, 3, 7, 10), "minor 7th", _S7, ("min7", "mi7", "-7", "minor7")
    ),
    _quality(
        "dominant7", "7", (0, 4, 7, 10), "dominant 7th", _S7, ("dom7", "dominant7", "7th")
    ),
    _quality(
        "diminished7",
        "dim7",
        (0, 3, 6, 9),
        "diminished 7th",
        _S7,
        ("°7", "o7", "diminished7"),
    ),
    _quality(
        "halfDiminished7",
        "m7b5",
        (0, 3, 6, 10),
        "half-diminished 7th",
        _S7,
        ("m7♭5", "ø", "ø7", "min7b5", "-7b5", "half-diminished", "half-diminished7"),
    ),
    _quality(
        "minorMajor7",
        "mMaj7",
        (0, 3, 7, 11),
        "minor-major 7th",
        _S7,
        ("mM7", "minMaj7", "m(maj7)", "-maj7", "mΔ7"),
    ),
    # Ninths
    _quality("major9", "maj9", (0, 4, 7, 11, 14), "major 9th", _N9, ("M9", "ma9", "Maj9", "MA9")),
    _quality("minor9", "m9", (0, 3, 7, 10, 14), "minor 9th", _N9, ("min9", "mi9", "Min9", "-9")),
    _quality("dominant9", "9", (0, 4, 7, 10, 14), "dominant 9th", _N9, ("dom9", "Dom9", "7/9")),
    _quality(
        "dom7b9",
        "7b9",
        (0, 4, 7, 10, 13),
        "dominant 7th flat 9",
        _N9,
        ("7♭9", "dom7b9", "7-9"),
    ),
    _quality(
        "dom7sharp9",
        "7#9",
        (0, 4, 7, 10, 15),
        "dominant 7th sharp 9",
        _N9,
        ("7♯9", "dom7#9", "7+9"),
    ),
    _quality(
        "minor7b9",
        "m7b9",
        (0, 3, 7, 10, 13),
        "minor 7th flat 9",
        _N9,
        ("m7♭9", "min7b9", "m7-9"),
    ),
    _quality(
        "minorMajor9",
        "mMaj9",
        (0, 3, 7, 11, 14),
        "minor-major 9th",
        _N9,
        ("mM9", "minMaj9", "m(maj9)"),
    ),
    _quality(
        "add9",
        "add9",
        (0, 4, 7, 14),
        "add 9",
        _N9,
        ("add2", "(add9)", "(add2)", "majadd9", "majadd2"),
    ),
    _quality(
        "minorAdd9",
        "madd9",
        (0, 3, 7, 14),
        "minor add 9",
        _N9,
        ("madd2", "m(add9)", "m(add2)", "minadd9", "minadd2", "minoradd9", "minoradd2"),
    ),
    _quality("diminished9", "dim9", (0, 3, 6, 9, 14), "diminished 9th", _N9, ("°9", "o9")),
    _quality(
        "halfDiminished9",
        "m9b5",
        (0, 3, 6, 10, 14),
        "half-diminished 9th",
        _N9,
        ("m7b5(9)", "m7♭5(9)", "ø9", "halfDim9", "m7b5add9"),
    ),
    _quality(
        "diminished7add9",
        "dim7add9",
        (0, 3, 6, 9, 14),
        "diminished 7th add 9",
        _N9,
        ("dim7(add9)", "°7add9", "°7(add9)", "o7add9", "o7(add9)"),
    ),
    _quality(
        "diminished7b9",
        "dim7b9",
        (0, 3, 6, 9, 13),
        "diminished 7th flat 9",
        _N9,
        ("dim7♭9", "°7b9", "°7♭9", "o7b9", "o7♭9", "dim7addb9"),
    ),
    _quality(
        "halfDiminishedb9",
        "m7b5b9",
        (0, 3, 6, 10, 13),
        "half-diminished flat 9",
        _N9,
        ("m7♭5♭9", "øb9", "ø♭9", "halfDimb9", "m7b5addb9"),
    ),
    # Elevenths
    _quality(
        "major11",
        "maj11",
        (0, 4, 7, 11, 14, 17),
        "major 11th",
        _E11,
        ("M11", "ma11", "Maj11", "MA11"),
    ),
    _quality(
        "minor11",
        "m11",
        (0, 3, 7, 10, 14, 17),
        "minor 11th",
        _E11,
        ("min11", "mi11", "Min11", "-11"),
    ),
    _quality(
        "dominant11",
        "11",
        (0, 4, 7, 10, 14, 17),
        "dominant 11th",
        _E11,
        ("dom11", "Dom11", "7/11"),
    ),
    _quality(
        "major7sharp11",
        "maj7#11",
        (0, 4, 7, 11, 18),
        "major 7th sharp 11",
        _E11,
        ("maj7♯11", "M7#11", "M7♯11", "maj7+11"),
    ),
    _quality(
        "dom7sharp11",
        "7#11",
        (0, 4, 7, 10, 18),
        "dominant 7th sharp 11",
        _E11,
        ("7♯11", "dom7#11", "7+11"),
    ),
    _quality(
        "minor7sharp11",
        "m7#11",
        (0, 3, 7, 10, 18),
        "minor 7th sharp 11",
        _E11,
        ("m7♯11", "min7#11", "m7+11"),
    ),
    _quality(
        "sus4add9",
        "sus4add9",
        (0, 5, 7, 14),
        "suspended 4th add 9",
        _E11,
        ("sus4(add9)", "susadd9", "sus(add9)", "sus4add2", "sus4(add2)"),
    ),
    _quality(
        "sus2add9",
        "sus2add9",
        (0, 2, 7, 14),
        "suspended 2nd add 9",
        _E11,
        ("sus2(add9)", "sus2add2", "sus2(add2)"),
    ),
    # Thirteenths
    _quality(
        "major13",
        "maj13",
        (0, 4, 7, 11, 14, 17, 21),
        "major 13th",
        _T13,
        ("M13", "ma13", "Maj13", "MA13"),
    ),
    _quality(
        "minor13",
        "m13",
        (0, 3, 7, 10, 14, 17, 21),
        "minor 13th",
        _T13,
        ("min13", "mi13", "Min13", "-13"),
    ),
    _quality(
        "dominant13",
        "13",
        (0, 4, 7, 10, 14, 17, 21),
        "dominant 13th",
        _T13,
        ("dom13", "Dom13", "7/13"),
    ),
    _quality(
        "major13sharp11",
        "maj13#11",
        (0, 4, 7, 11, 14, 18, 21),
        "major 13th sharp 11",
        _T13,
        ("maj13♯11", "M13#11", "M13♯11", "maj13+11"),
    ),
    _quality(
        "dom13sharp11",
        "13#11",
        (0, 4, 7, 10, 14, 18, 21),
        "dominant 13th sharp 11",
        _T13,
        ("13♯11", "dom13#11", "13+11"),
    ),
    _quality(
        "minor13sharp11",
        "m13#11",
        (0, 3, 7, 10, 14, 18, 21),
        "minor 13th sharp 11",
        _T13,
        ("m13♯11", "min13#11", "m13+11"),
    ),
    _quality(
        "dom13b9",
        "13b9",
        (0, 4, 7, 10, 13, 17, 21),
        "dominant 13th flat 9",
        _T13,
        ("13♭9", "dom13b9", "13-9"),
    ),
    _quality(
        "dom13sharp9",
        "13#9",
        (0, 4, 7, 10, 15, 17, 21),
        "dominant 13th sharp 9",
        _T13,
        ("13♯9", "dom13#9", "13+9"),
    ),
    _quality(
        "dom13b5",
        "13b5",
        (0, 4, 6, 10, 14, 17, 21),
        "dominant 13th flat 5",
        _T13,
        ("13♭5", "dom13b5", "13-5"),
    ),
    _quality(
        "add13",
        "add13",
        (0, 4, 7, 21),
        "add 13",
        _T13,
        ("add6", "(add13)", "(add6)", "majadd13", "majadd6"),
    ),
    _quality(
        "minorAdd13",
        "madd13",
        (0, 3, 7, 21),
        "minor add 13",
        _T13,
        ("madd6", "m(add13)", "m(add6)", "minadd13", "minadd6"),
    ),
    # Suspended
    _quality(
        "sus2", "sus2", (0, 2, 7), "suspended 2nd", _SUS, ("Sus2", "SUS2", "suspended2")
    ),
    _quality(
        "sus4",
        "sus4",
        (0, 5, 7),
        "suspended 4th",
        _SUS,
        ("sus", "Sus4", "SUS4", "suspended", "suspended4"),
    ),
    _quality("quartal", "quartal", (0, 5, 10), "quartal", _SUS, ("quart", "4ths")),
)

QUALITIES: Mapping[str, ChordQuality] = MappingProxyType({q.symbol: q for q in _CATALOG})
QUALITIES_BY_KEY: Mapping[str, ChordQuality] = MappingProxyType({q.key: q for q in _CATALOG})
_BY_NORMALIZED_SYMBOL: Mapping[str, ChordQuality] = MappingProxyType(
    {normalize_quality_text(q.symbol): q for q in _CATALOG}
)

# Every accepted spelling mapped to one quality; the first catalog entry wins
_BY_NORMALIZED_ALIAS: Mapping[str, ChordQuality] = MappingProxyType(
    {alias: q for q in reversed(_CATALOG) for alias in q.normalized_aliases}
)


ChordQuality.MAJOR = QUALITIES[""]
ChordQuality.MINOR = QUALITIES["m"]
ChordQuality.DIMINISHED = QUALITIES["dim"]
ChordQuality.AUGMENTED = QUALITIES["aug"]
ChordQuality.MAJOR_7 = QUALITIES["maj7"]
ChordQuality.MINOR_7 = QUALITIES["m7"]
ChordQuality.DOMINANT_7 = QUALITIES["7"]
ChordQuality.DIMINISHED_7 = QUALITIES["dim7"]
ChordQuality.HALF_DIMINISHED_7 = QUALITIES["m7b5"]


def all_qualities() -> tuple[ChordQuality, ...]:
    """Every catalog quality, in catalog order."""
    return _CATALOG


def lookup_quality(symbol: str) -> ChordQuality | None:
    """
    Find a quality by its symbol.

    Exact symbols and catalog keys are tried first, then the normalized
    symbol ("M7", "m7♭5" and "maj7" all resolve).

    Returns:
        The quality, or None when the symbol is not in the catalog
    """
    if symbol in QUALITIES:
        return QUALITIES[symbol]
    if symbol in QUALITIES_BY_KEY:
        return QUALITIES_BY_KEY[symbol]
    return _BY_NORMALIZED_SYMBOL.get(normalize_quality_text(symbol))


def resolve_alias(text: str) -> ChordQuality | None:
    """Find the quality that accepts a text form as one of its aliases."""
    return _BY_NORMALIZED_ALIAS.get(normalize_quality_text(text))


def alias_matches(quality: ChordQuality, candidate: str) -> bool:
    """
    Whether candidate text is an accepted name for a quality.

    Comparison ignores case, whitespace and parentheses, and folds
    Unicode accidentals and spelled-out words.
    """
    return normalize_quality_text(candidate) in quality.normalized_aliases


def quality_for_intervals(intervals: Iterable[int]) -> ChordQuality | None:
    """Find the first catalog quality with exactly these intervals."""
    wanted = tuple(intervals)
    for quality in _CATALOG:
        if quality.intervals == wanted:
            return quality
    return None


def qualities_in_family(family: ChordFamily) -> list[ChordQuality]:
    """All catalog qualities of one family."""
    return [q for q in _CATALOG if q.family == family]
