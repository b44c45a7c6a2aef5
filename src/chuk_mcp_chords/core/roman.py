"""
Roman numerals - key-independent chord references.

Diatonic numerals name a scale degree; the chord quality comes from the
key's own scale. Non-diatonic numerals (Neapolitan, borrowed, augmented,
raised diminished, half-diminished, secondary dominants) carry an explicit
semitone offset from the tonic and an explicit quality.

    I, ii, iii, IV, V, vi, vii°          (major)
    i, ii°, bIII, iv, v, bVI, bVII       (minor)
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from chuk_mcp_chords.constants import ErrorMessages, KeyMode
from chuk_mcp_chords.core.chord import QUALITIES, ChordQuality, quality_for_intervals
from chuk_mcp_chords.core.inversion import FIGURED_BASS, FIGURED_BASS_INDEX
from chuk_mcp_chords.core.pitch import PitchClass
from chuk_mcp_chords.core.scale import Key


@dataclass(frozen=True)
class RomanNumeral:
    """
    A chord named relative to a tonic.

    Exactly one of degree (diatonic) or root_offset (non-diatonic) is set.
    Non-diatonic numerals always carry their quality; diatonic numerals
    take it from the key, as a triad or, when seventh is set, a seventh.
    """

    symbol: str
    degree: int | None = None
    root_offset: int | None = None
    quality: ChordQuality | None = None
    alternatives: tuple[str, ...] = ()
    seventh: bool = False

    def __post_init__(self) -> None:
        if (self.degree is None) == (self.root_offset is None):
            raise ValueError(f"Numeral {self.symbol!r} needs exactly one of degree/root_offset")
        if self.root_offset is not None and self.quality is None:
            raise ValueError(f"Non-diatonic numeral {self.symbol!r} needs a quality")

    @property
    def is_diatonic(self) -> bool:
        """Whether the numeral is built from the key's own scale."""
        return self.degree is not None

    def resolve(self, key: Key) -> tuple[PitchClass, ChordQuality]:
        """
        Resolve this numeral to a concrete root and quality in a key.

        Args:
            key: The key context

        Returns:
            (root pitch class, chord quality)
        """
        if self.degree is not None:
            root = key.degree_to_pitch_class(self.degree)
            if self.quality is not None:
                return root, self.quality
            if self.seventh:
                return root, diatonic_seventh(key, self.degree)
            return root, key.triad_quality(self.degree)

        if self.root_offset is None or self.quality is None:
            raise ValueError(f"Numeral {self.symbol} has no degree and no fixed root")
        return key.tonic.transpose(self.root_offset), self.quality

    def render(self, inversion: int = 0, tone_count: int = 3) -> str:
        """Render the numeral with a figured-bass suffix for an inversion."""
        return render_numeral(self.symbol, inversion, tone_count)

    def __str__(self) -> str:
        return self.symbol


def render_numeral(symbol: str, inversion: int, tone_count: int) -> str:
    """
    Append figured bass to a numeral symbol.

    Seventh chords drop their 7 in inverted positions (V7 -> V65).
    Chords with no figures for their size fall back to a numbered
    marker (V9/1).
    """
    if inversion == 0:
        return symbol
    figures = FIGURED_BASS.get(tone_count)
    if figures is None or inversion >= len(figures):
        return f"{symbol}/{inversion}"
    base = symbol[:-1] if tone_count == 4 and symbol.endswith("7") else symbol
    return base + figures[inversion]


def diatonic_seventh(key: Key, degree: int) -> ChordQuality:
    """The diatonic seventh chord on a scale degree (thirds stacked from the scale)."""
    offsets = key.scale.degree_offsets()
    root = offsets[degree - 1]
    intervals = [0] + [(offsets[(degree - 1 + step) % 7] - root) % 12 for step in (2, 4, 6)]
    quality = quality_for_intervals(intervals)
    if quality is None:
        raise ValueError(f"No catalog seventh chord for degree {degree} of {key}")
    return quality


def _q(symbol: str) -> ChordQuality:
    return QUALITIES[symbol]


DIATONIC_NUMERALS: Mapping[KeyMode, tuple[str, ...]] = MappingProxyType(
    {
        KeyMode.MAJOR: ("I", "ii", "iii", "IV", "V", "vi", "vii°"),
        KeyMode.MINOR: ("i", "ii°", "bIII", "iv", "v", "bVI", "bVII"),
    }
)

NON_DIATONIC: Mapping[KeyMode, tuple[RomanNumeral, ...]] = MappingProxyType(
    {
        KeyMode.MAJOR: (
            RomanNumeral("bII", root_offset=1, quality=_q(""), alternatives=("N",)),
            RomanNumeral("bIII", root_offset=3, quality=_q("")),
            RomanNumeral("bVI", root_offset=8, quality=_q("")),
            RomanNumeral("bVII", root_offset=10, quality=_q("")),
            RomanNumeral("I+", root_offset=0, quality=_q("aug"), alternatives=("Iaug",)),
            RomanNumeral("V+", root_offset=7, quality=_q("aug"), alternatives=("Vaug",)),
            RomanNumeral("#iv°", root_offset=6, quality=_q("dim"), alternatives=("#ivdim",)),
            RomanNumeral("iiø7", root_offset=2, quality=_q("m7b5"), alternatives=("ii°",)),
        ),
        KeyMode.MINOR: (
            RomanNumeral("bII", root_offset=1, quality=_q(""), alternatives=("N",)),
            RomanNumeral("III", root_offset=4, quality=_q("")),
            RomanNumeral("VI", root_offset=9, quality=_q("")),
            RomanNumeral("VII", root_offset=11, quality=_q("")),
            RomanNumeral("i+", root_offset=0, quality=_q("aug"), alternatives=("iaug",)),
            RomanNumeral("V+", root_offset=7, quality=_q("aug"), alternatives=("Vaug",)),
            RomanNumeral("#ii°", root_offset=3, quality=_q("dim"), alternatives=("#iidim",)),
            RomanNumeral("ivø7", root_offset=5, quality=_q("m7b5"), alternatives=("iv°",)),
        ),
    }
)

SECONDARY_DOMINANTS: Mapping[KeyMode, tuple[RomanNumeral, ...]] = MappingProxyType(
    {
        KeyMode.MAJOR: (
            RomanNumeral("V/ii", root_offset=9, quality=_q("")),
            RomanNumeral("V/IV", root_offset=0, quality=_q("")),
            RomanNumeral("V/V", root_offset=2, quality=_q("")),
            RomanNumeral("V/vi", root_offset=4, quality=_q("")),
        ),
        KeyMode.MINOR: (
            RomanNumeral("V/iv", root_offset=0, quality=_q("")),
            RomanNumeral("V/bVI", root_offset=3, quality=_q("")),
        ),
    }
)

_GLYPHS: tuple[tuple[str, str], ...] = (
    ("♭", "b"),
    ("♯", "#"),
    ("º", "°"),
    ("˚", "°"),
    ("Ø", "ø"),
)

# Figures that pin root position in a pattern, by tone count
_ROOT_POSITION_FIGURES: Mapping[int, str] = MappingProxyType({3: "53", 4: "753"})

_HALF_DIMINISHED = ("half-diminished", "halfdiminished", "half-dim", "halfdim", "m7b5", "/b5")
_DIM_SUFFIX = re.compile(r"^([#b]?[iv]+)(?:o|d)(?=\d*$)")
_NEAPOLITAN = re.compile(r"^n(?=\d*$)")
_WHITESPACE = re.compile(r"\s+")


def canonical_numeral(token: str) -> str:
    """
    Fold a numeral spelling onto one canonical key.

    Case-insensitive. Diminished spellings (°, o, dim, a bare d suffix)
    become °, half-diminished spellings (ø, ø7, m7b5, /b5) become ø,
    aug becomes +, and the Neapolitan N becomes bii. Trailing figured-bass
    digits are preserved.

    Examples:
        canonical_numeral("viio") -> "vii°"
        canonical_numeral("iim7b5") -> "iiø"
        canonical_numeral("N6") -> "bii6"
    """
    for glyph, replacement in _GLYPHS:
        token = token.replace(glyph, replacement)
    token = _WHITESPACE.sub("", token.lower())
    for spelling in _HALF_DIMINISHED:
        token = token.replace(spelling, "ø")
    token = token.replace("ø7", "ø")
    token = token.replace("dim", "°").replace("aug", "+")
    token = _DIM_SUFFIX.sub(r"\1°", token)
    return _NEAPOLITAN.sub("bii", token)


def numerals_for_mode(mode: KeyMode) -> list[RomanNumeral]:
    """Every numeral a key mode understands: diatonic, non-diatonic, secondary."""
    diatonic = [
        RomanNumeral(symbol, degree=i + 1) for i, symbol in enumerate(DIATONIC_NUMERALS[mode])
    ]
    return diatonic + list(NON_DIATONIC[mode]) + list(SECONDARY_DOMINANTS[mode])


def _numeral_index(mode: KeyMode) -> dict[str, RomanNumeral]:
    index: dict[str, RomanNumeral] = {}
    for numeral in numerals_for_mode(mode):
        for spelling in (numeral.symbol, *numeral.alternatives):
            index.setdefault(canonical_numeral(spelling), numeral)
    return index


_INDEX: Mapping[KeyMode, Mapping[str, RomanNumeral]] = MappingProxyType(
    {mode: MappingProxyType(_numeral_index(mode)) for mode in KeyMode}
)


def parse_numeral(symbol: str, mode: KeyMode) -> RomanNumeral:
    """
    Parse a numeral symbol (without figured bass) for a key mode.

    Any accepted spelling resolves; the returned numeral keeps the
    catalog symbol. A trailing 7 on a diatonic numeral selects the
    diatonic seventh chord (V7, ii7, Imaj7).

    Raises:
        ValueError: If the symbol is not a numeral of this mode
    """
    index = _INDEX[mode]
    canonical = canonical_numeral(symbol)
    if canonical in index:
        return index[canonical]

    for suffix in ("maj7", "7"):
        if canonical.endswith(suffix):
            base = index.get(canonical[: -len(suffix)])
            if base is not None and base.is_diatonic:
                return RomanNumeral(symbol.strip(), degree=base.degree, seventh=True)

    raise ValueError(ErrorMessages.UNKNOWN_NUMERAL.format(symbol=symbol, mode=mode.value))


def split_figure(symbol: str, mode: KeyMode) -> tuple[RomanNumeral, int | None]:
    """
    Parse a numeral that may carry a figured-bass suffix.

    The whole symbol is tried first, so V7 stays a seventh chord rather
    than V with a figure. Seventh-chord figures (753, 65, 43, 42) imply a
    seventh on diatonic numerals; 53 and 753 pin root position.

    Returns:
        (numeral, inversion index), with None when no figure is written
    """
    try:
        return parse_numeral(symbol, mode), None
    except ValueError:
        pass

    stripped = symbol.strip()
    for tones in (4, 3):
        figures = {**FIGURED_BASS_INDEX[tones], _ROOT_POSITION_FIGURES[tones]: 0}
        for figure, inversion in sorted(figures.items(), key=lambda item: -len(item[0])):
            if not stripped.endswith(figure) or len(stripped) == len(figure):
                continue
            try:
                numeral = parse_numeral(stripped[: -len(figure)], mode)
            except ValueError:
                continue
            if tones == 4 and numeral.is_diatonic and not numeral.seventh:
                numeral = RomanNumeral(
                    stripped[: -len(figure)] + "7", degree=numeral.degree, seventh=True
                )
            elif tones == 4 and numeral.quality is not None and numeral.quality.tone_count != 4:
                continue
            return numeral, inversion

    raise ValueError(ErrorMessages.UNKNOWN_NUMERAL.format(symbol=symbol, mode=mode.value))
