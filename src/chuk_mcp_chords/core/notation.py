"""
Chord-symbol text normalization.

Both the catalog aliases and free-text answers pass through the same
function, so comparing two normalized strings is enough to decide
whether they spell the same quality.
"""

from __future__ import annotations

import re

# Typographic forms folded to their ASCII spelling before anything else
_GLYPHS: tuple[tuple[str, str], ...] = (
    ("♭", "b"),
    ("♯", "#"),
    ("Δ", "maj"),
    ("△", "maj"),
    ("º", "°"),
    ("˚", "°"),
    ("Ø", "ø"),
    ("–", "-"),
    ("—", "-"),
)

# Uppercase M (and MA) means major unless it sits inside a word (DIM, DOM);
# Maj / Min are spelled-out words and a minor m may precede it (mM7)
_UPPER_MAJOR = re.compile(r"(?<![A-LN-Za-ln-z])M(?![aA][jJ]|[iI][nN])(?:A(?![jJ]))?")

_STRIP = re.compile(r"[\s()]+")

# Applied in order, after lower-casing
SYNONYMS: tuple[tuple[str, str], ...] = (
    ("half-diminished", "ø"),
    ("halfdiminished", "ø"),
    ("half-dim", "ø"),
    ("halfdim", "ø"),
    ("diminished", "dim"),
    ("°", "dim"),
    ("augmented", "aug"),
    ("dominant", "dom"),
    ("suspended", "sus"),
    ("major", "maj"),
    ("minor", "min"),
    ("add2", "add9"),
    ("add4", "add11"),
    ("add6", "add13"),
)


def normalize_quality_text(text: str) -> str:
    """
    Normalize a chord-quality spelling.

    Case, whitespace and parentheses are ignored, Unicode accidentals are
    folded to ASCII, and spelled-out words map to their abbreviations.
    An uppercase ``M`` is read as major before case is dropped, so
    ``M7`` and ``m7`` stay distinct.

    Args:
        text: Raw quality text, e.g. "M7", "m7♭5", "min(maj9)"

    Returns:
        Canonical lower-case spelling
    """
    for glyph, replacement in _GLYPHS:
        text = text.replace(glyph, replacement)
    text = _UPPER_MAJOR.sub("maj", text)
    text = _STRIP.sub("", text.lower())
    for word, replacement in SYNONYMS:
        text = text.replace(word, replacement)
    return text
