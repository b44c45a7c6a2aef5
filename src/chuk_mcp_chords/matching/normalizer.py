"""
Answer normalization - one canonical spelling per answer text.

The root letter is split off the raw text first, so that the uppercase-M
(major) convention in the quality survives lower-casing.
"""

from __future__ import annotations

import re

from chuk_mcp_chords.core.notation import normalize_quality_text
from chuk_mcp_chords.core.pitch import split_note_prefix
from chuk_mcp_chords.core.roman import canonical_numeral

__all__ = ["canonical_numeral", "normalize_answer", "split_root"]

_ROOT = re.compile(r"^([a-g])([#b]?)")


def normalize_answer(text: str) -> str:
    """
    Normalize a chord answer.

    The root is lower-cased with its accidental folded to ASCII; the rest
    goes through quality normalization (case, whitespace, parentheses,
    synonyms).

    Examples:
        normalize_answer("CM7") -> "cmaj7"
        normalize_answer(" C m7♭5 ") -> "cm7b5"
        normalize_answer("Dmaj9 / F#") -> "dmaj9/f#"
    """
    stripped = text.strip()
    split = split_note_prefix(stripped)
    if split is None:
        return normalize_quality_text(stripped)
    root, rest = split
    root = root.replace("♯", "#").replace("♭", "b").lower()
    return root + normalize_quality_text(rest)


def split_root(normalized: str) -> tuple[str, str] | None:
    """
    Split a normalized answer into (root, remainder).

    Returns:
        None when the answer does not start with a note letter
    """
    match = _ROOT.match(normalized)
    if not match:
        return None
    return match.group(0), normalized[match.end() :]
