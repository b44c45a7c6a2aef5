"""
Progression answer matcher - per-step numeral comparison.

Every accepted spelling of a step (its symbol and alternatives, with the
figured bass for each inversion) is folded through canonical_numeral into
one set of keys; a user token matches when its canonical form is in the
set. Case is ignored, so "i bvi iv bvii" answers "i bVI iv bVII".
"""

from __future__ import annotations

import re

from chuk_mcp_chords.core.roman import canonical_numeral, render_numeral
from chuk_mcp_chords.models.progression import Progression, ProgressionChord

# Spaces, commas, pipes and dashes all separate numerals
_SEPARATORS = re.compile(r"[\s,|\-–—]+")


def split_tokens(text: str) -> list[str]:
    """Split an answer into numeral tokens."""
    return [token for token in _SEPARATORS.split(text.strip()) if token]


def accepted_forms(chord: ProgressionChord) -> list[frozenset[str]]:
    """
    Canonical spellings accepted for a step, indexed by inversion.

    Index 0 holds the root-position spellings, index n the spellings with
    the figured bass for inversion n.
    """
    tone_count = len(chord.pitches)
    spellings = (chord.numeral, *chord.alternatives)
    return [
        frozenset(
            canonical_numeral(render_numeral(spelling, inversion, tone_count))
            for spelling in spellings
        )
        for inversion in range(tone_count)
    ]


def step_matches(token: str, chord: ProgressionChord, require_inversion_labeling: bool) -> bool:
    """Whether one token names one progression step."""
    canonical = canonical_numeral(token)
    forms = accepted_forms(chord)
    if require_inversion_labeling:
        return canonical in forms[chord.inversion]
    return any(canonical in spellings for spellings in forms)


def validate_progression_answer(
    user_text: str,
    expected: Progression,
    require_inversion_labeling: bool | None = None,
) -> bool:
    """
    Decide whether user text names a generated progression.

    Args:
        user_text: Raw answer, numerals separated by spaces (or , | -)
        expected: The progression the answer is for
        require_inversion_labeling: Override the progression's own flag

    Returns:
        True when every step matches, False otherwise (never raises)
    """
    if not isinstance(user_text, str):
        return False

    labeled = (
        expected.require_inversion_labeling
        if require_inversion_labeling is None
        else require_inversion_labeling
    )
    tokens = split_tokens(user_text)
    if len(tokens) != len(expected.chords):
        return False

    return all(
        step_matches(token, chord, labeled)
        for token, chord in zip(tokens, expected.chords, strict=True)
    )
