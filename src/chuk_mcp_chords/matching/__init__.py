"""
Answer matching - free text against generated problems.

Matchers are total functions: a wrong or unreadable answer is False,
never an exception.
"""

from chuk_mcp_chords.matching.chords import validate_answer
from chuk_mcp_chords.matching.construction import validate_construction
from chuk_mcp_chords.matching.normalizer import canonical_numeral, normalize_answer, split_root
from chuk_mcp_chords.matching.progressions import (
    accepted_forms,
    split_tokens,
    validate_progression_answer,
)

__all__ = [
    "accepted_forms",
    "canonical_numeral",
    "normalize_answer",
    "split_root",
    "split_tokens",
    "validate_answer",
    "validate_construction",
    "validate_progression_answer",
]
