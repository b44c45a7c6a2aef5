"""
Chord answer matcher - does free text name a generated chord?

The matcher is a total function: any input string yields True or False,
never an exception. Unknown qualities and unparseable roots are simply
wrong answers.

An answer is split into root, quality and an optional inversion token.
The token may be written three ways, all interchangeable:
- slash:       Dmaj9/F#, Dmaj9/1, Dmaj9/first
- figured:     C6, C64, Cmaj7(65)
- descriptive: Dmaj9 first inversion, Dmaj9 (2nd inv)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from chuk_mcp_chords.core.chord import ChordQuality, alias_matches, lookup_quality
from chuk_mcp_chords.core.inversion import FIGURED_BASS_INDEX, INVERSION_WORDS, bass_pitch_class
from chuk_mcp_chords.core.pitch import (
    PitchClass,
    names_are_enharmonic_equivalent,
    parse_note_name,
)
from chuk_mcp_chords.matching.normalizer import normalize_answer, split_root
from chuk_mcp_chords.models.chord import GeneratedChord
from chuk_mcp_chords.models.level import LevelConfiguration

logger = logging.getLogger(__name__)

_WORD_SUFFIX = re.compile(
    r"(first|second|third|fourth|fifth|sixth|1st|2nd|3rd|4th|5th|6th)(?:inversion|inv)?$"
)
_INVERSION_WORD = re.compile(r"(?:inversion|inv)$")
_TONE_INDEX = re.compile(r"[0-9]{1,2}")

# Longest figures first so 64 is not read as 4 after a 6
_FIGURES = ("64", "65", "43", "42", "6", "2")


@dataclass(frozen=True)
class _Reading:
    """One way to split a remainder into quality text and inversion token."""

    quality_text: str
    token: str | None = None
    kind: str = "none"  # none | slash | word | figured


def _readings(remainder: str) -> list[_Reading]:
    """All plausible (quality, inversion token) splits, unmarked first."""
    readings = [_Reading(remainder)]

    if "/" in remainder:
        quality_text, _, token = remainder.rpartition("/")
        if token:
            readings.append(_Reading(quality_text, token, "slash"))

    word = _WORD_SUFFIX.search(remainder)
    if word:
        readings.append(_Reading(remainder[: word.start()], word.group(1), "word"))

    for figure in _FIGURES:
        if remainder.endswith(figure):
            readings.append(_Reading(remainder[: -len(figure)], figure, "figured"))

    return readings


def _token_indices(reading: _Reading, quality: ChordQuality, root: PitchClass) -> set[int]:
    """Inversion indices a reading's token can name (empty if it names none)."""
    token = reading.token
    if reading.kind == "none" or token is None:
        return {0}
    if reading.kind == "figured":
        index = FIGURED_BASS_INDEX.get(quality.tone_count, {}).get(token)
    elif reading.kind == "word":
        index = INVERSION_WORDS.get(token)
    elif _TONE_INDEX.fullmatch(token):
        index = int(token)
    else:
        # Slash bass note: every tone sounding that pitch class qualifies
        bass = parse_note_name(token)
        if bass is not None:
            return {
                i
                for i in range(quality.tone_count)
                if bass_pitch_class(root, quality, i) == bass
            }
        index = INVERSION_WORDS.get(_INVERSION_WORD.sub("", token))
    return {index} if index is not None else set()


def validate_answer(
    user_text: str,
    generated: GeneratedChord,
    config: LevelConfiguration,
) -> bool:
    """
    Decide whether user text names the generated chord.

    Root, quality and inversion come from the generated chord itself;
    its expected answer text only serves the exact-match fast path.

    Args:
        user_text: Raw answer as typed
        generated: The chord the answer is for
        config: Level configuration (only the labeling flag is read)

    Returns:
        True for a correct answer, False otherwise
    """
    if not isinstance(user_text, str) or not user_text.strip():
        return False

    user = normalize_answer(user_text)
    if user == normalize_answer(generated.expected_answer):
        return True

    quality = lookup_quality(generated.quality)
    if quality is None or generated.inversion >= quality.tone_count:
        logger.warning("Generated chord %r is not in the catalog", generated.expected_answer)
        return False
    root = PitchClass(generated.root_pitch_class)

    split = split_root(user)
    if split is None:
        return False
    user_root, remainder = split
    if not names_are_enharmonic_equivalent(user_root, root.spell()):
        return False

    for reading in _readings(remainder):
        if not alias_matches(quality, reading.quality_text):
            continue
        if not config.require_inversion_labeling:
            return True
        if generated.inversion == 0:
            if reading.kind == "none":
                return True
            continue
        if reading.kind != "none" and generated.inversion in _token_indices(
            reading, quality, root
        ):
            return True

    return False
