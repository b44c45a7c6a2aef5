"""
Chord generator - one concrete chord problem per call.

Generation is a pure function of the level, the previous chord and the
random source: sample (root, quality, inversion) uniformly, voice it in
the level's octave window, and render the answer text.
"""

from __future__ import annotations

import logging
import random

from chuk_mcp_chords.constants import (
    MAX_DRAW_ATTEMPTS,
    ChordFamily,
    ErrorMessages,
    InversionEncoding,
)
from chuk_mcp_chords.core.chord import ChordQuality, lookup_quality, resolve_alias
from chuk_mcp_chords.core.inversion import bass_pitch_class, figured_bass, valid_inversions
from chuk_mcp_chords.core.pitch import PitchClass
from chuk_mcp_chords.errors import ConfigurationError, InvalidInversion
from chuk_mcp_chords.generator.voicing import voice_chord
from chuk_mcp_chords.models.chord import GeneratedChord
from chuk_mcp_chords.models.level import LevelConfiguration

logger = logging.getLogger(__name__)

_FIGURED_FAMILIES = (ChordFamily.TRIAD, ChordFamily.SEVENTH)


def generate_chord(
    config: LevelConfiguration,
    previous: GeneratedChord | None = None,
    rng: random.Random | None = None,
) -> GeneratedChord:
    """
    Generate a chord problem from a level configuration.

    Redraws while the draw repeats the previous chord's (root, quality,
    inversion), up to MAX_DRAW_ATTEMPTS; after that the last draw is
    accepted, which only happens with single-element candidate sets.

    Args:
        config: The level configuration
        previous: The previous problem, for duplicate avoidance
        rng: Random source (defaults to a fresh Random)

    Returns:
        A new GeneratedChord

    Raises:
        InvalidInversion: If no configured inversion fits any configured quality
        ConfigurationError: If the octave range cannot hold a drawn chord
    """
    rng = rng or random.Random()

    candidates: list[tuple[ChordQuality, list[int]]] = []
    for quality in config.quality_objects():
        inversions = valid_inversions(quality, config.inversions)
        if inversions:
            candidates.append((quality, inversions))
        else:
            logger.debug("No configured inversion fits '%s'; skipping it", quality.symbol)
    if not candidates:
        raise InvalidInversion(
            ErrorMessages.NO_VALID_INVERSIONS.format(symbol=", ".join(config.qualities))
        )

    for attempt in range(1, MAX_DRAW_ATTEMPTS + 1):
        root = rng.choice(config.roots)
        quality, inversions = rng.choice(candidates)
        inversion = rng.choice(inversions)

        if previous is None or (root, quality.symbol, inversion) != previous.key:
            break
        if attempt < MAX_DRAW_ATTEMPTS:
            logger.debug("Draw %d repeats the previous chord; redrawing", attempt)
    else:
        logger.debug(
            "Duplicate avoidance exhausted after %d draws; accepting repeat", MAX_DRAW_ATTEMPTS
        )

    return build_chord(root, quality, inversion, config)


def build_chord(
    root_pitch_class: int,
    quality: ChordQuality | str,
    inversion: int,
    config: LevelConfiguration,
) -> GeneratedChord:
    """
    Build a specific chord problem deterministically.

    Args:
        root_pitch_class: Root of the chord (0-11)
        quality: Catalog quality or its symbol
        inversion: Inversion index
        config: Supplies the octave range and answer rendering options

    Returns:
        The voiced chord with its expected answer
    """
    if isinstance(quality, str):
        resolved = lookup_quality(quality)
        if resolved is None:
            raise ConfigurationError(ErrorMessages.UNKNOWN_QUALITY.format(symbol=quality))
        quality = resolved

    root = PitchClass(root_pitch_class % 12)
    pitches = voice_chord(root, quality, inversion, config.octave_range)
    root_name = root.spell(config.prefer_flats)
    bass_name = bass_pitch_class(root, quality, inversion).spell(config.prefer_flats)

    return GeneratedChord(
        root_pitch_class=root.value,
        root_name=root_name,
        quality=quality.symbol,
        inversion=inversion,
        pitches=pitches,
        bass_name=bass_name,
        expected_answer=render_chord_symbol(
            root_name,
            quality,
            inversion,
            bass_name,
            encoding=config.inversion_encoding,
            labeled=config.require_inversion_labeling,
        ),
    )


def render_chord_symbol(
    root_name: str,
    quality: ChordQuality,
    inversion: int,
    bass_name: str,
    encoding: InversionEncoding = InversionEncoding.AUTO,
    labeled: bool = True,
) -> str:
    """
    Render a chord name, with an inversion marker when labeled.

    Figured bass is appended to triads (C6, Cm64) and parenthesized after
    sevenths (Cmaj7(65)). A figure that would spell another catalog
    quality, or a chord with no figure for its size, falls back to a
    slash bass note.

    Examples:
        render_chord_symbol("C", MAJOR_7, 0, "C") -> "Cmaj7"
        render_chord_symbol("D", maj9, 1, "F#") -> "Dmaj9/F#"
    """
    symbol = root_name + quality.symbol
    if not labeled or inversion == 0:
        return symbol

    if encoding == InversionEncoding.NUMBERED:
        return f"{symbol}/{inversion}"

    use_figure = encoding == InversionEncoding.FIGURED or (
        encoding == InversionEncoding.AUTO and quality.family in _FIGURED_FAMILIES
    )
    if use_figure:
        figure = figured_bass(quality, inversion)
        if figure is not None:
            suffix = figure if quality.tone_count == 3 else f"({figure})"
            if resolve_alias(quality.symbol + figure) is None:
                return symbol + suffix
            logger.debug("Figure %s collides with a quality name; using slash", figure)

    return f"{symbol}/{bass_name}"
