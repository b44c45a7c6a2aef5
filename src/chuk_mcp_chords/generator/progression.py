"""
Progression generator - 4-chord, scale-degree-relative problems.

A pattern of Roman numerals is resolved in a key: diatonic degrees take
their triad (or seventh) from the key's scale, non-diatonic numerals
bring their own offset and quality. Each step is voiced independently
with the same octave re-fitting as single chords.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence
from types import MappingProxyType

from chuk_mcp_chords.constants import MAX_DRAW_ATTEMPTS, PROGRESSION_LENGTH, KeyMode
from chuk_mcp_chords.core.roman import NON_DIATONIC, RomanNumeral, split_figure
from chuk_mcp_chords.core.scale import Key
from chuk_mcp_chords.generator.voicing import voice_chord
from chuk_mcp_chords.models.level import ProgressionLevel
from chuk_mcp_chords.models.progression import Progression, ProgressionChord, ProgressionStep

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS: Mapping[KeyMode, tuple[tuple[str, ...], ...]] = MappingProxyType(
    {
        KeyMode.MAJOR: (
            ("I", "V", "vi", "IV"),
            ("I", "vi", "IV", "V"),
            ("vi", "IV", "I", "V"),
            ("I", "IV", "V", "I"),
            ("vi", "ii", "V", "I"),
            ("I", "iii", "vi", "IV"),
            ("I", "ii", "IV", "V"),
            ("IV", "I", "V", "vi"),
        ),
        KeyMode.MINOR: (
            ("i", "bVI", "iv", "bVII"),
            ("i", "iv", "v", "i"),
            ("i", "bVII", "bVI", "bVII"),
            ("i", "bIII", "bVII", "iv"),
            ("iv", "i", "v", "i"),
            ("i", "ii°", "v", "i"),
            ("bVI", "bVII", "i", "i"),
            ("i", "iv", "bVII", "bIII"),
        ),
    }
)

Step = tuple[RomanNumeral, int]


def resolve_key(key: Key | str) -> Key:
    """Accept a Key or a key name such as 'Am' or 'F#_minor'."""
    return key if isinstance(key, Key) else Key.parse(key)


def numeral_tone_count(numeral: RomanNumeral) -> int:
    """Number of chord tones a numeral produces."""
    if numeral.quality is not None:
        return numeral.quality.tone_count
    return 4 if numeral.seventh else 3


def generate_progression(
    key: Key | str,
    previous: Progression | None = None,
    *,
    patterns: Sequence[Sequence[str]] | None = None,
    inversions: Sequence[int] = (0,),
    octave_range: tuple[int, int] = (4, 5),
    require_inversion_labeling: bool = False,
    require_non_diatonic: bool = False,
    rng: random.Random | None = None,
) -> Progression:
    """
    Generate a 4-chord progression in a key.

    Args:
        key: The key (Key or name)
        previous: The previous problem; an identical answer is redrawn
        patterns: Numeral patterns to draw from (default: built-in set for the mode)
        inversions: Candidate inversions for steps without a pinned figure
        octave_range: (min octave, max octave) for every chord
        require_inversion_labeling: Render figured bass into the answer
        require_non_diatonic: Swap one step for a borrowed chord when the pattern has none
        rng: Random source (defaults to a fresh Random)

    Returns:
        The voiced progression with its expected answer
    """
    rng = rng or random.Random()
    key = resolve_key(key)
    pool = [tuple(p) for p in patterns] if patterns else list(DEFAULT_PATTERNS[key.mode])

    for attempt in range(1, MAX_DRAW_ATTEMPTS + 1):
        pattern = rng.choice(pool)
        steps = _draw_steps(pattern, key.mode, inversions, require_non_diatonic, rng)
        progression = build_progression(key, steps, octave_range, require_inversion_labeling)

        if previous is None or progression.expected_answer != previous.expected_answer:
            break
        logger.debug("Draw %d repeats the previous progression; redrawing", attempt)

    return progression


def generate_progression_for_level(
    level: ProgressionLevel,
    previous: Progression | None = None,
    key: Key | str | None = None,
    rng: random.Random | None = None,
) -> Progression:
    """
    Generate a progression from a progression level.

    The key is drawn from the level's keys unless one is given.
    """
    rng = rng or random.Random()
    resolved = resolve_key(key if key is not None else rng.choice(level.keys))
    return generate_progression(
        resolved,
        previous,
        patterns=level.patterns_for(resolved.mode) or None,
        inversions=level.inversions,
        octave_range=level.octave_range,
        require_inversion_labeling=level.require_inversion_labeling,
        require_non_diatonic=level.require_non_diatonic,
        rng=rng,
    )


def _draw_steps(
    pattern: Sequence[str],
    mode: KeyMode,
    inversions: Sequence[int],
    require_non_diatonic: bool,
    rng: random.Random,
) -> list[Step]:
    """Parse a pattern and pick an inversion for every unpinned step."""
    if len(pattern) != PROGRESSION_LENGTH:
        raise ValueError(f"Pattern {list(pattern)} must have {PROGRESSION_LENGTH} numerals")

    steps: list[Step] = []
    for symbol in pattern:
        numeral, pinned = split_figure(symbol, mode)
        if pinned is None:
            pinned = _pick_inversion(numeral, inversions, rng)
        steps.append((numeral, pinned))

    if require_non_diatonic and all(numeral.is_diatonic for numeral, _ in steps):
        position = rng.randrange(len(steps))
        borrowed = rng.choice(NON_DIATONIC[mode])
        logger.debug("Injecting %s at step %d", borrowed.symbol, position + 1)
        steps[position] = (borrowed, _pick_inversion(borrowed, inversions, rng))

    return steps


def _pick_inversion(numeral: RomanNumeral, inversions: Sequence[int], rng: random.Random) -> int:
    valid = [i for i in inversions if 0 <= i < numeral_tone_count(numeral)]
    return rng.choice(valid) if valid else 0


def _prefers_flats(symbol: str, key: Key) -> bool:
    # A flat or sharp on the numeral decides; otherwise the key's side does
    if symbol.startswith("b"):
        return True
    if symbol.startswith("#"):
        return False
    return key.prefer_flats


def build_progression(
    key: Key,
    steps: Sequence[Step],
    octave_range: tuple[int, int] = (4, 5),
    require_inversion_labeling: bool = False,
) -> Progression:
    """
    Resolve and voice a fixed list of (numeral, inversion) steps.

    Args:
        key: The key context
        steps: Numerals with their inversions
        octave_range: (min octave, max octave) for every chord
        require_inversion_labeling: Render figured bass into the answer

    Returns:
        The progression with its expected answer
    """
    spelled = key.spelled_notes()
    descriptors: list[ProgressionStep] = []
    chords: list[ProgressionChord] = []

    for numeral, inversion in steps:
        root, quality = numeral.resolve(key)
        pitches = voice_chord(root, quality, inversion, octave_range)
        if numeral.degree is not None:
            root_name = spelled[numeral.degree - 1]
        else:
            root_name = root.spell(_prefers_flats(numeral.symbol, key))

        rendered = (
            numeral.render(inversion, quality.tone_count)
            if require_inversion_labeling
            else numeral.symbol
        )
        descriptors.append(
            ProgressionStep(
                numeral=numeral.symbol,
                degree=numeral.degree,
                root_offset=numeral.root_offset,
                quality=None if numeral.is_diatonic else quality.symbol,
                inversion=inversion,
            )
        )
        chords.append(
            ProgressionChord(
                numeral=numeral.symbol,
                rendered=rendered,
                alternatives=numeral.alternatives,
                root_pitch_class=root.value,
                root_name=root_name,
                quality=quality.symbol,
                inversion=inversion,
                pitches=pitches,
            )
        )

    return Progression(
        key=key.short_name,
        mode=key.mode,
        steps=tuple(descriptors),
        chords=tuple(chords),
        require_inversion_labeling=require_inversion_labeling,
        expected_answer=Progression.render_answer([chord.rendered for chord in chords]),
    )
