#!/usr/bin/env python3
"""
Example: Running chord and progression drills.

This demonstrates how levels drive problem generation and how typed
answers are checked: every chord is voiced inside the level's octave
window, and many spellings of the same answer are accepted.

Usage:
    python examples/run_drill.py
"""

import random

from chuk_mcp_chords.core.pitch import pitch_name
from chuk_mcp_chords.generator import generate_chord, generate_progression
from chuk_mcp_chords.levels import LevelLoader
from chuk_mcp_chords.matching import (
    validate_answer,
    validate_construction,
    validate_progression_answer,
)


def main() -> None:
    """Demonstrate chord and progression drills."""
    print("CHUK Chords Drill Demo")
    print("=" * 40)
    print()

    loader = LevelLoader()
    rng = random.Random(2024)

    print("Available levels:")
    for meta in loader.list_levels():
        print(f"  [{meta.kind}] {meta.name}: {meta.title}")
    print()

    level = loader.get_chord_level("ninth-inversions")
    if not level:
        print("Failed to load level")
        return

    print(f"Level: {level.title}")
    previous = None
    for _ in range(3):
        chord = generate_chord(level, previous, rng)
        names = ", ".join(pitch_name(p) for p in chord.pitches)
        print(f"  Pitches: {names}")
        print(f"  Expected: {chord.expected_answer}")
        for answer in (
            chord.expected_answer,
            f"{chord.root_name}{chord.quality}/{chord.inversion}",
            f"{chord.root_name}{chord.quality}",
        ):
            verdict = "correct" if validate_answer(answer, chord, level) else "wrong"
            print(f"    {answer!r}: {verdict}")
        built = validate_construction(
            list(chord.pitches), chord.root_pitch_class, chord.chord_quality, chord.inversion
        )
        print(f"    Built from its own pitches: {built}")
        previous = chord
    print()

    print("Progression in A minor:")
    progression = generate_progression("Am", rng=rng)
    for chord in progression.chords:
        names = ", ".join(pitch_name(p) for p in chord.pitches)
        print(f"  {chord.rendered:>6}  {chord.root_name}{chord.quality}  ({names})")
    answer = progression.expected_answer.lower()
    verdict = "correct" if validate_progression_answer(answer, progression) else "wrong"
    print(f"  Answer {answer!r}: {verdict}")


if __name__ == "__main__":
    main()
