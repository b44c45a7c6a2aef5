"""
Chord tools - MCP tools for chord-recognition problems.

Tools for listing levels and qualities, generating a voiced chord from a
level, checking a typed answer against it and checking notes placed to
build it. Library levels can be copied into the project for editing.
The server keeps no per-session state: the previous chord is passed
back in by the caller.
"""

from __future__ import annotations

import json
import logging
import random
from typing import TYPE_CHECKING, Any

from chuk_mcp_chords.constants import ChordFamily, ErrorMessages
from chuk_mcp_chords.core.chord import all_qualities, qualities_in_family
from chuk_mcp_chords.core.inversion import describe_inversion
from chuk_mcp_chords.core.pitch import PitchClass, pitch_name
from chuk_mcp_chords.generator import generate_chord
from chuk_mcp_chords.levels import LevelLoader
from chuk_mcp_chords.matching import validate_answer, validate_construction
from chuk_mcp_chords.models.chord import GeneratedChord

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def chord_payload(chord: GeneratedChord) -> dict[str, Any]:
    """Serialize a generated chord, with display helpers for the caller."""
    payload = chord.model_dump(mode="json")
    flats = "b" in chord.root_name
    payload["pitch_names"] = [pitch_name(p, prefer_flats=flats) for p in chord.pitches]
    payload["inversion_name"] = describe_inversion(chord.inversion)
    return payload


def register_chord_tools(mcp: ChukMCPServer, loader: LevelLoader) -> dict[str, Any]:
    """
    Register chord problem tools with the MCP server.

    Args:
        mcp: The MCP server instance
        loader: The level loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def chords_list_levels(kind: str | None = None) -> str:
        """
        List available levels.

        Args:
            kind: Optional filter, 'chord' or 'progression'

        Returns:
            JSON string with level summaries

        Example:
            chords_list_levels(kind="chord")
        """
        try:
            levels = loader.list_levels(kind)
            return json.dumps(
                {
                    "status": "success",
                    "levels": [level.model_dump(mode="json") for level in levels],
                    "count": len(levels),
                }
            )
        except Exception as e:
            logger.exception("Failed to list levels")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_list_levels"] = chords_list_levels

    @mcp.tool  # type: ignore[arg-type]
    async def chords_describe_level(name: str) -> str:
        """
        Get the full configuration of a level.

        Args:
            name: Level name

        Returns:
            JSON string with the level's candidate sets and options

        Example:
            chords_describe_level(name="seventh-inversions")
        """
        try:
            level = loader.get_level(name)
            if level is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.LEVEL_NOT_FOUND.format(name=name)}
                )
            return json.dumps({"status": "success", "level": level.model_dump(mode="json")})
        except Exception as e:
            logger.exception("Failed to describe level")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_describe_level"] = chords_describe_level

    @mcp.tool  # type: ignore[arg-type]
    async def chords_list_qualities(family: str | None = None) -> str:
        """
        List the chord quality catalog.

        Args:
            family: Optional family filter ('triad', 'seventh', 'ninth',
                'eleventh', 'thirteenth', 'suspended')

        Returns:
            JSON string with symbols, intervals and accepted aliases

        Example:
            chords_list_qualities(family="ninth")
        """
        try:
            qualities = (
                qualities_in_family(ChordFamily(family)) if family else list(all_qualities())
            )
            return json.dumps(
                {
                    "status": "success",
                    "qualities": [
                        {
                            "symbol": q.symbol,
                            "name": q.name,
                            "family": q.family.value,
                            "intervals": list(q.intervals),
                            "aliases": sorted(q.aliases),
                        }
                        for q in qualities
                    ],
                    "count": len(qualities),
                }
            )
        except Exception as e:
            logger.exception("Failed to list qualities")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_list_qualities"] = chords_list_qualities

    @mcp.tool  # type: ignore[arg-type]
    async def chords_generate(
        level: str,
        previous: dict[str, Any] | None = None,
        seed: int | None = None,
    ) -> str:
        """
        Generate a chord problem from a level.

        Args:
            level: Chord level name
            previous: The previous chord returned by this tool, to avoid repeats
            seed: Optional random seed for reproducible problems

        Returns:
            JSON string with the voiced chord and its expected answer

        Example:
            chords_generate(level="triads-inversions")
        """
        try:
            config = loader.get_chord_level(level)
            if config is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.WRONG_LEVEL_KIND.format(name=level, kind="chord")
                        if loader.get_level(level)
                        else ErrorMessages.LEVEL_NOT_FOUND.format(name=level),
                    }
                )

            prev = GeneratedChord.model_validate(previous) if previous else None
            chord = generate_chord(config, prev, random.Random(seed))
            return json.dumps({"status": "success", "chord": chord_payload(chord)})
        except Exception as e:
            logger.exception("Failed to generate chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_generate"] = chords_generate

    @mcp.tool  # type: ignore[arg-type]
    async def chords_validate(answer: str, chord: dict[str, Any], level: str) -> str:
        """
        Check a typed answer against a generated chord.

        Args:
            answer: The answer as typed, e.g. "Dmaj9/F#" or "C first inversion"
            chord: The chord returned by chords_generate
            level: The level the chord was generated from

        Returns:
            JSON string with 'correct' and the expected answer

        Example:
            chords_validate(answer="CM7", chord={...}, level="seventh-chords")
        """
        try:
            config = loader.get_chord_level(level)
            if config is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.LEVEL_NOT_FOUND.format(name=level)}
                )

            generated = GeneratedChord.model_validate(chord)
            correct = validate_answer(answer, generated, config)
            return json.dumps(
                {
                    "status": "success",
                    "correct": correct,
                    "answer": answer,
                    "expected_answer": generated.expected_answer,
                }
            )
        except Exception as e:
            logger.exception("Failed to validate answer")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_validate"] = chords_validate

    @mcp.tool  # type: ignore[arg-type]
    async def chords_validate_construction(pitches: list[int], chord: dict[str, Any]) -> str:
        """
        Check notes placed to build a chord.

        The chord names the task (root, quality, inversion); the placed
        notes must cover its tones once each with the inversion's tone
        in the bass.

        Args:
            pitches: Absolute pitches as placed (C5 = 60)
            chord: The chord returned by chords_generate

        Returns:
            JSON string with 'correct' and the expected pitch classes and bass

        Example:
            chords_validate_construction(pitches=[64, 67, 72], chord={...})
        """
        try:
            task = GeneratedChord.model_validate(chord)
            quality = task.chord_quality
            root = PitchClass(task.root_pitch_class)
            flats = "b" in task.root_name
            correct = validate_construction(pitches, root, quality, task.inversion)
            return json.dumps(
                {
                    "status": "success",
                    "correct": correct,
                    "expected_pitch_classes": [
                        pc.spell(flats) for pc in quality.get_pitch_classes(root)
                    ],
                    "expected_bass": task.bass_name,
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to validate construction")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_validate_construction"] = chords_validate_construction

    @mcp.tool  # type: ignore[arg-type]
    async def chords_copy_level(name: str) -> str:
        """
        Copy a library level to the project for customization.

        Args:
            name: Level name

        Returns:
            JSON string with path to copied level

        Example:
            chords_copy_level(name="seventh-inversions")
        """
        try:
            path = loader.copy_to_project(name)
            if path is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.LEVEL_NOT_FOUND.format(name=name)}
                )

            return json.dumps(
                {
                    "status": "success",
                    "message": "Level copied to project",
                    "path": str(path),
                    "hint": "You can now customize this level by editing the YAML file",
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to copy level")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_copy_level"] = chords_copy_level

    return tools
