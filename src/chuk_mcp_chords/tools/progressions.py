"""
Progression tools - MCP tools for Roman-numeral progression problems.
"""

from __future__ import annotations

import json
import logging
import random
from typing import TYPE_CHECKING, Any

from chuk_mcp_chords.constants import ErrorMessages
from chuk_mcp_chords.generator import generate_progression, generate_progression_for_level
from chuk_mcp_chords.levels import LevelLoader
from chuk_mcp_chords.matching import validate_progression_answer
from chuk_mcp_chords.models.progression import Progression

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_progression_tools(mcp: ChukMCPServer, loader: LevelLoader) -> dict[str, Any]:
    """
    Register progression problem tools with the MCP server.

    Args:
        mcp: The MCP server instance
        loader: The level loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def progression_generate(
        key: str | None = None,
        level: str | None = None,
        previous: dict[str, Any] | None = None,
        seed: int | None = None,
    ) -> str:
        """
        Generate a 4-chord progression problem.

        With a level, the key (unless given) and patterns come from the
        level; without one, built-in diatonic patterns are used in the key.

        Args:
            key: Key such as 'C', 'Am', 'F#_minor' (required without a level)
            level: Optional progression level name
            previous: The previous progression returned by this tool
            seed: Optional random seed for reproducible problems

        Returns:
            JSON string with the voiced progression and its expected answer

        Example:
            progression_generate(key="Am")
            progression_generate(level="progressions-borrowed")
        """
        try:
            prev = Progression.model_validate(previous) if previous else None
            rng = random.Random(seed)

            if level is not None:
                config = loader.get_progression_level(level)
                if config is None:
                    return json.dumps(
                        {
                            "status": "error",
                            "message": ErrorMessages.WRONG_LEVEL_KIND.format(
                                name=level, kind="progression"
                            )
                            if loader.get_level(level)
                            else ErrorMessages.LEVEL_NOT_FOUND.format(name=level),
                        }
                    )
                progression = generate_progression_for_level(config, prev, key=key, rng=rng)
            elif key is not None:
                progression = generate_progression(key, prev, rng=rng)
            else:
                return json.dumps(
                    {"status": "error", "message": "Either 'key' or 'level' is required."}
                )

            return json.dumps(
                {"status": "success", "progression": progression.model_dump(mode="json")}
            )
        except Exception as e:
            logger.exception("Failed to generate progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["progression_generate"] = progression_generate

    @mcp.tool  # type: ignore[arg-type]
    async def progression_validate(answer: str, progression: dict[str, Any]) -> str:
        """
        Check a typed Roman-numeral answer against a generated progression.

        Args:
            answer: Numerals separated by spaces, e.g. "i bVI iv bVII"
            progression: The progression returned by progression_generate

        Returns:
            JSON string with 'correct' and the expected answer

        Example:
            progression_validate(answer="I V vi IV", progression={...})
        """
        try:
            expected = Progression.model_validate(progression)
            correct = validate_progression_answer(answer, expected)
            return json.dumps(
                {
                    "status": "success",
                    "correct": correct,
                    "answer": answer,
                    "expected_answer": expected.expected_answer,
                }
            )
        except Exception as e:
            logger.exception("Failed to validate progression answer")
            return json.dumps({"status": "error", "message": str(e)})

    tools["progression_validate"] = progression_validate

    return tools
