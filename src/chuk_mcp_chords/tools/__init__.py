"""
MCP tool implementations.

Tools are organized by domain:
- chords - Levels, quality catalog, chord generation and answer checking
- progressions - Roman-numeral progression generation and answer checking
"""

from chuk_mcp_chords.tools.chords import register_chord_tools
from chuk_mcp_chords.tools.progressions import register_progression_tools

__all__ = [
    "register_chord_tools",
    "register_progression_tools",
]
