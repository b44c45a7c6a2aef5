#!/usr/bin/env python3
"""
Async Chords MCP Server using chuk-mcp-server

This server provides MCP tools for ear-training chord and progression
problems. Every tool is stateless: problems are generated from YAML level
definitions and answers are checked against the problem the caller
passes back in.

The server provides tools for:
- Listing levels and the chord quality catalog
- Generating voiced chords (root, quality, inversion) within an octave range
- Checking typed chord names, including slash, figured and worded inversions
- Checking notes placed to build a requested chord
- Generating and checking Roman-numeral progressions with borrowed chords
- Copying library levels into the project for editing
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_chords.levels import LevelLoader
from chuk_mcp_chords.tools import register_chord_tools, register_progression_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-chords")

# Project levels default to ./levels; CHUK_CHORDS_LEVELS_DIR overrides
LEVELS_DIR = Path(os.environ.get("CHUK_CHORDS_LEVELS_DIR") or Path.cwd() / "levels")
LEVELS_LIBRARY_PATH = Path(__file__).parent / "levels" / "library"

level_loader = LevelLoader(
    library_path=LEVELS_LIBRARY_PATH,
    project_path=LEVELS_DIR,
)

# Register all tools
chord_tools = register_chord_tools(mcp, level_loader)
progression_tools = register_progression_tools(mcp, level_loader)

# Export tool functions for direct access
chords_list_levels = chord_tools["chords_list_levels"]
chords_describe_level = chord_tools["chords_describe_level"]
chords_list_qualities = chord_tools["chords_list_qualities"]
chords_generate = chord_tools["chords_generate"]
chords_validate = chord_tools["chords_validate"]
chords_validate_construction = chord_tools["chords_validate_construction"]
chords_copy_level = chord_tools["chords_copy_level"]

progression_generate = progression_tools["progression_generate"]
progression_validate = progression_tools["progression_validate"]

logger.info("CHUK Chords MCP Server initialized")
logger.info(f"  Level library: {LEVELS_LIBRARY_PATH}")
logger.info(f"  Project levels: {LEVELS_DIR}")
