"""
Level system - YAML definitions of what each exercise level draws from.

Built-in levels ship in ``library/``; a project ``levels/`` directory can
override any of them by name.
"""

from chuk_mcp_chords.levels.loader import Level, LevelLoader

__all__ = ["Level", "LevelLoader"]
