"""
Level loader - discovers and loads level definitions.

Levels can come from:
1. Built-in library (shipped with package)
2. Project levels (user's project/levels directory)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from chuk_mcp_chords.models.level import LevelConfiguration, LevelMetadata, ProgressionLevel

logger = logging.getLogger(__name__)

Level = LevelConfiguration | ProgressionLevel


class LevelLoader:
    """
    Discovers and loads level definitions.

    Levels are loaded from YAML files in the library and project directories.
    Project levels override library levels with the same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the level loader.

        Args:
            library_path: Path to built-in level library
            project_path: Path to project levels directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, Level] = {}

    def list_levels(self, kind: str | None = None) -> list[LevelMetadata]:
        """
        List all available levels.

        Returns levels from both library and project, with project
        levels taking precedence.

        Args:
            kind: Optional filter, 'chord' or 'progression'
        """
        levels: dict[str, LevelMetadata] = {}

        for directory in (self.library_path, self.project_path):
            if directory is None or not directory.exists():
                continue
            for path in sorted(directory.glob("*.yaml")):
                level = self._load_level_file(path)
                if level:
                    levels[level.name] = LevelMetadata.from_level(level)

        result = list(levels.values())
        if kind is not None:
            result = [meta for meta in result if meta.kind == kind]
        return sorted(result, key=lambda meta: meta.name)

    def get_level(self, name: str) -> Level | None:
        """
        Get a level by name.

        Project levels take precedence over library levels.

        Args:
            name: Level name

        Returns:
            Level if found, None otherwise
        """
        if name in self._cache:
            return self._cache[name]

        for directory in (self.project_path, self.library_path):
            if directory is None:
                continue
            level_file = directory / f"{name}.yaml"
            if level_file.exists():
                level = self._load_level_file(level_file)
                if level:
                    self._cache[name] = level
                    return level

        return None

    def get_chord_level(self, name: str) -> LevelConfiguration | None:
        """Get a chord level by name; None if missing or not a chord level."""
        level = self.get_level(name)
        return level if isinstance(level, LevelConfiguration) else None

    def get_progression_level(self, name: str) -> ProgressionLevel | None:
        """Get a progression level by name; None if missing or not a progression level."""
        level = self.get_level(name)
        return level if isinstance(level, ProgressionLevel) else None

    def copy_to_project(self, name: str) -> Path | None:
        """
        Copy a library level to the project for customization.

        Args:
            name: Level name

        Returns:
            Path to copied file, or None if not found
        """
        if not self.project_path:
            raise ValueError("No project path configured")

        library_file = self.library_path / f"{name}.yaml"
        if not library_file.exists():
            return None

        self.project_path.mkdir(parents=True, exist_ok=True)

        dest_file = self.project_path / f"{name}.yaml"
        if dest_file.exists():
            raise ValueError(f"Level already exists in project: {name}")

        dest_file.write_text(library_file.read_text())

        # Invalidate cache
        self._cache.pop(name, None)

        return dest_file

    def _load_level_file(self, path: Path) -> Level | None:
        """Load a level from a YAML file, skipping unreadable definitions."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
            return self._parse_level(data, default_name=path.stem)
        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            logger.warning("Skipping level file %s: %s", path, e)
            return None

    def _parse_level(self, data: dict[str, Any], default_name: str) -> Level:
        """Parse a level from YAML data; 'kind' selects the model."""
        if not isinstance(data, dict):
            raise TypeError("Level file must contain a mapping")

        fields = dict(data)
        kind = fields.pop("kind", "chord")
        fields.setdefault("name", default_name)

        if kind == "progression":
            return ProgressionLevel.model_validate(fields)
        if kind == "chord":
            return LevelConfiguration.model_validate(fields)
        raise ValueError(f"Unknown level kind: {kind}")

    def clear_cache(self) -> None:
        """Clear the level cache."""
        self._cache.clear()
