"""
Tests for level models and the level loader.
"""

import random
from pathlib import Path

import pytest
from pydantic import ValidationError

from chuk_mcp_chords.generator import generate_chord, generate_progression_for_level
from chuk_mcp_chords.levels import LevelLoader
from chuk_mcp_chords.matching import validate_answer, validate_progression_answer
from chuk_mcp_chords.models.level import LevelConfiguration, LevelMetadata, ProgressionLevel


class TestLevelConfiguration:
    """Tests for LevelConfiguration validation."""

    def test_roots_accept_names_and_numbers(self) -> None:
        """Roots are stored as unique pitch classes."""
        config = LevelConfiguration(roots=["C#", 1, "Db", "E"], qualities=["major"])
        assert config.roots == (1, 4)

    def test_qualities_resolve_to_symbols(self) -> None:
        """Catalog keys and aliases resolve to catalog symbols."""
        config = LevelConfiguration(roots=["C"], qualities=["major7", "M7", "minor", "m7♭5"])
        assert config.qualities == ("maj7", "m", "m7b5")

    def test_invalid_values(self) -> None:
        """Unknown qualities, bad roots and bad ranges are rejected."""
        with pytest.raises(ValidationError):
            LevelConfiguration(roots=["C"], qualities=["nonsense"])
        with pytest.raises(ValidationError):
            LevelConfiguration(roots=["H"], qualities=["major"])
        with pytest.raises(ValidationError):
            LevelConfiguration(roots=[12], qualities=["major"])
        with pytest.raises(ValidationError):
            LevelConfiguration(roots=["C"], qualities=["major"], octave_range=(5, 4))
        with pytest.raises(ValidationError):
            LevelConfiguration(roots=["C"], qualities=["major"], octave_range=(0, 10))
        with pytest.raises(ValidationError):
            LevelConfiguration(roots=["C"], qualities=["major"], inversions=[-1])
        with pytest.raises(ValidationError):
            LevelConfiguration(roots=[], qualities=["major"])

    def test_octave_window(self) -> None:
        """The window spans whole octaves."""
        config = LevelConfiguration(roots=["C"], qualities=["major"], octave_range=(4, 5))
        assert config.floor_pitch == 48
        assert config.ceiling_pitch == 71

    def test_immutable(self) -> None:
        """Levels cannot be modified after creation."""
        config = LevelConfiguration(roots=["C"], qualities=["major"])
        with pytest.raises(ValidationError):
            config.roots = (2,)

    def test_metadata(self) -> None:
        """Metadata records the level kind."""
        chord = LevelConfiguration(name="a", roots=["C"], qualities=["major"])
        progression = ProgressionLevel(name="b")
        assert LevelMetadata.from_level(chord).kind == "chord"
        assert LevelMetadata.from_level(progression).kind == "progression"


class TestLevelLoader:
    """Tests for LevelLoader."""

    def test_list_library_levels(self) -> None:
        """Built-in levels are listed in name order."""
        loader = LevelLoader()
        names = [meta.name for meta in loader.list_levels()]
        assert "triads-root" in names
        assert "ninth-inversions" in names
        assert "progressions-diatonic" in names
        assert names == sorted(names)

    def test_filter_by_kind(self) -> None:
        """Levels can be filtered by kind."""
        loader = LevelLoader()
        progressions = loader.list_levels(kind="progression")
        assert progressions
        assert all(meta.kind == "progression" for meta in progressions)
        assert all(meta.name.startswith("progressions-") for meta in progressions)

    def test_get_level(self) -> None:
        """Levels load by name with canonical candidate sets."""
        loader = LevelLoader()
        level = loader.get_chord_level("triads-root")
        assert level is not None
        assert level.qualities == ("", "m", "dim", "aug")
        assert level.roots == (0, 2, 4, 5, 7, 9, 11)
        assert loader.get_level("triads-root") is level
        assert loader.get_level("nonexistent") is None

    def test_kind_specific_getters(self) -> None:
        """Typed getters return None for the other kind."""
        loader = LevelLoader()
        assert loader.get_progression_level("triads-root") is None
        assert loader.get_chord_level("progressions-diatonic") is None
        assert isinstance(loader.get_progression_level("progressions-diatonic"), ProgressionLevel)

    def test_every_chord_level_generates(self) -> None:
        """Every built-in chord level produces chords that name themselves."""
        loader = LevelLoader()
        for meta in loader.list_levels(kind="chord"):
            level = loader.get_chord_level(meta.name)
            assert level is not None
            rng = random.Random(meta.name)
            previous = None
            for _ in range(40):
                chord = generate_chord(level, previous, rng)
                assert validate_answer(chord.expected_answer, chord, level), meta.name
                previous = chord

    def test_every_progression_level_generates(self) -> None:
        """Every built-in progression level produces progressions that name themselves."""
        loader = LevelLoader()
        for meta in loader.list_levels(kind="progression"):
            level = loader.get_progression_level(meta.name)
            assert level is not None
            rng = random.Random(meta.name)
            previous = None
            for _ in range(20):
                progression = generate_progression_for_level(level, previous, rng=rng)
                assert validate_progression_answer(progression.expected_answer, progression)
                if level.require_non_diatonic:
                    assert any(not step.is_diatonic for step in progression.steps)
                previous = progression

    def test_project_overrides_library(self, temp_dir: Path) -> None:
        """A project level with a library name takes precedence."""
        (temp_dir / "triads-root.yaml").write_text(
            "name: triads-root\ntitle: Custom triads\nroots: [C]\nqualities: [major]\n"
        )
        loader = LevelLoader(project_path=temp_dir)
        level = loader.get_chord_level("triads-root")
        assert level is not None
        assert level.title == "Custom triads"
        assert level.roots == (0,)
        titles = {meta.name: meta.title for meta in loader.list_levels()}
        assert titles["triads-root"] == "Custom triads"

    def test_project_level_name_defaults_to_file(self, temp_dir: Path) -> None:
        """The file stem names a level without a name field."""
        (temp_dir / "my-drill.yaml").write_text(
            "kind: progression\nkeys: [Am]\nminor_patterns:\n  - [i, iv, v, i]\n"
        )
        loader = LevelLoader(project_path=temp_dir)
        level = loader.get_progression_level("my-drill")
        assert level is not None
        assert level.name == "my-drill"

    def test_broken_level_is_skipped(self, temp_dir: Path) -> None:
        """Invalid level files are skipped rather than failing the listing."""
        (temp_dir / "broken.yaml").write_text("roots: [C]\nqualities: [nonsense]\n")
        (temp_dir / "garbled.yaml").write_text("roots: [C\n")
        (temp_dir / "odd-kind.yaml").write_text("kind: rhythm\nroots: [C]\nqualities: [major]\n")
        loader = LevelLoader(project_path=temp_dir)
        names = [meta.name for meta in loader.list_levels()]
        assert "broken" not in names
        assert "garbled" not in names
        assert "odd-kind" not in names
        assert loader.get_level("broken") is None

    def test_copy_to_project(self, temp_dir: Path) -> None:
        """Library levels can be copied into the project once."""
        loader = LevelLoader(project_path=temp_dir / "levels")
        dest = loader.copy_to_project("seventh-chords")
        assert dest is not None
        assert dest.exists()
        assert loader.copy_to_project("nonexistent") is None
        with pytest.raises(ValueError, match="already exists"):
            loader.copy_to_project("seventh-chords")

    def test_copy_without_project(self) -> None:
        """Copying needs a project path."""
        with pytest.raises(ValueError, match="No project path"):
            LevelLoader().copy_to_project("triads-root")

    def test_clear_cache(self, temp_dir: Path) -> None:
        """Clearing the cache picks up edited files."""
        path = temp_dir / "drill.yaml"
        path.write_text("title: One\nroots: [C]\nqualities: [major]\n")
        loader = LevelLoader(project_path=temp_dir)
        assert loader.get_level("drill").title == "One"
        path.write_text("title: Two\nroots: [C]\nqualities: [major]\n")
        assert loader.get_level("drill").title == "One"
        loader.clear_cache()
        assert loader.get_level("drill").title == "Two"
