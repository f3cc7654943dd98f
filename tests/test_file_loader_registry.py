"""Tests for services/file_loader.py and services/registry.py."""

import json
import logging

import pytest

from krossplay.models.exceptions import ClueConflictError, PuzzleNotFoundError
from krossplay.services.file_loader import FileLoaderService
from krossplay.services.registry import PuzzleRegistry, builtin_puzzles_dir, default_registry


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


MINI = {
    "title": "Mini",
    "size": 3,
    "clues": [
        {"number": 1, "direction": "across", "startRow": 0, "startCol": 0, "length": 3, "solution": "CAT"},
        {"number": 1, "direction": "down", "startRow": 0, "startCol": 0, "length": 3, "solution": "CUD"},
    ],
}

CONFLICT = {
    "size": 3,
    "clues": [
        {"number": 1, "direction": "across", "startRow": 0, "startCol": 0, "length": 3, "solution": "CAT"},
        {"number": 1, "direction": "down", "startRow": 0, "startCol": 0, "length": 3, "solution": "DOG"},
    ],
}


class TestFileLoaderService:
    def test_load_uses_file_stem_as_id(self, tmp_path):
        path = _write(tmp_path / "mini.json", MINI)
        puzzle = FileLoaderService().load_puzzle_file(str(path))
        assert puzzle.puzzle_id == "mini"
        assert puzzle.title == "Mini"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FileLoaderService().load_puzzle_file(str(tmp_path / "missing.json"))

    def test_wrong_extension(self, tmp_path):
        path = tmp_path / "mini.txt"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ValueError, match=".json extension"):
            FileLoaderService().load_puzzle_file(str(path))

    def test_inconsistent_puzzle_fails_at_load(self, tmp_path):
        path = _write(tmp_path / "conflict.json", CONFLICT)
        with pytest.raises(ClueConflictError):
            FileLoaderService().load_puzzle_file(str(path))

    def test_directory_skips_bad_files(self, tmp_path, caplog):
        _write(tmp_path / "b.json", MINI)
        _write(tmp_path / "a.json", MINI)
        _write(tmp_path / "conflict.json", CONFLICT)
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="krossplay"):
            loaded = FileLoaderService().load_from_directory(str(tmp_path))

        assert [name for name, _ in loaded] == ["a.json", "b.json"]
        assert "conflict.json" in caplog.text

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ValueError):
            FileLoaderService().load_from_directory(str(tmp_path / "nowhere"))


class TestPuzzleRegistry:
    def test_register_and_get(self, ikea_puzzle):
        registry = PuzzleRegistry()
        registry.register("ikea", ikea_puzzle)
        assert registry.get("ikea") is ikea_puzzle
        assert "ikea" in registry
        assert len(registry) == 1
        assert list(registry) == ["ikea"]

    def test_unknown_id(self):
        with pytest.raises(PuzzleNotFoundError, match="nope"):
            PuzzleRegistry().get("nope")

    def test_duplicate_id(self, ikea_puzzle, cat_puzzle):
        registry = PuzzleRegistry()
        registry.register("p", ikea_puzzle)
        with pytest.raises(ValueError, match="already registered"):
            registry.register("p", cat_puzzle)
        registry.register("p", cat_puzzle, replace=True)
        assert registry.get("p") is cat_puzzle

    def test_empty_id(self, ikea_puzzle):
        with pytest.raises(ValueError):
            PuzzleRegistry().register("", ikea_puzzle)

    def test_first_follows_registration_order(self, ikea_puzzle, cat_puzzle):
        registry = PuzzleRegistry()
        assert registry.first() is None
        registry.register("z", cat_puzzle)
        registry.register("a", ikea_puzzle)
        assert registry.first() is cat_puzzle
        assert registry.ids() == ["z", "a"]

    def test_register_directory(self, tmp_path):
        _write(tmp_path / "mini.json", MINI)
        _write(tmp_path / "named.json", dict(MINI, id="custom"))
        registry = PuzzleRegistry()
        assert registry.register_directory(tmp_path) == 2
        assert registry.ids() == ["mini", "custom"]


class TestDefaultRegistry:
    def test_bundled_puzzles(self):
        registry = default_registry()
        assert registry.ids() == ["day5", "day9", "nordic"]
        assert builtin_puzzles_dir().is_dir()

    def test_extra_directory(self, tmp_path):
        _write(tmp_path / "mini.json", MINI)
        registry = default_registry(str(tmp_path))
        assert "mini" in registry
        assert registry.get("nordic").title == "Nordic Mini"
