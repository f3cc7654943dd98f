"""Explicit catalog of playable puzzles keyed by id.

Nothing registers itself on import; callers populate a registry from a
directory scan or by hand.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List, Optional

from ..models.exceptions import PuzzleNotFoundError
from ..models.krossword import Puzzle
from ..utils.logger import get_logger
from .file_loader import FileLoaderService

LOGGER = get_logger(__name__)


def builtin_puzzles_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "puzzles"


class PuzzleRegistry:
    """Ordered mapping of puzzle id to Puzzle"""

    def __init__(self) -> None:
        self._puzzles: Dict[str, Puzzle] = {}

    def register(self, puzzle_id: str, puzzle: Puzzle, replace: bool = False) -> None:
        if not puzzle_id:
            raise ValueError("Puzzle id must not be empty")
        if puzzle_id in self._puzzles and not replace:
            raise ValueError(f"Puzzle '{puzzle_id}' is already registered")
        self._puzzles[puzzle_id] = puzzle

    def get(self, puzzle_id: str) -> Puzzle:
        try:
            return self._puzzles[puzzle_id]
        except KeyError:
            raise PuzzleNotFoundError(f"No puzzle registered as '{puzzle_id}'") from None

    def ids(self) -> List[str]:
        return list(self._puzzles)

    def first(self) -> Optional[Puzzle]:
        return next(iter(self._puzzles.values()), None)

    def register_directory(self, directory, loader: Optional[FileLoaderService] = None) -> int:
        """Register every valid puzzle in directory under its file stem; returns the count"""
        loader = loader or FileLoaderService()
        count = 0
        for filename, puzzle in loader.load_from_directory(str(directory)):
            puzzle_id = puzzle.puzzle_id or Path(filename).stem
            self.register(puzzle_id, puzzle, replace=True)
            count += 1
        LOGGER.debug("Registered %d puzzles from %s", count, directory)
        return count

    def __contains__(self, puzzle_id: object) -> bool:
        return puzzle_id in self._puzzles

    def __len__(self) -> int:
        return len(self._puzzles)

    def __iter__(self) -> Iterator[str]:
        return iter(self._puzzles)


def default_registry(extra_dir: Optional[str] = None) -> PuzzleRegistry:
    """Registry of the bundled puzzles, plus any found in extra_dir"""
    registry = PuzzleRegistry()
    registry.register_directory(builtin_puzzles_dir())
    if extra_dir:
        registry.register_directory(extra_dir)
    return registry
