"""Completion detection with a once-per-session signal."""

from __future__ import annotations

from ..models.krossword import Grid, Puzzle
from ..utils.logger import get_logger
from .validator import is_cell_correct

LOGGER = get_logger(__name__)


def is_complete(puzzle: Puzzle, grid: Grid) -> bool:
    """True iff every cell is blocked or holds an accepted value"""
    return all(is_cell_correct(puzzle, cell) for cell in grid.active_cells())


class CompletionDetector:
    """Latches the first false-to-true transition of :func:`is_complete`."""

    def __init__(self) -> None:
        self.completed = False

    def update(self, puzzle: Puzzle, grid: Grid) -> bool:
        """Return True only on the call that first sees a complete grid"""
        if self.completed:
            return False
        if is_complete(puzzle, grid):
            self.completed = True
            LOGGER.info("Puzzle %s solved", puzzle.puzzle_id or puzzle.title or "<unnamed>")
            return True
        return False

    def reset(self) -> None:
        self.completed = False
