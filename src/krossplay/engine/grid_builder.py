"""Build the cell grid from a puzzle's clue list."""

from __future__ import annotations

from typing import Dict, List, Tuple

from ..models.exceptions import (
    ClueBoundsError,
    ClueConflictError,
    ClueDefinitionError,
    PuzzleFormatError,
)
from ..models.krossword import Cell, CellId, Clue, Grid, Puzzle
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def build_grid(puzzle: Puzzle) -> Grid:
    """Create a Grid with every covered cell unblocked and numbered.

    Fails with a :class:`PuzzleFormatError` subclass when a clue is malformed,
    leaves the bounding box, or cannot agree with a crossing clue on a shared
    letter.
    """
    if puzzle.width <= 0 or puzzle.height <= 0:
        raise PuzzleFormatError(f"Invalid grid dimensions {puzzle.width}x{puzzle.height}")

    coverage: Dict[CellId, List[Tuple[Clue, int]]] = {}
    for clue in puzzle.clues:
        _check_clue(clue)
        for offset, (row, col) in enumerate(clue.cells):
            if not (0 <= row < puzzle.height and 0 <= col < puzzle.width):
                raise ClueBoundsError(
                    f"Clue {clue.label} leaves the {puzzle.width}x{puzzle.height} grid at ({row},{col})"
                )
            coverage.setdefault((row, col), []).append((clue, offset))

    numbers: Dict[CellId, int] = {}
    for clue in puzzle.clues:
        numbers.setdefault((clue.start_row, clue.start_col), clue.number)

    cells: List[Cell] = []
    for row in range(puzzle.height):
        for col in range(puzzle.width):
            covering = coverage.get((row, col))
            if not covering:
                cells.append(Cell(row=row, col=col))
                continue
            cells.append(
                Cell(
                    row=row,
                    col=col,
                    expected_answer=_expected_letter(row, col, covering),
                    is_blocked=False,
                    clue_number=numbers.get((row, col)),
                )
            )

    LOGGER.debug(
        "Built %dx%d grid with %d active cells from %d clues",
        puzzle.width, puzzle.height, len(coverage), len(puzzle.clues),
    )
    return Grid(width=puzzle.width, height=puzzle.height, cells=tuple(cells))


def _check_clue(clue: Clue) -> None:
    if clue.length <= 0:
        raise ClueDefinitionError(f"Clue {clue.label} has non-positive length {clue.length}")
    for solution in clue.solutions:
        if len(solution) != clue.length:
            raise ClueDefinitionError(
                f"Clue {clue.label}: solution '{solution}' does not have length {clue.length}"
            )
        if not solution.isalpha():
            raise ClueDefinitionError(f"Clue {clue.label}: solution '{solution}' must be letters only")


def _expected_letter(row: int, col: int, covering: List[Tuple[Clue, int]]) -> str:
    """First letter, in clue order, that every covering clue accepts"""
    directions = [clue.direction for clue, _ in covering]
    if len(set(directions)) != len(directions):
        labels = ", ".join(clue.label for clue, _ in covering)
        raise ClueConflictError(f"Clues {labels} overlap in the same direction at ({row},{col})")

    candidates: List[str] = []
    for clue, offset in covering:
        for letter in clue.accepted_letters(offset):
            if letter not in candidates:
                candidates.append(letter)

    for letter in candidates:
        if all(letter in clue.accepted_letters(offset) for clue, offset in covering):
            return letter

    details = ", ".join(
        f"{clue.label}={'/'.join(clue.accepted_letters(offset))}" for clue, offset in covering
    )
    raise ClueConflictError(f"Letter conflict at ({row},{col}): {details}")
