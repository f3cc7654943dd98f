"""Answer checks shared by navigation and completion detection."""

from __future__ import annotations

from typing import List

from ..models.krossword import Cell, CellId, Clue, Grid, Puzzle


def is_accepted(puzzle: Puzzle, cell: Cell, candidate: str) -> bool:
    """Return True if any clue covering cell accepts candidate at that position.

    The rule is disjunctive: at an intersection a letter that satisfies only
    the across word (or only the down word) is still accepted. Alternate
    solutions count the same as the primary one.
    """
    if cell.is_blocked or not candidate:
        return False
    letter = candidate.upper()
    for clue in puzzle.clues_covering(cell.row, cell.col):
        offset = clue.offset_of(cell.row, cell.col)
        if any(solution[offset] == letter for solution in clue.solutions):
            return True
    return False


def is_cell_correct(puzzle: Puzzle, cell: Cell) -> bool:
    """Validate the value currently held by cell"""
    return is_accepted(puzzle, cell, cell.value)


def is_clue_solved(puzzle: Puzzle, grid: Grid, clue: Clue) -> bool:
    """Validate if every cell of a clue holds an accepted letter"""
    for row, col in clue.cells:
        cell = grid.cell(row, col)
        if cell is None or not is_cell_correct(puzzle, cell):
            return False
    return True


def incorrect_cells(puzzle: Puzzle, grid: Grid) -> List[CellId]:
    """Ids of filled cells whose value is not accepted, row-major"""
    return [
        cell.id
        for cell in grid.active_cells()
        if cell.value and not is_cell_correct(puzzle, cell)
    ]


def correct_cells(puzzle: Puzzle, grid: Grid) -> List[CellId]:
    return [cell.id for cell in grid.active_cells() if is_cell_correct(puzzle, cell)]
