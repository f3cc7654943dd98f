"""Selection and auto-advance state machine driven by keystrokes and clicks.

Every transition takes a :class:`NavigationState` and returns a new one; the
grid and selection inside it are never mutated. Targets that are blocked or
outside the grid leave the state unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from ..models.krossword import Cell, CellId, Clue, Direction, Grid, Puzzle, Selection
from ..utils.logger import get_logger
from .validator import is_cell_correct, is_clue_solved

LOGGER = get_logger(__name__)


class Arrow(str, Enum):
    LEFT = "ArrowLeft"
    RIGHT = "ArrowRight"
    UP = "ArrowUp"
    DOWN = "ArrowDown"

    @property
    def delta(self) -> Tuple[int, int]:
        return _ARROW_DELTAS[self]


_ARROW_DELTAS = {
    Arrow.LEFT: (0, -1),
    Arrow.RIGHT: (0, 1),
    Arrow.UP: (-1, 0),
    Arrow.DOWN: (1, 0),
}


@dataclass(frozen=True)
class NavigationState:
    grid: Grid
    selection: Selection = Selection()

    @property
    def selected_cell(self) -> Optional[Cell]:
        return self.grid.get(self.selection.cell_id)


class NavigationEngine:
    """Pure transitions over (grid, selection) for one puzzle."""

    def __init__(self, puzzle: Puzzle):
        self.puzzle = puzzle

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select(self, state: NavigationState, cell_id: CellId) -> NavigationState:
        """Select cell_id, keeping the current direction when the cell allows it"""
        cell = state.grid.get(cell_id)
        if cell is None or cell.is_blocked:
            return state

        matches = self.puzzle.clues_covering(cell.row, cell.col)
        chosen = matches[0] if matches else None
        previous = state.selection.direction
        if previous is not None:
            chosen = next((clue for clue in matches if clue.direction is previous), chosen)

        LOGGER.debug("Selected %s (%s)", cell.id, chosen.label if chosen else "no clue")
        return replace(state, selection=Selection(cell_id=cell.id, clue=chosen))

    def first_active_cell(self, grid: Grid) -> Optional[Cell]:
        return next(grid.active_cells(), None)

    def first_incorrect_cell(self, grid: Grid) -> Optional[Cell]:
        """First active cell, row-major, that does not hold an accepted letter"""
        return next(
            (cell for cell in grid.active_cells() if not is_cell_correct(self.puzzle, cell)),
            None,
        )

    def toggle_direction(self, state: NavigationState) -> NavigationState:
        """Switch to the crossing clue of the selected cell, if there is one"""
        cell = state.selected_cell
        clue = state.selection.clue
        if cell is None or clue is None:
            return state
        crossing = next(
            (other for other in self.puzzle.clues_covering(cell.row, cell.col)
             if other.direction is not clue.direction),
            None,
        )
        if crossing is None:
            return state
        return replace(state, selection=replace(state.selection, clue=crossing))

    def next_clue(self, state: NavigationState, backward: bool = False) -> NavigationState:
        """Jump to the next unsolved clue in puzzle order, wrapping around"""
        clues = list(self.puzzle.clues)
        if not clues:
            return state
        step = -1 if backward else 1
        current = state.selection.clue
        index = clues.index(current) if current in clues else (len(clues) if backward else -1)

        for k in range(1, len(clues) + 1):
            clue = clues[(index + step * k) % len(clues)]
            target = self._first_incorrect_in(state.grid, clue)
            if target is not None:
                LOGGER.debug("Moving to clue %s at %s", clue.label, target)
                return replace(state, selection=Selection(cell_id=target, clue=clue))
        return state

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def enter_letter(self, state: NavigationState, letter: str) -> NavigationState:
        """Write letter into the selected cell and advance.

        A cell that already holds an accepted answer is never overwritten; the
        keystroke only advances the selection.
        """
        cell = state.selected_cell
        # "ß".upper() is "SS"; a cell holds exactly one letter
        letter = letter.upper()
        if cell is None or cell.is_blocked or len(letter) != 1 or not letter.isalpha():
            return state

        if not is_cell_correct(self.puzzle, cell):
            state = replace(state, grid=state.grid.with_value(cell.id, letter))
        return self.auto_advance(state)

    def auto_advance(self, state: NavigationState) -> NavigationState:
        cell = state.selected_cell
        clue = state.selection.clue
        if cell is None or clue is None:
            return state
        offset = clue.offset_of(cell.row, cell.col)
        if offset is None:
            return state

        for row, col in clue.cells[offset + 1:]:
            candidate = state.grid.cell(row, col)
            if candidate is None or candidate.is_blocked:
                continue
            if not is_cell_correct(self.puzzle, candidate):
                return self.select(state, candidate.id)

        if not is_clue_solved(self.puzzle, state.grid, clue):
            # an earlier cell of this word is still wrong, stay on it
            LOGGER.debug("End of %s reached with unsolved cells, staying in position", clue.label)
            return state

        target = self.first_incorrect_cell(state.grid)
        if target is None:
            return state
        LOGGER.debug("Clue %s solved, jumping to %s", clue.label, target.id)
        return self.select(state, target.id)

    def backspace(self, state: NavigationState) -> NavigationState:
        """Clear the selected cell, then step back along the current direction"""
        cell = state.selected_cell
        if cell is None:
            return state
        state = replace(state, grid=state.grid.with_value(cell.id, ""))

        direction = state.selection.direction or Direction.ACROSS
        dr, dc = direction.step
        row, col = cell.row - dr, cell.col - dc
        while state.grid.contains(row, col):
            if state.grid.is_active(row, col):
                return self.select(state, (row, col))
            row, col = row - dr, col - dc
        return state

    def move(self, state: NavigationState, arrow: Arrow) -> NavigationState:
        """Move one cell in an absolute direction; blocked or off-grid is a no-op"""
        cell = state.selected_cell
        if cell is None:
            return state
        dr, dc = Arrow(arrow).delta
        return self.select(state, (cell.row + dr, cell.col + dc))

    def _first_incorrect_in(self, grid: Grid, clue: Clue) -> Optional[CellId]:
        for row, col in clue.cells:
            cell = grid.cell(row, col)
            if cell is not None and not is_cell_correct(self.puzzle, cell):
                return cell.id
        return None
