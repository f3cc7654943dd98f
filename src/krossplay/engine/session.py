from __future__ import annotations

from dataclasses import dataclass, replace
from typing import FrozenSet, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from ..models.krossword import Cell, CellId, Puzzle, Selection
from ..utils.logger import get_logger
from .completion import CompletionDetector, is_complete
from .grid_builder import build_grid
from .navigation import Arrow, NavigationEngine, NavigationState
from .validator import correct_cells, incorrect_cells

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view handed to renderers and observers"""

    cells: Tuple[Cell, ...]
    selection: Selection
    complete: bool
    errors: FrozenSet[CellId] = frozenset()
    correct: FrozenSet[CellId] = frozenset()


class SessionController(QObject):
    """Owns the live grid and selection for one play session."""

    selection_changed = Signal(int, int)  # row, col
    value_changed = Signal()
    puzzle_completed = Signal()
    answers_checked = Signal(bool)

    def __init__(self, puzzle: Puzzle, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.puzzle = puzzle
        self.engine = NavigationEngine(puzzle)
        self.detector = CompletionDetector()
        self.state = NavigationState(grid=build_grid(puzzle))
        self.showing_errors = False
        self.started = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Rebuild the grid, clear selection and progress, select the first cell"""
        state = NavigationState(grid=build_grid(self.puzzle))
        first = self.engine.first_active_cell(state.grid)
        if first is not None:
            state = self.engine.select(state, first.id)
        self.detector.reset()
        self.showing_errors = False
        self.started = True
        LOGGER.debug("Session started for %s", self.puzzle.puzzle_id or self.puzzle.title)
        self._apply(state, force=True)

    def reset(self) -> None:
        self.start()

    def load_puzzle(self, puzzle: Puzzle) -> None:
        self.puzzle = puzzle
        self.engine = NavigationEngine(puzzle)
        self.start()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def select_cell(self, cell_id: CellId) -> None:
        self._apply(self.engine.select(self.state, tuple(cell_id)))

    def update_cell(self, cell_id: CellId, raw_char: str) -> None:
        """Enter raw_char at cell_id; an empty string clears the cell"""
        cell_id = tuple(cell_id)
        state = self.state
        if state.selection.cell_id != cell_id:
            state = self.engine.select(state, cell_id)
            if state.selection.cell_id != cell_id:
                return

        if raw_char == "":
            self._apply(replace(state, grid=state.grid.with_value(cell_id, "")))
            return

        char = raw_char[-1].upper()
        if len(char) != 1 or not char.isalpha():
            LOGGER.debug("Ignoring non-letter input %r at %s", raw_char, cell_id)
            self._apply(state)
            return
        self._apply(self.engine.enter_letter(state, char))

    def type_letter(self, char: str) -> None:
        if self.state.selection.cell_id is None:
            return
        self.update_cell(self.state.selection.cell_id, char)

    def backspace(self) -> None:
        self._apply(self.engine.backspace(self.state))

    def move(self, arrow: Arrow) -> None:
        self._apply(self.engine.move(self.state, arrow))

    def toggle_direction(self) -> None:
        self._apply(self.engine.toggle_direction(self.state), force=True)

    def next_clue(self, backward: bool = False) -> None:
        self._apply(self.engine.next_clue(self.state, backward))

    def handle_key(self, name: str) -> None:
        """Dispatch a key by its name ("ArrowLeft", "Backspace", "Tab", "a", ...)"""
        if name in (Arrow.LEFT.value, Arrow.RIGHT.value, Arrow.UP.value, Arrow.DOWN.value):
            self.move(Arrow(name))
        elif name in ("Backspace", "Delete"):
            self.backspace()
        elif name == "Tab":
            self.next_clue()
        elif name == "Shift+Tab":
            self.next_clue(backward=True)
        elif name == " ":
            self.toggle_direction()
        elif len(name) == 1 and name.isalpha():
            self.type_letter(name)
        else:
            LOGGER.debug("Unhandled key %r", name)

    # ------------------------------------------------------------------
    # Checking
    # ------------------------------------------------------------------
    def check_answers(self, show_errors: bool = True) -> bool:
        """Report completion without requiring a new mutation.

        With show_errors, wrong cells stay listed in :meth:`snapshot` until
        the next :meth:`start`.
        """
        if not self.started:
            return False
        if show_errors:
            self.showing_errors = True
        if self.detector.update(self.puzzle, self.state.grid):
            self.puzzle_completed.emit()
        complete = is_complete(self.puzzle, self.state.grid)
        self.answers_checked.emit(complete)
        return complete

    @property
    def is_complete(self) -> bool:
        return self.detector.completed

    def snapshot(self) -> SessionSnapshot:
        errors = frozenset(incorrect_cells(self.puzzle, self.state.grid)) if self.showing_errors else frozenset()
        return SessionSnapshot(
            cells=self.state.grid.cells,
            selection=self.state.selection,
            complete=self.detector.completed,
            errors=errors,
            correct=frozenset(correct_cells(self.puzzle, self.state.grid)),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _apply(self, state: NavigationState, force: bool = False) -> None:
        if not self.started:
            LOGGER.debug("Input before start() ignored")
            return
        previous = self.state
        self.state = state

        if state.grid is not previous.grid:
            self.value_changed.emit()
            if self.detector.update(self.puzzle, state.grid):
                self.puzzle_completed.emit()

        cell_id = state.selection.cell_id
        if cell_id is not None and (force or state.selection != previous.selection):
            self.selection_changed.emit(*cell_id)
