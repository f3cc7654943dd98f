"""Shared fixtures: small puzzles and a Qt core application for signal tests."""

import pytest
from PySide6.QtCore import QCoreApplication

from krossplay.engine.grid_builder import build_grid
from krossplay.engine.navigation import NavigationEngine, NavigationState
from krossplay.models.krossword import Clue, Direction, Puzzle


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def across(number, row, col, solution, *alternates, text=""):
    return Clue(number, Direction.ACROSS, row, col, len(solution), solution, tuple(alternates), text)


def down(number, row, col, solution, *alternates, text=""):
    return Clue(number, Direction.DOWN, row, col, len(solution), solution, tuple(alternates), text)


@pytest.fixture
def ikea_puzzle():
    """5x5: IKEA across on row 1, SKAL down on column 1, sharing the K."""
    return Puzzle.square(
        5,
        [across(2, 1, 0, "IKEA"), down(1, 0, 1, "SKAL")],
        title="Ikea",
        puzzle_id="ikea",
    )


@pytest.fixture
def cat_puzzle():
    """3x3: CAT and DOG across, CUD down the first column."""
    return Puzzle.square(
        3,
        [across(1, 0, 0, "CAT"), across(3, 2, 0, "DOG"), down(1, 0, 0, "CUD")],
        puzzle_id="cat",
    )


@pytest.fixture
def nordic_puzzle():
    """NOBEL (alternate SKALL) down, crossed by KITE, ECHO and LAGOM."""
    return Puzzle(
        width=5,
        height=5,
        clues=(
            down(1, 0, 0, "NOBEL", "SKALL"),
            across(2, 1, 0, "KITE"),
            down(3, 1, 3, "ECHO"),
            across(4, 4, 0, "LAGOM"),
        ),
        puzzle_id="nordic",
    )


def make_state(puzzle, values=None, select=None):
    """Build a navigation state with preset values and an optional selection"""
    engine = NavigationEngine(puzzle)
    grid = build_grid(puzzle)
    for cell_id, value in (values or {}).items():
        grid = grid.with_value(cell_id, value)
    state = NavigationState(grid=grid)
    if select is not None:
        state = engine.select(state, select)
    return engine, state
