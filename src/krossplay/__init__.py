"""Crossword solving engine with a PySide6 front end.

The public surface:

- ``krossplay.engine.grid_builder.build_grid``: derive the cell grid from a puzzle.
- ``krossplay.engine.session.SessionController``: one play session, driven by UI events.
- ``krossplay.services.registry.PuzzleRegistry``: catalog of puzzles by id.
"""

from .engine.grid_builder import build_grid
from .engine.session import SessionController, SessionSnapshot
from .models.krossword import Cell, Clue, Direction, Grid, Puzzle, Selection
from .parsers.puzzle_parser import PuzzleParser
from .services.registry import PuzzleRegistry

__all__ = [
    "build_grid",
    "Cell",
    "Clue",
    "Direction",
    "Grid",
    "Puzzle",
    "PuzzleParser",
    "PuzzleRegistry",
    "Selection",
    "SessionController",
    "SessionSnapshot",
]

__version__ = "1.0.0"
