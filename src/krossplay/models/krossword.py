from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, List, Optional, Tuple

CellId = Tuple[int, int]


class Direction(str, Enum):
    """Word directions a clue can run in"""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def opposite(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


@dataclass(frozen=True)
class Clue:
    """Represents a clue across or down"""

    number: int
    direction: Direction
    start_row: int
    start_col: int
    length: int
    solution: str
    alternate_solutions: Tuple[str, ...] = ()
    text: str = ""

    def __post_init__(self):
        # frozen, so normalize through object.__setattr__
        object.__setattr__(self, "direction", Direction(self.direction))
        object.__setattr__(self, "solution", self.solution.upper())
        object.__setattr__(
            self, "alternate_solutions", tuple(alt.upper() for alt in self.alternate_solutions)
        )

    @property
    def cells(self) -> List[CellId]:
        dr, dc = self.direction.step
        return [(self.start_row + dr * i, self.start_col + dc * i) for i in range(self.length)]

    @property
    def solutions(self) -> Tuple[str, ...]:
        return (self.solution,) + tuple(self.alternate_solutions)

    @property
    def label(self) -> str:
        return f"{self.number}{'A' if self.direction is Direction.ACROSS else 'D'}"

    def offset_of(self, row: int, col: int) -> Optional[int]:
        """Position of (row, col) inside this clue's span, or None if not covered"""
        if self.direction is Direction.ACROSS:
            if row != self.start_row:
                return None
            offset = col - self.start_col
        else:
            if col != self.start_col:
                return None
            offset = row - self.start_row
        if 0 <= offset < self.length:
            return offset
        return None

    def covers(self, row: int, col: int) -> bool:
        return self.offset_of(row, col) is not None

    def accepted_letters(self, offset: int) -> List[str]:
        """Letters accepted at offset, primary solution first"""
        letters: List[str] = []
        for solution in self.solutions:
            if offset < len(solution) and solution[offset] not in letters:
                letters.append(solution[offset])
        return letters


@dataclass(frozen=True)
class Cell:
    """Represents a single cell in the crossword grid"""

    row: int
    col: int
    value: str = ""
    expected_answer: str = ""
    is_blocked: bool = True
    clue_number: Optional[int] = None

    @property
    def id(self) -> CellId:
        return (self.row, self.col)

    def is_empty(self) -> bool:
        return self.value == ""

    def with_value(self, value: str) -> "Cell":
        return replace(self, value=value.upper())


@dataclass(frozen=True)
class Grid:
    """Row-major collection of every cell in the puzzle's bounding box"""

    width: int
    height: int
    cells: Tuple[Cell, ...] = field(default_factory=tuple)

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def cell(self, row: int, col: int) -> Optional[Cell]:
        if not self.contains(row, col):
            return None
        return self.cells[row * self.width + col]

    def get(self, cell_id: Optional[CellId]) -> Optional[Cell]:
        if cell_id is None:
            return None
        return self.cell(*cell_id)

    def is_active(self, row: int, col: int) -> bool:
        cell = self.cell(row, col)
        return cell is not None and not cell.is_blocked

    def active_cells(self) -> Iterator[Cell]:
        return (cell for cell in self.cells if not cell.is_blocked)

    def rows(self) -> List[Tuple[Cell, ...]]:
        return [self.cells[r * self.width:(r + 1) * self.width] for r in range(self.height)]

    def with_value(self, cell_id: CellId, value: str) -> "Grid":
        """Return a new grid where cell_id holds value; blocked cells never take one"""
        cell = self.get(cell_id)
        if cell is None or cell.is_blocked:
            return self
        index = cell.row * self.width + cell.col
        cells = self.cells[:index] + (cell.with_value(value),) + self.cells[index + 1:]
        return replace(self, cells=cells)

    def cleared(self) -> "Grid":
        return replace(self, cells=tuple(replace(cell, value="") for cell in self.cells))


@dataclass(frozen=True)
class Puzzle:
    """Crossword definition: bounding box plus the ordered clue list"""

    width: int
    height: int
    clues: Tuple[Clue, ...] = ()
    title: str = ""
    puzzle_id: str = ""

    @classmethod
    def square(cls, size: int, clues, title: str = "", puzzle_id: str = "") -> "Puzzle":
        return cls(width=size, height=size, clues=tuple(clues), title=title, puzzle_id=puzzle_id)

    @property
    def across_clues(self) -> List[Clue]:
        return [clue for clue in self.clues if clue.direction is Direction.ACROSS]

    @property
    def down_clues(self) -> List[Clue]:
        return [clue for clue in self.clues if clue.direction is Direction.DOWN]

    def get_clue(self, number: int, direction: Direction) -> Optional[Clue]:
        """Get clue by number and direction"""
        return next(
            (clue for clue in self.clues if clue.number == number and clue.direction is Direction(direction)),
            None,
        )

    def clues_covering(self, row: int, col: int) -> List[Clue]:
        """Every clue whose span includes (row, col), in puzzle order"""
        return [clue for clue in self.clues if clue.covers(row, col)]


@dataclass(frozen=True)
class Selection:
    """Currently selected cell and the clue the player is working on"""

    cell_id: Optional[CellId] = None
    clue: Optional[Clue] = None

    @property
    def direction(self) -> Optional[Direction]:
        return self.clue.direction if self.clue else None
