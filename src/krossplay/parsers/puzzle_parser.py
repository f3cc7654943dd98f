import json
from typing import Any, Dict, List

from ..models.exceptions import ClueDefinitionError, PuzzleFormatError
from ..models.krossword import Clue, Direction, Puzzle


def _is_int(value: Any) -> bool:
    # JSON true/false decode to bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


class PuzzleParser:
    """Parser for JSON puzzle definitions"""

    def parse(self, file_path: str, puzzle_id: str = "") -> Puzzle:
        """Parse a puzzle definition file and return a Puzzle object"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise PuzzleFormatError(f"Error reading puzzle file {file_path}: {e}") from e

        return self.parse_data(data, puzzle_id=puzzle_id)

    def parse_data(self, data: Dict[str, Any], puzzle_id: str = "") -> Puzzle:
        """Build a Puzzle from an already decoded definition"""
        if not isinstance(data, dict):
            raise PuzzleFormatError("Puzzle definition must be a JSON object")

        width, height = self._parse_dimensions(data)

        clues_data = data.get('clues')
        if not isinstance(clues_data, list) or not clues_data:
            raise PuzzleFormatError("Puzzle definition needs a non-empty 'clues' list")

        clues = [self._parse_clue(index, clue_data) for index, clue_data in enumerate(clues_data)]

        return Puzzle(
            width=width,
            height=height,
            clues=tuple(clues),
            title=str(data.get('title', '')),
            puzzle_id=str(data.get('id', '') or puzzle_id),
        )

    def _parse_dimensions(self, data: Dict[str, Any]):
        # "size" for square grids, "cols"/"rows" otherwise
        if 'size' in data:
            width = height = data['size']
        else:
            width = data.get('cols')
            height = data.get('rows')

        if not _is_int(width) or not _is_int(height):
            raise PuzzleFormatError("Puzzle definition needs an integer 'size' or 'cols' and 'rows'")
        if width <= 0 or height <= 0:
            raise PuzzleFormatError(f"Invalid grid dimensions {width}x{height}")
        return width, height

    def _parse_clue(self, index: int, clue_data: Any) -> Clue:
        if not isinstance(clue_data, dict):
            raise ClueDefinitionError(f"Clue #{index} must be an object")

        for key in ('number', 'startRow', 'startCol', 'length'):
            if not _is_int(clue_data.get(key)):
                raise ClueDefinitionError(f"Clue #{index} is missing integer '{key}'")

        try:
            direction = Direction(str(clue_data.get('direction', '')).lower())
        except ValueError as e:
            raise ClueDefinitionError(
                f"Clue #{index} has invalid direction {clue_data.get('direction')!r}"
            ) from e

        solution = clue_data.get('solution')
        if not isinstance(solution, str) or not solution:
            raise ClueDefinitionError(f"Clue #{index} is missing its 'solution'")

        alternates: List[str] = clue_data.get('alternateSolutions') or []
        if not isinstance(alternates, list) or not all(isinstance(alt, str) for alt in alternates):
            raise ClueDefinitionError(f"Clue #{index}: 'alternateSolutions' must be a list of strings")

        return Clue(
            number=clue_data['number'],
            direction=direction,
            start_row=clue_data['startRow'],
            start_col=clue_data['startCol'],
            length=clue_data['length'],
            solution=solution,
            alternate_solutions=tuple(alternates),
            text=str(clue_data.get('text', '')),
        )
