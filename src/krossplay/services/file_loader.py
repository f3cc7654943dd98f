import os
from typing import List, Tuple

from ..engine.grid_builder import build_grid
from ..models.exceptions import PuzzleFormatError
from ..models.krossword import Puzzle
from ..parsers.puzzle_parser import PuzzleParser
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class FileLoaderService:
    """Service for loading crossword puzzle files"""

    def __init__(self):
        self.parser = PuzzleParser()

    def load_puzzle_file(self, file_path: str) -> Puzzle:
        """Load and validate a puzzle from a .json definition"""
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")

        if not file_path.lower().endswith('.json'):
            raise ValueError("File must have .json extension")

        puzzle_id = os.path.splitext(os.path.basename(file_path))[0]
        puzzle = self.parser.parse(file_path, puzzle_id=puzzle_id)
        # fail at load time rather than when the session starts
        build_grid(puzzle)
        return puzzle

    def load_from_directory(self, directory: str) -> List[Tuple[str, Puzzle]]:
        """Load all .json puzzles from a directory, sorted by filename"""
        if not os.path.isdir(directory):
            raise ValueError(f"Directory not found: {directory}")

        puzzles = []
        for filename in sorted(os.listdir(directory)):
            if not filename.lower().endswith('.json'):
                continue
            file_path = os.path.join(directory, filename)
            try:
                puzzles.append((filename, self.load_puzzle_file(file_path)))
            except PuzzleFormatError as e:
                LOGGER.warning("Skipping %s: %s", filename, e)

        return puzzles
