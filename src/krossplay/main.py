#!/usr/bin/env python3
"""KrossPlay application entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from PySide6.QtWidgets import QApplication

from .models.krossword import Puzzle
from .services.file_loader import FileLoaderService
from .services.registry import PuzzleRegistry, default_registry
from .services.settings import AppSettings
from .ui.main_window import MainWindow
from .utils.logger import configure_logging, get_logger

LOGGER = get_logger(__name__)


def _parse_command_line(argv: List[str]) -> Tuple[argparse.Namespace, List[str]]:
    """Return (args, argv_for_qt)."""

    parser = argparse.ArgumentParser(prog="krossplay", allow_abbrev=False)
    parser.add_argument("puzzle_file", nargs="?", help="Path to a .json puzzle definition to open")
    parser.add_argument("--puzzle", dest="puzzle_id", help="Id of a registered puzzle to open")
    parser.add_argument("--puzzles-dir", help="Extra directory of .json puzzles to register")
    parser.add_argument("--list", action="store_true", help="List registered puzzle ids and exit")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args, qt_args = parser.parse_known_args(argv[1:])
    qt_argv = [argv[0], *qt_args]
    return args, qt_argv


def choose_puzzle(args: argparse.Namespace, registry: PuzzleRegistry, settings: AppSettings) -> Optional[Puzzle]:
    """Resolve which puzzle to open: explicit file, then --puzzle, then the last one played"""
    if args.puzzle_file:
        return FileLoaderService().load_puzzle_file(args.puzzle_file)
    if args.puzzle_id:
        return registry.get(args.puzzle_id)
    if settings.last_puzzle_id in registry:
        return registry.get(settings.last_puzzle_id)
    return registry.first()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args, qt_argv = _parse_command_line(sys.argv if argv is None else argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    settings = AppSettings()
    try:
        registry = default_registry(args.puzzles_dir or settings.puzzles_dir or None)
    except ValueError as e:
        LOGGER.error("Could not load puzzles: %s", e)
        return 1

    if args.list:
        for puzzle_id in registry.ids():
            puzzle = registry.get(puzzle_id)
            print(f"{puzzle_id}\t{puzzle.width}x{puzzle.height}\t{puzzle.title}")
        return 0

    try:
        puzzle = choose_puzzle(args, registry, settings)
    except (OSError, ValueError) as e:
        LOGGER.error("Could not open puzzle: %s", e)
        return 1
    if puzzle is None:
        LOGGER.error("No puzzles available")
        return 1

    app = QApplication(qt_argv)
    app.setApplicationName("KrossPlay")
    app.setOrganizationName("KrossPlay")

    window = MainWindow(puzzle, registry, settings)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
