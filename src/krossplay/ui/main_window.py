import os

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QFont
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from ..engine.session import SessionController
from ..models.krossword import Clue, Puzzle
from ..services.file_loader import FileLoaderService
from ..services.registry import PuzzleRegistry
from ..services.settings import AppSettings
from ..utils.logger import get_logger
from .crossword_widget import KrossWordWidget

LOGGER = get_logger(__name__)


class MainWindow(QMainWindow):
    """Main application window"""

    def __init__(self, puzzle: Puzzle, registry: PuzzleRegistry, settings: AppSettings):
        super().__init__()
        self.registry = registry
        self.settings = settings
        self.file_loader_service = FileLoaderService()
        self.session = SessionController(puzzle, self)
        self.elapsed_seconds = 0
        self.puzzle_timer = QTimer(self)
        self.puzzle_timer.setInterval(1000)
        self.puzzle_timer.timeout.connect(self._update_timer_display)
        self.init_ui()

        self.session.selection_changed.connect(self.on_cell_selected)
        self.session.puzzle_completed.connect(self.display_message)
        self.session.answers_checked.connect(self.on_answers_checked)
        self.start_puzzle()

    def create_menu_bar(self):
        """Create the application menu bar"""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")
        load_action = QAction("Load Puzzle", self)
        load_action.setShortcut("Ctrl+O")
        load_action.triggered.connect(self.load_puzzle)
        file_menu.addAction(load_action)
        file_menu.addSeparator()
        exit_action = QAction("Exit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        puzzles_menu = menubar.addMenu("Puzzles")
        for puzzle_id in self.registry.ids():
            action = QAction(self.registry.get(puzzle_id).title or puzzle_id, self)
            action.triggered.connect(lambda _checked=False, pid=puzzle_id: self.open_registered(pid))
            puzzles_menu.addAction(action)

        game_menu = menubar.addMenu("Game")
        check_action = QAction("Check Grid", self)
        check_action.setShortcut("Ctrl+K")
        check_action.triggered.connect(self.check_grid)
        game_menu.addAction(check_action)
        restart_action = QAction("Restart", self)
        restart_action.setShortcut("Ctrl+R")
        restart_action.triggered.connect(self.start_puzzle)
        game_menu.addAction(restart_action)

    def init_ui(self):
        """Initialize the user interface"""
        self.create_menu_bar()

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QHBoxLayout(central_widget)

        left_layout = QVBoxLayout()
        self.timer_label = QLabel("00:00")
        self.timer_label.setFont(QFont("Arial", 12, QFont.Bold))
        self.timer_label.setAlignment(Qt.AlignCenter)
        left_layout.addWidget(self.timer_label)

        self.current_clue_label = QLabel("Select a cell to see clue")
        self.current_clue_label.setFont(QFont("Arial", 12))
        self.current_clue_label.setWordWrap(True)
        self.current_clue_label.setStyleSheet("background-color: #47c8ff; padding: 8px;")
        left_layout.addWidget(self.current_clue_label)

        self.crossword_widget = KrossWordWidget(self.session)
        left_layout.addWidget(self.crossword_widget, 1)
        layout.addLayout(left_layout, 2)

        right_layout = QVBoxLayout()
        self.title_label = QLabel()
        self.title_label.setFont(QFont("Arial", 16, QFont.Bold))
        right_layout.addWidget(self.title_label)
        self.across_list = self._clue_list(right_layout, "Across")
        self.down_list = self._clue_list(right_layout, "Down")
        layout.addLayout(right_layout, 1)

    def _clue_list(self, layout: QVBoxLayout, heading: str) -> QListWidget:
        label = QLabel(heading)
        label.setFont(QFont("Arial", 12, QFont.Bold))
        layout.addWidget(label)
        clue_list = QListWidget()
        clue_list.itemClicked.connect(self.on_clue_selected)
        layout.addWidget(clue_list)
        return clue_list

    # ------------------------------------------------------------------
    # Puzzle lifecycle
    # ------------------------------------------------------------------
    def start_puzzle(self):
        self.session.start()
        self._show_puzzle()

    def _show_puzzle(self):
        puzzle = self.session.puzzle
        self.setWindowTitle(f"KrossPlay - {puzzle.title or puzzle.puzzle_id}")
        self.title_label.setText(puzzle.title or puzzle.puzzle_id)
        self._fill_clue_list(self.across_list, puzzle.across_clues)
        self._fill_clue_list(self.down_list, puzzle.down_clues)
        self.crossword_widget.refresh()
        self.crossword_widget.setFocus()
        self.start_puzzle_timer()

    def open_registered(self, puzzle_id: str):
        self.session.load_puzzle(self.registry.get(puzzle_id))
        self.settings.last_puzzle_id = puzzle_id
        self._show_puzzle()

    def load_puzzle(self):
        """Load a puzzle using a file dialog"""
        file_path, _ = QFileDialog.getOpenFileName(
            self, caption="Load Puzzle", filter="Puzzle Files (*.json);;All Files (*)",
            dir=self.settings.puzzles_dir,
        )
        if file_path:
            self.load_puzzle_from_path(file_path)

    def load_puzzle_from_path(self, file_path: str) -> bool:
        """Load a puzzle from an explicit filesystem path"""
        normalized_path = os.path.abspath(os.path.expanduser(file_path))
        try:
            puzzle = self.file_loader_service.load_puzzle_file(normalized_path)
        except (OSError, ValueError) as e:
            LOGGER.warning("Failed to load puzzle from %s: %s", normalized_path, e)
            QMessageBox.warning(self, "Error", f"Failed to load puzzle:\n{e}")
            return False
        self.session.load_puzzle(puzzle)
        self._show_puzzle()
        return True

    # ------------------------------------------------------------------
    # Session feedback
    # ------------------------------------------------------------------
    def on_cell_selected(self, row: int, col: int):
        clue = self.session.state.selection.clue
        if clue is None:
            return
        self.current_clue_label.setText(f"<b>{clue.label}</b>&nbsp;&nbsp;{clue.text}")

    def on_clue_selected(self, item: QListWidgetItem):
        clue: Clue = item.data(Qt.UserRole)
        self.session.select_cell((clue.start_row, clue.start_col))
        if self.session.state.selection.direction is not clue.direction:
            self.session.toggle_direction()
        self.crossword_widget.setFocus(Qt.MouseFocusReason)

    def check_grid(self):
        self.session.check_answers(show_errors=self.settings.show_errors_on_check)

    def on_answers_checked(self, complete: bool):
        self.crossword_widget.update()
        if not complete:
            self.statusBar().showMessage("Some answers are still missing or wrong", 3000)

    def display_message(self):
        self.stop_puzzle_timer()
        minutes, seconds = divmod(self.elapsed_seconds, 60)
        QMessageBox.information(self, "Solved!", f"You solved the puzzle in {minutes:02d}:{seconds:02d}.")

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------
    def start_puzzle_timer(self):
        """Start or restart the elapsed time display."""
        self.puzzle_timer.stop()
        self.elapsed_seconds = 0
        self.timer_label.setText("00:00")
        self.puzzle_timer.start()

    def stop_puzzle_timer(self):
        self.puzzle_timer.stop()

    def _update_timer_display(self):
        """Advance the timer label each second while active."""
        self.elapsed_seconds += 1
        minutes, seconds = divmod(self.elapsed_seconds, 60)
        self.timer_label.setText(f"{minutes:02d}:{seconds:02d}")

    @staticmethod
    def _fill_clue_list(clue_list: QListWidget, clues) -> None:
        clue_list.clear()
        for clue in sorted(clues, key=lambda c: c.number):
            item = QListWidgetItem(f"{clue.number}. {clue.text or '?'} ({clue.length})")
            item.setData(Qt.UserRole, clue)
            clue_list.addItem(item)
