from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import QWidget

from ..engine.session import SessionController, SessionSnapshot
from ..models.krossword import Cell
from ..utils.logger import get_logger
from .keys import key_name

LOGGER = get_logger(__name__)


class KrossWordWidget(QWidget):
    """Paints a session snapshot and forwards keyboard and mouse input to it."""

    def __init__(self, session: SessionController, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.session = session
        self.cell_size = 40
        self.font_size = 16
        self.setMinimumSize(200, 200)
        self.setFocusPolicy(Qt.StrongFocus)
        self.session.selection_changed.connect(lambda _row, _col: self.update())
        self.session.value_changed.connect(self.update)

    def refresh(self) -> None:
        """Re-layout after the session switched puzzles"""
        self._recompute_cell_metrics()
        self.update()

    def focusNextPrevChild(self, next: bool) -> bool:
        return False  # stop Qt from moving focus on Tab/Shift+Tab

    # ------------------------------------------------------------------
    # Qt event handlers
    # ------------------------------------------------------------------
    def resizeEvent(self, event):  # noqa: N802
        super().resizeEvent(event)
        self._recompute_cell_metrics()
        self.update()

    def paintEvent(self, event):  # noqa: N802 (Qt override)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        snapshot = self.session.snapshot()
        word = set(snapshot.selection.clue.cells) if snapshot.selection.clue else set()
        for cell in snapshot.cells:
            self._draw_cell(painter, cell, snapshot, cell.id in word)
        self._draw_grid(painter)
        painter.end()

    def mousePressEvent(self, event):  # noqa: N802
        if event.button() == Qt.MouseButton.RightButton:
            return
        col = int(event.position().x() // self.cell_size)
        row = int(event.position().y() // self.cell_size)
        if (row, col) == self.session.state.selection.cell_id:
            self.session.toggle_direction()
        else:
            self.session.select_cell((row, col))
        self.setFocus()

    def keyPressEvent(self, event):  # noqa: N802
        shift = bool(event.modifiers() & Qt.ShiftModifier)
        name = key_name(event.key(), event.text(), shift)
        if name is None:
            super().keyPressEvent(event)
            return
        self.session.handle_key(name)

    def event(self, event):  # noqa: N802
        # Tab never reaches keyPressEvent otherwise
        if event.type() == event.Type.KeyPress and event.key() in (Qt.Key_Tab, Qt.Key_Backtab):
            self.keyPressEvent(event)
            return True
        return super().event(event)

    # ------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------
    def _recompute_cell_metrics(self) -> None:
        """Update cell size based on the current widget dimensions."""
        grid = self.session.state.grid
        rect = self.contentsRect()
        if rect.width() <= 0 or rect.height() <= 0:
            return
        self.cell_size = max(1, min(rect.width() // grid.width, rect.height() // grid.height))
        self.font_size = max(6, int(self.cell_size * 0.55))

    def _draw_grid(self, painter: QPainter) -> None:
        grid = self.session.state.grid
        painter.setPen(QPen(Qt.gray, 2))
        for row in range(grid.height + 1):
            y = row * self.cell_size
            painter.drawLine(0, y, grid.width * self.cell_size, y)
        for col in range(grid.width + 1):
            x = col * self.cell_size
            painter.drawLine(x, 0, x, grid.height * self.cell_size)

    def _draw_cell(self, painter: QPainter, cell: Cell, snapshot: SessionSnapshot, in_word: bool) -> None:
        x = cell.col * self.cell_size
        y = cell.row * self.cell_size

        if cell.is_blocked:
            painter.fillRect(x, y, self.cell_size, self.cell_size, QBrush(Qt.black))
            return

        if cell.id == snapshot.selection.cell_id:
            background = QColor(255, 255, 150)
        elif cell.id in snapshot.correct:
            background = QColor(170, 225, 170)
        elif in_word:
            background = QColor(150, 200, 255)
        else:
            background = QColor(Qt.white)
        painter.fillRect(x, y, self.cell_size, self.cell_size, QBrush(background))

        if cell.value:
            painter.save()
            painter.setFont(QFont("Arial", self.font_size, QFont.Normal))
            painter.setPen(QPen(Qt.black))
            painter.drawText(QRectF(x, y, self.cell_size, self.cell_size), Qt.AlignCenter, cell.value)
            painter.restore()

        if cell.id in snapshot.errors:
            painter.save()
            painter.setPen(QPen(Qt.red, 3))
            painter.drawLine(QPointF(x + 2, y + 2), QPointF(x + self.cell_size - 2, y + self.cell_size - 2))
            painter.restore()

        if cell.clue_number:
            painter.save()
            painter.setPen(QPen(Qt.black))
            small_font = QFont("Arial")
            small_font.setPointSizeF(max(5.0, self.cell_size * 0.25))
            painter.setFont(small_font)
            padding = self.cell_size * 0.1
            painter.drawText(
                QRectF(x + padding, y + padding, self.cell_size / 2, self.cell_size / 2),
                Qt.AlignLeft | Qt.AlignTop,
                str(cell.clue_number),
            )
            painter.restore()
