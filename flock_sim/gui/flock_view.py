"""
Flock View
Draws each agent as a small colored triangle pointing along its heading.

Presentation only: the view reads AgentMark snapshots from the
controller and reports its own size back as the field size.
"""

import time
from collections import deque
from typing import List, Optional

from PyQt5.QtWidgets import QWidget, QSizePolicy
from PyQt5.QtCore import Qt, QPointF
from PyQt5.QtGui import QPainter, QColor, QBrush, QPainterPath, QFont

from flock_sim.boids.agent import AgentMark
from flock_sim.config import (
    MARK_WIDTH, MARK_HEIGHT, BACKGROUND_COLOR, OVERLAY_TEXT_COLOR,
)


def mark_color(color_seed: int) -> QColor:
    """Stable fill color for an agent identity."""
    return QColor(color_seed & 0xFF, (color_seed >> 8) & 0xFF, (color_seed >> 16) & 0xFF)


class FlockView(QWidget):
    """
    Canvas for the flock. Field coordinates map 1:1 to widget pixels.
    """

    FPS_WINDOW = 30

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumSize(200, 150)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        self._marks: List[AgentMark] = []
        self._frame_times = deque(maxlen=self.FPS_WINDOW)
        self._show_overlay = True
        self._controller = None

        self._bg_color = QColor(BACKGROUND_COLOR)
        self._text_color = QColor(OVERLAY_TEXT_COLOR)

        # Triangle with its base on the origin, tip along +y
        self._mark_path = QPainterPath()
        self._mark_path.moveTo(0, 0)
        self._mark_path.lineTo(MARK_WIDTH, 0)
        self._mark_path.lineTo(MARK_WIDTH / 2, MARK_HEIGHT)
        self._mark_path.closeSubpath()

    def set_controller(self, controller) -> None:
        """Connect to a FlockController and size its field to this widget."""
        self._controller = controller
        if controller:
            controller.snapshot_updated.connect(self.set_marks)
            controller.resize(self.width(), self.height())

    def set_marks(self, marks: list) -> None:
        """Handle a new snapshot from the controller."""
        self._marks = marks
        self._frame_times.append(time.perf_counter())
        self.update()

    def set_overlay_visible(self, visible: bool) -> None:
        self._show_overlay = visible
        self.update()

    @property
    def fps(self) -> float:
        if len(self._frame_times) < 2:
            return 0.0
        span = self._frame_times[-1] - self._frame_times[0]
        return (len(self._frame_times) - 1) / span if span > 0 else 0.0

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), self._bg_color)

        painter.setPen(Qt.NoPen)
        for mark in self._marks:
            painter.save()
            painter.translate(QPointF(mark.x, mark.y))
            painter.rotate(mark.heading * 57.29577951308232)
            painter.setBrush(QBrush(mark_color(mark.color_seed)))
            painter.drawPath(self._mark_path)
            painter.restore()

        if self._show_overlay:
            painter.setPen(self._text_color)
            painter.setFont(QFont('Menlo', 9))
            painter.drawText(8, 16, f"{len(self._marks)} agents  {self.fps:.0f} fps")

    def resizeEvent(self, event):
        """Field follows the widget size."""
        super().resizeEvent(event)
        if self._controller:
            size = event.size()
            self._controller.resize(size.width(), size.height())
