"""
Main Frame - Flock view with a restart control
"""

from PyQt5.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QKeySequence

from flock_sim.boids import FlockController
from flock_sim.config import WINDOW_TITLE, FIELD_WIDTH, FIELD_HEIGHT
from flock_sim.gui.flock_view import FlockView
from flock_sim.utils.logger import logger


class MainFrame(QMainWindow):
    """Main application window."""

    def __init__(self, controller: FlockController):
        super().__init__()

        self.setWindowTitle(WINDOW_TITLE)
        self.resize(int(FIELD_WIDTH), int(FIELD_HEIGHT) + 40)

        self.controller = controller

        self.setup_ui()

        logger.signal_emitter.log_message.connect(self._on_log_message)

    def setup_ui(self):
        """Create the main interface layout."""
        central = QWidget()
        self.setCentralWidget(central)

        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 4)
        layout.setSpacing(4)

        self.view = FlockView()
        self.view.set_controller(self.controller)
        layout.addWidget(self.view, stretch=1)

        buttons = QHBoxLayout()
        buttons.addStretch()

        self.restart_btn = QPushButton("Restart")
        self.restart_btn.setShortcut(QKeySequence("R"))
        self.restart_btn.setToolTip("Regenerate every agent (R)")
        self.restart_btn.clicked.connect(self.on_restart)
        buttons.addWidget(self.restart_btn)

        self.pause_btn = QPushButton("Pause")
        self.pause_btn.setShortcut(QKeySequence(Qt.Key_Space))
        self.pause_btn.clicked.connect(self.controller.toggle)
        self.controller.running_changed.connect(self._on_running_changed)
        buttons.addWidget(self.pause_btn)

        buttons.addStretch()
        layout.addLayout(buttons)

    def on_restart(self):
        self.controller.reset()

    def _on_running_changed(self, running: bool):
        self.pause_btn.setText("Pause" if running else "Resume")

    def _on_log_message(self, message: str, level: int, timestamp: str):
        self.statusBar().showMessage(f"{timestamp}  {message}", 5000)

    def closeEvent(self, event):
        self.controller.stop()
        super().closeEvent(event)
