"""
Flock Controller - Frame clock driving the flock simulation

Connects:
- Flock (simulation)
- SimulationConfig (run settings)
- Renderer (via signals)

Runs simulation at SIM_HZ via QTimer. Each timer tick runs one
Flock.tick() to completion on the GUI thread, then emits the snapshot.
"""

from typing import Optional
from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from flock_sim.config import SIM_HZ, STATS_LOG_INTERVAL
from flock_sim.utils.logger import logger

from .flock import Flock
from .flock_state import FlockError, SimulationConfig
from .flock_stats import compute_stats


class FlockController(QObject):
    """
    Controller for the flock simulation.

    Manages simulation lifecycle and exposes snapshots to the renderer.
    """

    # Signals for UI
    snapshot_updated = pyqtSignal(list)          # List of AgentMark
    population_reset = pyqtSignal(int)           # seed used
    field_resized = pyqtSignal(float, float)     # width, height
    running_changed = pyqtSignal(bool)

    def __init__(self, config: Optional[SimulationConfig] = None, parent=None):
        super().__init__(parent)

        self._flock = Flock(config)

        # Simulation timer (~16ms = 60Hz)
        self._timer = QTimer(self)
        self._timer.setInterval(1000 // SIM_HZ)
        self._timer.timeout.connect(self._tick)

    @property
    def flock(self) -> Flock:
        """Access to flock for tests and diagnostics."""
        return self._flock

    @property
    def running(self) -> bool:
        return self._timer.isActive()

    # === Configuration ===

    def configure(self, config: SimulationConfig) -> None:
        """Apply new settings; population size changes need a reset()."""
        self._flock.configure(config)
        logger.info(f"Configured: {config.population_count} agents, "
                    f"{config.update_mode} updates", component="FLOCK")

    def resize(self, width: float, height: float) -> None:
        """Field follows the render surface; effective on the next tick."""
        if width <= 0 or height <= 0:
            logger.debug(f"Ignoring empty field size {width}x{height}", component="FLOCK")
            return
        self._flock.resize(width, height)
        self.field_resized.emit(float(width), float(height))

    # === Lifecycle ===

    def reset(self, seed: Optional[int] = None) -> int:
        """Regenerate the population. Keeps running if already running."""
        seed = self._flock.reset(seed=seed)
        logger.info(f"Population reset ({len(self._flock)} agents)",
                    component="FLOCK", details=f"seed={seed}")
        self.population_reset.emit(seed)
        self.snapshot_updated.emit(self._flock.snapshot())
        return seed

    def start(self) -> None:
        """Start the frame clock, populating first if needed."""
        if self.running:
            return
        if not self._flock.populated:
            self.reset()
        self._timer.start()
        logger.info("Simulation started", component="FLOCK")
        self.running_changed.emit(True)

    def stop(self) -> None:
        """Stop the frame clock. Agents keep their state."""
        if not self.running:
            return
        self._timer.stop()
        logger.info(f"Simulation stopped after {self._flock.tick_count} ticks",
                    component="FLOCK")
        self.running_changed.emit(False)

    def toggle(self) -> None:
        """Toggle running state."""
        if self.running:
            self.stop()
        else:
            self.start()

    def _tick(self) -> None:
        """Simulation tick (called at SIM_HZ)."""
        try:
            self._flock.tick()
        except FlockError as e:
            logger.error("Tick failed, stopping", component="FLOCK", details=str(e))
            self.stop()
            return

        tick_count = self._flock.tick_count
        if tick_count % STATS_LOG_INTERVAL == 0:
            stats = compute_stats(self._flock.agents, self._flock.config)
            logger.flock(f"Tick {tick_count}: {stats.summary()}")

        self.snapshot_updated.emit(self._flock.snapshot())
