"""
Main entry point for Flock Sim.
Parses run settings and launches the main frame.
"""

import argparse
import sys
from dataclasses import replace

from PyQt5.QtWidgets import QApplication

from flock_sim.boids import ConfigError, SimulationConfig, load_config
from flock_sim.config import UPDATE_MODE_SNAPSHOT
from flock_sim.utils.logger import logger, LogLevel


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flock-sim", description="2D flocking simulation")
    parser.add_argument("--config", metavar="PATH", help="JSON file with simulation settings")
    parser.add_argument("--count", type=int, help="number of agents")
    parser.add_argument("--seed", type=int, help="seed for reproducible populations")
    parser.add_argument("--snapshot", action="store_true",
                        help="update every agent against the previous tick's state")
    parser.add_argument("--exclude-self", action="store_true",
                        help="leave each agent out of its own cohesion/alignment averages")
    parser.add_argument("--log-level", default="INFO",
                        choices=[level.name for level in LogLevel])
    parser.add_argument("--log-file", metavar="PATH", help="also log to this file")
    return parser


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Defaults, then --config file, then flags. Raises ConfigError."""
    config = load_config(args.config) if args.config else SimulationConfig()

    overrides = {}
    if args.count is not None:
        overrides["population_count"] = args.count
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.snapshot:
        overrides["update_mode"] = UPDATE_MODE_SNAPSHOT
    if args.exclude_self:
        overrides["include_self"] = False

    return replace(config, **overrides).validate()


def main(argv=None):
    args = build_parser().parse_args(argv)

    logger.set_level(LogLevel[args.log_level])
    if args.log_file:
        logger.enable_file_logging(args.log_file)

    try:
        config = build_config(args)
    except ConfigError as e:
        logger.error("Invalid configuration", component="APP", details=str(e))
        return 2

    logger.info("Flock Sim starting", component="APP",
                details=f"{config.population_count} agents, {config.update_mode} updates")

    app = QApplication(sys.argv[:1])

    from flock_sim.boids import FlockController
    from flock_sim.gui.main_frame import MainFrame

    controller = FlockController(config)
    window = MainFrame(controller)
    window.show()
    controller.start()

    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
