"""Application entry point and setup for the Astral Queens altar core."""

import logging
import sys
from typing import Optional

from PySide6.QtCore import QCoreApplication

from astralqueens.core.config import GameSettings, load_settings
from astralqueens.core.game import AltarGame
from astralqueens.core.grid import Environment, PuzzleGrid


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_game(
    grid: PuzzleGrid,
    environment: Optional[Environment] = None,
    settings: Optional[GameSettings] = None,
) -> AltarGame:
    """Create the game and register the configured altars."""
    game = AltarGame(grid, settings=settings or load_settings(), environment=environment)
    game.setup_altars()
    solved = game.progress.solved_count
    if solved:
        logging.info(f"Resuming with {solved} solved levels")
    return game


def run(grid: PuzzleGrid, environment: Optional[Environment] = None) -> None:
    """Start the catalog load and tick loop, then hand control to the Qt event loop."""
    configure_logging()
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    app.setApplicationName("Astral Queens")

    game = build_game(grid, environment)
    game.events.game_completed.connect(
        lambda moves: logging.info(f"All puzzles solved with a total of {moves} moves")
    )
    app.aboutToQuit.connect(game.stop)
    game.start()

    sys.exit(app.exec())
