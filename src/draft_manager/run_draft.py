"""Open the draft as admin or as a read-only display.

Usage:
    python -m src.draft_manager.run_draft [roster_csv] [query]

Examples:
    python -m src.draft_manager.run_draft data/raw/players.csv
    python -m src.draft_manager.run_draft view=display

A display stays open and logs the board again after every admin change,
until interrupted.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import List, Optional

from src.draft_manager.draft_controller import DraftController
from src.draft_manager.draft_state import AppState
from src.draft_manager.state_persistence import FileSnapshotStore
from src.draft_manager.views import display_board, division_choices
from src.logging_config import setup_logging
from src.roster_intake.ingestion import RosterIngester

logger = logging.getLogger(__name__)


def log_board(state: AppState):
    board = display_board(state)
    if board is None:
        logger.info("Waiting for a draft to start (step=%s)", state.step)
        return

    logger.info(
        "%s DRAFT - Round %d, Pick %d - Now drafting: %s",
        board["division"],
        board["round"],
        board["pick"],
        board["now_drafting"] or "-",
    )
    for pick in board["recent_picks"]:
        logger.info(
            "  Rd %d Pick %d: %s -> %s", pick["round"], pick["pick"],
            pick["player"], pick["team"],
        )


def run(
    roster_csv: Optional[Path] = None,
    query: Optional[str] = None,
    storage_dir: Optional[Path] = None,
) -> DraftController:
    """Open a controller on the shared snapshot store.

    As admin, ``roster_csv`` (if given) is ingested and published. As a
    display, the current snapshot is loaded and the board is logged.
    """
    controller = DraftController.open(FileSnapshotStore(storage_dir), query)

    if controller.is_display:
        log_board(controller.state)
        return controller

    if roster_csv is not None:
        controller.load_roster(RosterIngester(roster_csv).read())

    for choice in division_choices(controller.state):
        logger.info(
            "  %s: %d players%s",
            choice["name"],
            choice["available_players"],
            "" if choice["selectable"] else " (no teams)",
        )
    return controller


def follow(controller: DraftController, stop: Optional[threading.Event] = None):
    """Keep a display open, logging the board on every snapshot it receives.

    Returns when ``stop`` is set or on Ctrl+C.
    """
    stop = stop or threading.Event()
    store = controller.channel.store
    unsubscribe = controller.channel.subscribe(log_board)
    store.start_watching()
    try:
        while not stop.wait(0.5):
            pass
    except KeyboardInterrupt:
        logger.info("Display closed")
    finally:
        unsubscribe()
        store.stop_watching()
        controller.close()


def main(argv: List[str]) -> int:
    roster_csv = None
    query = None
    for arg in argv:
        if "=" in arg:
            query = arg
        else:
            roster_csv = Path(arg)

    try:
        controller = run(roster_csv, query)
    except Exception:
        logger.exception("Draft failed to open")
        return 1

    if controller.is_display:
        follow(controller)
    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(main(sys.argv[1:]))
