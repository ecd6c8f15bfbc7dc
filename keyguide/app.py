"""Application entry point for the keyguide ghost-typing demo."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QCoreApplication

from keyguide.core.drills import DrillRepository
from keyguide.core.ghost import GhostTypist
from keyguide.core.scheduler import QtScheduler
from keyguide.core.session import PracticeSession
from keyguide.core.settings import load_settings


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keyguide",
        description="Watch a drill being typed with next-key and zone highlighting.",
    )
    parser.add_argument("-d", "--drill", default="drill0", help="Drill key to play (default: drill0)")
    parser.add_argument("-s", "--speed", type=float, default=None,
                        help="Characters per second (default: from settings)")
    parser.add_argument("--settings", type=Path, default=None, help="Settings YAML file")
    parser.add_argument("-l", "--list", action="store_true", help="List available drills and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log engine transitions")
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Play a drill with the ghost typist on a Qt event loop."""
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    settings = load_settings(args.settings)
    drills = DrillRepository()

    if args.list:
        for drill in drills.all():
            print(f"{drill.key}\t{drill.kind}\t{drill.name}")
        return 0

    try:
        drill = drills.get(args.drill)
    except KeyError:
        logging.error("Unknown drill: %s", args.drill)
        return 1

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName("keyguide")
    scheduler = QtScheduler()
    session = PracticeSession.from_drill(drill, scheduler, settings=settings)

    def _on_step(key: str) -> None:
        state = session.highlight_state
        zone = session.active_zone.value if session.active_zone else "-"
        logging.info("typed %r, next %r, zone %s", key, state.next_key, zone)

    def _on_complete() -> None:
        logging.info(
            "Drill '%s' done: accuracy %.1f%%, %.1f WPM",
            drill.name,
            session.aggregate_accuracy(),
            session.aggregate_wpm(),
        )
        session.close()
        app.quit()

    speed = args.speed if args.speed is not None else settings.ghost_speed
    try:
        ghost = GhostTypist(session, scheduler, speed=speed, on_step=_on_step, on_complete=_on_complete)
    except ValueError as e:
        logging.error("%s", e)
        return 1

    logging.info("Playing %s drill '%s' (%d steps) at %.1f chars/s", drill.kind, drill.name, session.total_tasks, speed)
    ghost.start()
    return app.exec()


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
