"""Run a live draw in the terminal.

Each candidate is revealed level, then room, then number and name. Answer
``y`` to confirm the winner, ``n`` to skip, ``r`` to reload the batch and
``q`` to quit.
"""

from __future__ import annotations

import argparse
import logging

from luckydraw.config import DEFAULT_CANDIDATE_COUNT
from luckydraw.db.engine import get_sessionmaker, make_engine
from luckydraw.prize_draw.session import DrawSession
from luckydraw.workflows import (
    get_remaining_count,
    get_total_student_count,
    get_winner_count,
    reset_all_winners,
)


def _print_stats(session) -> None:
    print(
        f"[ TOTAL: {get_total_student_count(session)} ]"
        f" [ WINNERS: {get_winner_count(session)} ]"
        f" [ REMAINING: {get_remaining_count(session)} ]"
    )


def _reveal(student) -> None:
    input(f"  level : {student.level}   (enter)")
    input(f"  room  : {student.room}   (enter)")
    print(f"  no.   : {student.number}")
    print(f"  name  : {student.name}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Interactive fair lucky draw")
    parser.add_argument("--level", help="Only draw from this level")
    parser.add_argument(
        "--count",
        type=int,
        default=DEFAULT_CANDIDATE_COUNT,
        help="Candidates per batch",
    )
    parser.add_argument(
        "--reset", action="store_true", help="Clear all winners before drawing"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    Session = get_sessionmaker(make_engine())
    with Session() as session:
        if args.reset:
            cleared = reset_all_winners(session)
            session.commit()
            print(f"Reset {cleared} winner(s).")

        _print_stats(session)
        draw = DrawSession(session, count=args.count, level=args.level)
        while draw.current is not None:
            student = draw.current
            print(f"\n--- candidate ({draw.remaining} more in batch) ---")
            _reveal(student)
            answer = input("Confirm winner? [y/n/r/q] ").strip().lower()
            if answer == "y":
                draw.confirm()
                session.commit()
                print(f"*** {student.name} wins! ***")
                _print_stats(session)
            elif answer == "n":
                draw.skip()
            elif answer == "r":
                draw.reload()
            elif answer == "q":
                break
        else:
            print("No eligible students left.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
