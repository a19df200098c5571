"""Replace the roster with the contents of a CSV file.

Expected columns: ``level,room,number,name`` (UTF-8). The previous roster,
winners included, is deleted.
"""

from __future__ import annotations

import argparse
import logging
import sys

from luckydraw.db.engine import get_sessionmaker, make_engine
from luckydraw.roster import RosterFormatError, load_roster_file
from luckydraw.workflows import (
    get_total_student_count,
    get_winner_count,
    replace_roster,
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replace the draw roster from a CSV file")
    parser.add_argument("csv_path", help="Path to a level,room,number,name CSV file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        rows = load_roster_file(args.csv_path)
    except (OSError, RosterFormatError) as exc:
        print(f"Could not read roster: {exc}", file=sys.stderr)
        return 2
    if not rows:
        print("No valid rows found in the CSV; roster left unchanged.", file=sys.stderr)
        return 1

    Session = get_sessionmaker(make_engine())
    with Session.begin() as session:
        inserted = replace_roster(session, rows)

    with Session() as session:
        total = get_total_student_count(session)
        winners = get_winner_count(session)
    print(f"Imported {inserted} students (total={total}, winners={winners}).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
