"""Migrate the draw database and optionally load a roster in the same run."""

from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy import inspect

from luckydraw.db.engine import get_sessionmaker, make_engine
from luckydraw.db.migrations import describe_operations, schema_differences, upgrade
from luckydraw.roster import RosterFormatError, load_roster_file
from luckydraw.workflows import get_total_student_count, get_winner_count, replace_roster


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create or upgrade the lucky draw database")
    parser.add_argument("--revision", default="head", help="Alembic revision to upgrade to")
    parser.add_argument("--roster", help="CSV file that replaces the roster after migrating")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    upgrade(args.revision)
    engine = make_engine()
    print("Current tables:", ", ".join(sorted(inspect(engine).get_table_names())))

    if args.revision == "head":
        pending = schema_differences(engine)
        if pending:
            print("Models and migrations disagree after upgrade:", file=sys.stderr)
            for line in describe_operations(pending):
                print(line, file=sys.stderr)
            return 1

    Session = get_sessionmaker(engine)
    if args.roster:
        try:
            rows = load_roster_file(args.roster)
        except (OSError, RosterFormatError) as exc:
            print(f"Could not read roster: {exc}", file=sys.stderr)
            return 2
        if not rows:
            print("No valid rows in the roster; nothing loaded.", file=sys.stderr)
            return 1
        with Session.begin() as session:
            replace_roster(session, rows)

    with Session() as session:
        print(
            f"Students: {get_total_student_count(session)}"
            f" (winners: {get_winner_count(session)})"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
