"""Parsing of roster spreadsheets exported as CSV."""

from __future__ import annotations

import csv
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, TextIO, Union

REQUIRED_COLUMNS = ("level", "room", "number", "name")


class RosterFormatError(ValueError):
    """Raised when a roster file does not have the expected columns."""


@dataclass(frozen=True)
class RosterRow:
    """One student row read from a roster file."""

    level: str
    room: str
    number: str
    name: str

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


def parse_roster_rows(lines: Iterable[str]) -> list[RosterRow]:
    """Parse CSV ``lines`` that start with a ``level,room,number,name`` header.

    Header names are matched case-insensitively and may appear in any order;
    extra columns are ignored. Values are stripped of surrounding whitespace.
    Blank lines and rows missing any required value are dropped so that
    every returned row has a level and a room to draw by.

    Raises
    ------
    RosterFormatError
        If the header is missing or lacks one of the required columns.
    """
    reader = csv.DictReader(lines)
    if reader.fieldnames is None:
        raise RosterFormatError("Roster is empty; expected a header row")

    header = {
        (name or "").lstrip("\ufeff").strip().lower(): name
        for name in reader.fieldnames
    }
    missing = [column for column in REQUIRED_COLUMNS if column not in header]
    if missing:
        raise RosterFormatError(
            "Roster is missing required column(s): " + ", ".join(missing)
        )

    rows: list[RosterRow] = []
    for record in reader:
        values = {
            column: (record.get(header[column]) or "").strip()
            for column in REQUIRED_COLUMNS
        }
        if not all(values.values()):
            continue
        rows.append(RosterRow(**values))
    return rows


def parse_roster_csv(stream: TextIO) -> list[RosterRow]:
    """Parse an open text stream; see :func:`parse_roster_rows`."""
    return parse_roster_rows(stream)


def load_roster_file(path: Union[str, Path]) -> list[RosterRow]:
    """Read and parse the roster CSV at ``path`` (UTF-8, BOM tolerated)."""
    with open(path, newline="", encoding="utf-8-sig") as handle:
        return parse_roster_csv(handle)


__all__ = [
    "REQUIRED_COLUMNS",
    "RosterFormatError",
    "RosterRow",
    "load_roster_file",
    "parse_roster_csv",
    "parse_roster_rows",
]
