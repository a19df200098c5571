from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path

from luckydraw.roster import (
    RosterFormatError,
    RosterRow,
    load_roster_file,
    parse_roster_csv,
)


class ParseRosterTests(unittest.TestCase):
    def test_parses_rows_and_strips_whitespace(self) -> None:
        stream = io.StringIO(
            "level,room,number,name\n"
            "ม.1, 1 ,1,สมชาย ใจดี\n"
            "ม.2,3,15,วิชัย เก่งมาก\n"
        )
        rows = parse_roster_csv(stream)
        self.assertEqual(
            rows,
            [
                RosterRow(level="ม.1", room="1", number="1", name="สมชาย ใจดี"),
                RosterRow(level="ม.2", room="3", number="15", name="วิชัย เก่งมาก"),
            ],
        )

    def test_incomplete_and_blank_rows_are_dropped(self) -> None:
        stream = io.StringIO(
            "level,room,number,name\n"
            "1,1,1,Alice\n"
            "\n"
            "1,,2,Bob\n"
            "2,1,3,\n"
            "2,2,4,Carol\n"
        )
        names = [row.name for row in parse_roster_csv(stream)]
        self.assertEqual(names, ["Alice", "Carol"])

    def test_header_order_case_and_extra_columns(self) -> None:
        stream = io.StringIO("Name,Room,Level,Number,Note\nDan,2,4,7,x\n")
        self.assertEqual(
            parse_roster_csv(stream),
            [RosterRow(level="4", room="2", number="7", name="Dan")],
        )

    def test_missing_column_raises(self) -> None:
        with self.assertRaises(RosterFormatError) as ctx:
            parse_roster_csv(io.StringIO("level,room,name\n1,1,Eve\n"))
        self.assertIn("number", str(ctx.exception))

    def test_empty_input_raises(self) -> None:
        with self.assertRaises(RosterFormatError):
            parse_roster_csv(io.StringIO(""))

    def test_format_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(RosterFormatError, ValueError))

    def test_as_dict(self) -> None:
        row = RosterRow(level="1", room="2", number="3", name="Fah")
        self.assertEqual(
            row.as_dict(), {"level": "1", "room": "2", "number": "3", "name": "Fah"}
        )


class LoadRosterFileTests(unittest.TestCase):
    def test_utf8_bom_is_tolerated(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "roster.csv"
            path.write_bytes(
                "level,room,number,name\n1,1,1,สมหญิง รักเรียน\n".encode("utf-8-sig")
            )
            rows = load_roster_file(path)
        self.assertEqual(rows, [RosterRow(level="1", room="1", number="1", name="สมหญิง รักเรียน")])


if __name__ == "__main__":
    unittest.main()
