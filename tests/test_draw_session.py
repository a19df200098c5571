from __future__ import annotations

import random
import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from luckydraw.models import Base, Student
from luckydraw.prize_draw.session import DrawSession
from luckydraw.workflows import get_winner_count, insert_students


class DrawSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(
            bind=self.engine, future=True, expire_on_commit=False
        )

    def tearDown(self) -> None:
        self.engine.dispose()

    def _seed(self, session, *, levels: int = 2, per_level: int = 3) -> list[Student]:
        rows = [
            {"level": str(level), "room": "1", "number": str(n), "name": f"S{level}{n}"}
            for level in range(1, levels + 1)
            for n in range(1, per_level + 1)
        ]
        return insert_students(session, rows)

    def test_confirm_marks_winner_and_advances(self) -> None:
        with self.Session.begin() as session:
            self._seed(session)
            draw = DrawSession(session, count=3, rng=random.Random(0))
            first = draw.current
            assert first is not None
            second = draw.candidates[1]

            confirmed = draw.confirm()

            self.assertIs(confirmed, first)
            self.assertTrue(first.is_winner)
            self.assertIs(draw.current, second)
            self.assertEqual(get_winner_count(session), 1)

    def test_skip_does_not_touch_database(self) -> None:
        with self.Session.begin() as session:
            self._seed(session)
            draw = DrawSession(session, count=3, rng=random.Random(0))
            skipped = draw.skip()

            assert skipped is not None
            self.assertFalse(skipped.is_winner)
            self.assertEqual(get_winner_count(session), 0)
            self.assertEqual(draw.remaining, 1)

    def test_exhausted_batch_reloads_without_winners(self) -> None:
        with self.Session.begin() as session:
            self._seed(session)
            draw = DrawSession(session, count=2, rng=random.Random(3))
            winners = [draw.confirm(), draw.confirm()]

            self.assertEqual(len(draw.candidates), 2)
            reloaded_ids = {student.id for student in draw.candidates}
            self.assertTrue(reloaded_ids.isdisjoint({w.id for w in winners}))

    def test_skipped_students_can_return_after_reload(self) -> None:
        with self.Session.begin() as session:
            self._seed(session, levels=1, per_level=1)
            draw = DrawSession(session, count=5)
            only = draw.skip()
            self.assertIs(draw.current, only)

    def test_confirming_everyone_empties_the_draw(self) -> None:
        with self.Session.begin() as session:
            self._seed(session, levels=2, per_level=2)
            draw = DrawSession(session, count=10, rng=random.Random(1))
            for _ in range(4):
                draw.confirm()

            self.assertIsNone(draw.current)
            self.assertEqual(draw.remaining, 0)
            self.assertIsNone(draw.skip())
            with self.assertRaises(LookupError):
                draw.confirm()

    def test_level_restricted_session(self) -> None:
        with self.Session.begin() as session:
            self._seed(session, levels=3)
            draw = DrawSession(session, count=10, level="3")
            self.assertEqual({s.level for s in draw.candidates}, {"3"})

    def test_invalid_count_rejected(self) -> None:
        with self.Session.begin() as session:
            with self.assertRaises(ValueError):
                DrawSession(session, count=0)


if __name__ == "__main__":
    unittest.main()
