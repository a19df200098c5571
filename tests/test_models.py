import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from luckydraw.models import Base, Student


class StudentModelTests(unittest.TestCase):
    def setUp(self):
        # In-memory SQLite for isolation
        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(
            bind=self.engine, future=True, expire_on_commit=False
        )

    def tearDown(self):
        self.engine.dispose()

    def _add(self, session, level, room, number, name, **kwargs):
        student = Student(level=level, room=room, number=number, name=name, **kwargs)
        session.add(student)
        session.flush()
        return student

    def test_defaults(self):
        with self.Session() as session:
            student = self._add(session, "1", "1", "1", "Alice")
            session.commit()
            self.assertFalse(student.is_winner)
            self.assertIsNotNone(student.created_at)

    def test_text_fields_are_stripped(self):
        with self.Session() as session:
            student = self._add(session, " 1 ", " 2", "3 ", "  Bob  ")
            self.assertEqual(
                (student.level, student.room, student.number, student.name),
                ("1", "2", "3", "Bob"),
            )

    def test_group_aliases(self):
        student = Student(level="ม.1", room="4", number="9", name="Carol")
        self.assertEqual(student.group, "ม.1")
        self.assertEqual(student.subgroup, "4")

    def test_mark_winner_reports_change(self):
        student = Student(level="1", room="1", number="1", name="Dan")
        self.assertTrue(student.mark_winner())
        self.assertFalse(student.mark_winner())
        self.assertTrue(student.is_winner)

    def test_get_by_id(self):
        with self.Session() as session:
            student = self._add(session, "1", "1", "1", "Eve")
            session.commit()
            self.assertIs(Student.get_by_id(session, student.id), student)
            self.assertIsNone(Student.get_by_id(session, student.id + 100))

    def test_eligible_and_counts(self):
        with self.Session() as session:
            self._add(session, "1", "1", "1", "A")
            self._add(session, "1", "2", "2", "B", is_winner=True)
            self._add(session, "2", "1", "3", "C")
            session.commit()

            self.assertEqual([s.name for s in Student.eligible(session)], ["A", "C"])
            self.assertEqual([s.name for s in Student.eligible(session, level="2")], ["C"])
            self.assertEqual(Student.count_all(session), 3)
            self.assertEqual(Student.count_winners(session), 1)

    def test_none_field_rejected(self):
        with self.assertRaises(ValueError):
            Student(level=None, room="1", number="1", name="X")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
