"""Fill the development database with a small synthetic roster."""

from __future__ import annotations

from luckydraw.db.engine import get_sessionmaker, make_engine
from luckydraw.models import Base
from luckydraw.workflows import get_total_student_count, replace_roster

LEVELS = ["1", "2", "3", "4", "5", "6"]
ROOMS_PER_LEVEL = 3
STUDENTS_PER_ROOM = 5


def build_rows() -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for level in LEVELS:
        for room in range(1, ROOMS_PER_LEVEL + 1):
            for number in range(1, STUDENTS_PER_ROOM + 1):
                rows.append(
                    {
                        "level": level,
                        "room": str(room),
                        "number": str(number),
                        "name": f"Student {level}/{room}-{number:02d}",
                    }
                )
    return rows


def main() -> None:
    """Drop and recreate the schema, then load the synthetic roster."""
    engine = make_engine()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    Session = get_sessionmaker(engine)

    with Session.begin() as session:
        replace_roster(session, build_rows())

    with Session() as session:
        print(f"Seeded {get_total_student_count(session)} students.")


if __name__ == "__main__":
    main()
