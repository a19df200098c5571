import logging
import random
from typing import Iterable, Mapping, Optional, Union

from sqlalchemy import delete, update
from sqlalchemy.orm import Session

from .config import DEFAULT_CANDIDATE_COUNT
from .models import Student
from .prize_draw.selector import FairDistributionSelector
from .roster import REQUIRED_COLUMNS, RosterRow

logger = logging.getLogger(__name__)

RosterInput = Union[RosterRow, Mapping[str, str]]


def get_fair_candidates(
    session: Session,
    count: int = DEFAULT_CANDIDATE_COUNT,
    *,
    level: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> list[Student]:
    """Return the next batch of students to reveal during a live draw.

    All students that have not won yet are loaded (restricted to ``level``
    when given), put in fair order by :class:`FairDistributionSelector`, and
    the first ``count`` are returned.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session.
    count : int, default: DEFAULT_CANDIDATE_COUNT
        Maximum number of candidates to return. Must be positive.
    level : Optional[str], default: None
        Restrict the draw to a single level.
    rng : Optional[random.Random], default: None
        Random source forwarded to the selector.

    Returns
    -------
    list[Student]
        Up to ``count`` students in draw order; empty when nobody is left.

    Raises
    ------
    ValueError
        If ``count`` is not positive.
    """
    if count <= 0:
        raise ValueError("count must be a positive integer")

    pool = Student.eligible(session, level=level)
    if not pool:
        logger.debug(f"No eligible students left (level={level!r})")
        return []

    ordered = FairDistributionSelector(rng).select(pool)
    logger.debug(
        f"Ordered {len(ordered)} eligible students (level={level!r}); returning {min(count, len(ordered))}"
    )
    return ordered[:count]


def mark_as_winner(session: Session, student_id: int) -> Student:
    """Record ``student_id`` as a winner.

    Marking an existing winner again is a no-op, so a confirm that is
    retried after a dropped connection does not fail.

    Raises
    ------
    LookupError
        If no student has ``student_id``.
    """
    student = Student.get_by_id(session, student_id)
    if student is None:
        raise LookupError(f"Student {student_id} does not exist")

    if student.mark_winner():
        logger.debug(f"Marked student {student_id} as winner")
    else:
        logger.debug(f"Student {student_id} was already a winner")
    session.flush()
    return student


def reset_all_winners(session: Session) -> int:
    """Clear the winner flag on every student and return the rows touched."""
    result = session.execute(
        update(Student)
        .where(Student.is_winner.is_(True))
        .values(is_winner=False)
        .execution_options(synchronize_session="evaluate")
    )
    logger.debug(f"Reset {result.rowcount} winner flag(s)")
    return result.rowcount


def delete_all_students(session: Session) -> int:
    """Delete the whole roster and return the number of rows removed."""
    result = session.execute(
        delete(Student).execution_options(synchronize_session="evaluate")
    )
    logger.debug(f"Deleted {result.rowcount} student(s)")
    return result.rowcount


def _row_values(row: RosterInput) -> dict[str, str]:
    raw = row.as_dict() if isinstance(row, RosterRow) else dict(row)
    values = {column: (raw.get(column) or "").strip() for column in REQUIRED_COLUMNS}
    missing = [column for column in REQUIRED_COLUMNS if not values[column]]
    if missing:
        raise ValueError(
            "Roster row is missing required field(s): " + ", ".join(missing)
        )
    return values


def insert_students(session: Session, rows: Iterable[RosterInput]) -> list[Student]:
    """Insert roster ``rows`` as non-winning students.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session.
    rows : Iterable[RosterRow | Mapping[str, str]]
        Rows carrying ``level``, ``room``, ``number`` and ``name``.

    Returns
    -------
    list[Student]
        The persisted students, in input order.

    Raises
    ------
    ValueError
        If a row lacks one of the required fields.
    """
    students = [Student(**_row_values(row), is_winner=False) for row in rows]
    session.add_all(students)
    session.flush()
    return students


def replace_roster(session: Session, rows: Iterable[RosterInput]) -> int:
    """Replace every student with ``rows`` inside the caller's transaction.

    Nothing is deleted when ``rows`` is empty or invalid, so a bad upload
    leaves the existing roster untouched.

    Returns
    -------
    int
        Number of students inserted.

    Raises
    ------
    ValueError
        If ``rows`` is empty or a row lacks a required field.
    """
    validated = [_row_values(row) for row in rows]
    if not validated:
        raise ValueError("Roster must contain at least one valid row")

    removed = delete_all_students(session)
    inserted = insert_students(session, validated)
    logger.info(f"Roster replaced: {removed} removed, {len(inserted)} inserted")
    return len(inserted)


def get_total_student_count(session: Session) -> int:
    return Student.count_all(session)


def get_winner_count(session: Session) -> int:
    return Student.count_winners(session)


def get_remaining_count(session: Session) -> int:
    """Return how many students are still eligible to win."""
    return get_total_student_count(session) - get_winner_count(session)


__all__ = [
    "delete_all_students",
    "get_fair_candidates",
    "get_remaining_count",
    "get_total_student_count",
    "get_winner_count",
    "insert_students",
    "mark_as_winner",
    "replace_roster",
    "reset_all_winners",
]
