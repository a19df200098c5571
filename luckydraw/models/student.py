"""Roster model: one row per student eligible for the draw."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, func, select, text
from sqlalchemy.orm import Mapped, Session, mapped_column, validates

from .base import Base
from .id_type import ID_TYPE


class Student(Base):
    """A student on the draw roster.

    ``level`` is the top-level group used for anti-clustering and ``room`` is
    the subgroup nested inside it. The :attr:`group` and :attr:`subgroup`
    aliases let rows be handed straight to
    :class:`~luckydraw.prize_draw.selector.FairDistributionSelector`.
    """

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    """Primary key."""

    level: Mapped[str] = mapped_column(String(50), nullable=False)
    """Grade level, e.g. ``"1"`` or ``"ม.1"``."""

    room: Mapped[str] = mapped_column(String(50), nullable=False)
    """Room within the level."""

    number: Mapped[str] = mapped_column(String(50), nullable=False)
    """Roll number within the room, kept as text as imported."""

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    """Full display name."""

    is_winner: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
        index=True,
    )
    """Set once the student has been confirmed as a winner."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __init__(
        self,
        *,
        level: str,
        room: str,
        number: str,
        name: str,
        is_winner: bool = False,
        created_at: Optional[datetime] = None,
    ) -> None:
        self.level = level
        self.room = room
        self.number = number
        self.name = name
        self.is_winner = is_winner
        if created_at is not None:
            self.created_at = created_at

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return "<Student(id={id}, level={level}, room={room}, number={number}, is_winner={won})>".format(
            id=self.id,
            level=self.level,
            room=self.room,
            number=self.number,
            won=self.is_winner,
        )

    @validates("level", "room", "number", "name")
    def _strip_text(self, _key: str, value: str) -> str:
        if value is None:
            raise ValueError(f"Student.{_key} must not be None")
        return value.strip()

    @property
    def group(self) -> str:
        """Alias of :attr:`level` for the fair-distribution selector."""
        return self.level

    @property
    def subgroup(self) -> str:
        """Alias of :attr:`room` for the fair-distribution selector."""
        return self.room

    def mark_winner(self) -> bool:
        """Flag the student as a winner.

        Returns
        -------
        bool
            ``True`` when the flag changed, ``False`` if already a winner.
        """
        if self.is_winner:
            return False
        self.is_winner = True
        return True

    @classmethod
    def get_by_id(cls, session: Session, student_id: int) -> Optional["Student"]:
        """Return the student with primary key ``student_id`` if it exists."""
        return session.get(cls, student_id)

    @classmethod
    def eligible(
        cls, session: Session, level: Optional[str] = None
    ) -> list["Student"]:
        """Return students that have not won yet, optionally within one level."""
        stmt = select(cls).where(cls.is_winner.is_(False))
        if level is not None:
            stmt = stmt.where(cls.level == level)
        return list(session.scalars(stmt.order_by(cls.id.asc())).all())

    @classmethod
    def count_all(cls, session: Session) -> int:
        return session.scalar(select(func.count(cls.id))) or 0

    @classmethod
    def count_winners(cls, session: Session) -> int:
        return (
            session.scalar(select(func.count(cls.id)).where(cls.is_winner.is_(True)))
            or 0
        )


__all__ = ["Student"]
