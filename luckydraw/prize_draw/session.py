"""Stateful walk through fair-ordered candidates during a live draw."""

from __future__ import annotations

import logging
import random
from typing import Optional

from sqlalchemy.orm import Session

from ..config import DEFAULT_CANDIDATE_COUNT
from ..models import Student
from ..workflows import get_fair_candidates, mark_as_winner

logger = logging.getLogger(__name__)


class DrawSession:
    """Present candidates one at a time and record confirmed winners.

    A batch of ``count`` candidates is loaded in fair order. Each candidate is
    either confirmed, which marks them as a winner, or skipped, which leaves
    the database untouched. Once the batch runs out a fresh one is loaded from
    the students that are still eligible, so skipped students can come back in
    a later batch.

    The session only flushes; committing is left to the caller.
    """

    def __init__(
        self,
        session: Session,
        *,
        count: int = DEFAULT_CANDIDATE_COUNT,
        level: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if count <= 0:
            raise ValueError("count must be a positive integer")
        self._session = session
        self.count = count
        self.level = level
        self._rng = rng
        self._candidates: list[Student] = []
        self._index = 0
        self.reload()

    @property
    def candidates(self) -> list[Student]:
        """Copy of the current batch, in draw order."""
        return list(self._candidates)

    @property
    def current(self) -> Optional[Student]:
        """Candidate under consideration, or ``None`` when nobody is left."""
        if self._index < len(self._candidates):
            return self._candidates[self._index]
        return None

    @property
    def remaining(self) -> int:
        """Candidates left in the batch after the current one."""
        return max(len(self._candidates) - self._index - 1, 0)

    def reload(self) -> list[Student]:
        """Discard the current batch and load a fresh one."""
        self._candidates = get_fair_candidates(
            self._session, self.count, level=self.level, rng=self._rng
        )
        self._index = 0
        logger.debug(f"Loaded {len(self._candidates)} candidate(s) (level={self.level!r})")
        return self.candidates

    def confirm(self) -> Student:
        """Mark the current candidate as a winner and move on.

        Raises
        ------
        LookupError
            If there is no current candidate.
        """
        student = self.current
        if student is None:
            raise LookupError("No candidate left to confirm")
        mark_as_winner(self._session, student.id)
        self._advance()
        return student

    def skip(self) -> Optional[Student]:
        """Pass over the current candidate without recording anything."""
        student = self.current
        if student is None:
            return None
        self._advance()
        return student

    def _advance(self) -> None:
        if self._index < len(self._candidates) - 1:
            self._index += 1
        else:
            self.reload()


__all__ = ["DrawSession"]
