"""Fair-distribution ordering of draw candidates.

The selector turns an unordered pool of entries into the order in which they
should be revealed. Plain shuffling produces visible streaks of the same
level or room during a live draw; here every pick puts its group and its
subgroup on a short cooldown so that other groups and rooms get their turn
first, while each decision point stays random.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Generic,
    Hashable,
    Iterable,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
)

logger = logging.getLogger(__name__)

GROUP_COOLDOWN_WINDOW = 5
"""Number of picks a group stays ineligible for after it was picked from."""


class Entry(Protocol):
    """Structural type of anything the selector can order."""

    @property
    def id(self) -> Hashable: ...

    @property
    def group(self) -> Optional[str]: ...

    @property
    def subgroup(self) -> Optional[str]: ...


@dataclass(frozen=True)
class DrawEntry:
    """Plain value object satisfying :class:`Entry`.

    Attributes
    ----------
    id : Hashable
        Stable identifier of the participant.
    group : str
        Top-level category, e.g. the grade level.
    subgroup : str
        Category nested in ``group``, e.g. the room.
    payload : Any, optional
        Arbitrary caller data carried alongside the entry.
    """

    id: Hashable
    group: str
    subgroup: str
    payload: Any = None


# Unbound: custom key functions let the selector order entries that do not
# satisfy Entry, e.g. plain dicts.
E = TypeVar("E")


def subgroup_cooldown_window(subgroup_count: int) -> int:
    """Return how many picks a subgroup waits in a group of ``subgroup_count``.

    A group with ``k`` rooms keeps a just-picked room out for ``k - 1`` picks,
    so consecutive picks from that group alone visit every room before
    any room repeats. Cooldowns tick on every pick, so when other groups
    are drawn in between the room cooldown may lapse before the group
    comes back.
    """
    return max(subgroup_count - 1, 0)


def _default_group_key(entry: Entry) -> Optional[str]:
    return getattr(entry, "group", None)


def _default_subgroup_key(entry: Entry) -> Optional[str]:
    return getattr(entry, "subgroup", None)


class FairDistributionSelector(Generic[E]):
    """Order a pool so no group or subgroup is drawn too often in a row.

    Parameters
    ----------
    rng : Optional[random.Random], default: None
        Random source used for every random decision. Pass a seeded
        ``random.Random`` for reproducible tests. A private instance is
        created when omitted.
    group_cooldown_window : int, default: GROUP_COOLDOWN_WINDOW
        Picks a group stays ineligible after being picked from.
    group_key : Optional[Callable[[E], Optional[str]]], default: None
        Extracts the group of an entry. Defaults to ``entry.group``.
    subgroup_key : Optional[Callable[[E], Optional[str]]], default: None
        Extracts the subgroup of an entry. Defaults to ``entry.subgroup``.

    Notes
    -----
    Entries whose group or subgroup is missing are grouped under the empty
    string. Callers are expected to filter such rows out beforehand.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        group_cooldown_window: int = GROUP_COOLDOWN_WINDOW,
        group_key: Optional[Callable[[E], Optional[str]]] = None,
        subgroup_key: Optional[Callable[[E], Optional[str]]] = None,
    ) -> None:
        if group_cooldown_window < 0:
            raise ValueError("group_cooldown_window must be non-negative")
        self._rng = rng or random.Random()
        self.group_cooldown_window = group_cooldown_window
        self._group_key = group_key or _default_group_key
        self._subgroup_key = subgroup_key or _default_subgroup_key

    def select(self, pool: Iterable[E]) -> list[E]:
        """Return every entry of ``pool`` in fair draw order.

        Parameters
        ----------
        pool : Iterable[E]
            Entries that have not been drawn yet.

        Returns
        -------
        list[E]
            A permutation of ``pool``. Pools of two entries or fewer are
            returned in their original order.

        Notes
        -----
        Each pick:

        1. Collects the non-empty groups whose cooldown has run out, or the
           single group closest to eligibility when every group is cooling
           down.
        2. Shuffles those candidate groups and takes the first one.
        3. Inside that group, picks uniformly among entries whose subgroup is
           off cooldown, or takes the entry whose subgroup is closest to
           eligibility.
        4. Resets the cooldowns of the picked group and subgroup and ticks
           every other cooldown down by one.
        """
        entries = list(pool)
        total = len(entries)
        if total <= 2:
            return entries

        rng = self._rng

        # Dense ids for groups and (group, subgroup) pairs so cooldowns live
        # in flat lists for the whole run.
        group_ids: dict[str, int] = {}
        subgroup_ids: dict[tuple[int, str], int] = {}
        entry_group: list[int] = []
        entry_subgroup: list[int] = []
        for entry in entries:
            group = self._group_key(entry) or ""
            subgroup = self._subgroup_key(entry) or ""
            gid = group_ids.setdefault(group, len(group_ids))
            sid = subgroup_ids.setdefault((gid, subgroup), len(subgroup_ids))
            entry_group.append(gid)
            entry_subgroup.append(sid)

        group_total = len(group_ids)
        subgroup_total = len(subgroup_ids)

        subgroups_per_group = [0] * group_total
        for gid, _subgroup in subgroup_ids:
            subgroups_per_group[gid] += 1
        subgroup_windows = [subgroup_cooldown_window(c) for c in subgroups_per_group]

        buckets: list[list[int]] = [[] for _ in range(group_total)]
        for index, gid in enumerate(entry_group):
            buckets[gid].append(index)
        for bucket in buckets:
            rng.shuffle(bucket)

        group_cooldown = [0] * group_total
        subgroup_cooldown = [0] * subgroup_total

        ordered: list[E] = []
        while len(ordered) < total:
            active = [gid for gid in range(group_total) if buckets[gid]]
            if not active:
                logger.error(
                    f"Fair selection stopped early with {total - len(ordered)} entries unaccounted for"
                )
                break

            candidates = [gid for gid in active if group_cooldown[gid] <= 0]
            if not candidates:
                candidates = [min(active, key=lambda gid: group_cooldown[gid])]
            rng.shuffle(candidates)

            picked: Optional[tuple[int, int]] = None
            for gid in candidates:
                position = self._pick_position(buckets[gid], entry_subgroup, subgroup_cooldown)
                if position is not None:
                    picked = (gid, position)
                    break

            if picked is None:
                logger.warning(
                    "No eligible candidate found; falling back to the first available entry"
                )
                picked = (active[0], 0)

            gid, position = picked
            index = buckets[gid].pop(position)
            ordered.append(entries[index])

            sid = entry_subgroup[index]
            for other in range(group_total):
                if group_cooldown[other] > 0:
                    group_cooldown[other] -= 1
            group_cooldown[gid] = self.group_cooldown_window
            for other in range(subgroup_total):
                if subgroup_cooldown[other] > 0:
                    subgroup_cooldown[other] -= 1
            subgroup_cooldown[sid] = subgroup_windows[gid]

        return ordered

    def _pick_position(
        self,
        bucket: Sequence[int],
        entry_subgroup: Sequence[int],
        subgroup_cooldown: Sequence[int],
    ) -> Optional[int]:
        """Return the bucket position of the entry to draw from ``bucket``."""
        if not bucket:
            return None
        eligible = [
            position
            for position, index in enumerate(bucket)
            if subgroup_cooldown[entry_subgroup[index]] <= 0
        ]
        if not eligible:
            eligible = [
                min(
                    range(len(bucket)),
                    key=lambda position: subgroup_cooldown[entry_subgroup[bucket[position]]],
                )
            ]
        return self._rng.choice(eligible)


def select_fair_order(
    pool: Iterable[E], rng: Optional[random.Random] = None
) -> list[E]:
    """Order ``pool`` with a default :class:`FairDistributionSelector`."""
    return FairDistributionSelector(rng).select(pool)


__all__ = [
    "DrawEntry",
    "Entry",
    "FairDistributionSelector",
    "GROUP_COOLDOWN_WINDOW",
    "select_fair_order",
    "subgroup_cooldown_window",
]
