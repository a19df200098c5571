"""Candidate ordering for the lucky draw."""

from .selector import (
    DrawEntry,
    Entry,
    FairDistributionSelector,
    GROUP_COOLDOWN_WINDOW,
    select_fair_order,
    subgroup_cooldown_window,
)

__all__ = [
    "DrawEntry",
    "Entry",
    "FairDistributionSelector",
    "GROUP_COOLDOWN_WINDOW",
    "select_fair_order",
    "subgroup_cooldown_window",
]
