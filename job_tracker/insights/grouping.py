"""Grouping and rate helpers shared by the analyzers"""

import math
from typing import Callable, Dict, Iterable, List

from .models import ApplicationRecord, ApplicationStatus


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives"""
    return int(math.floor(value + 0.5))


def percent(part: int, total: int) -> int:
    """Integer percentage of part in total, 0 when total is 0"""
    if total <= 0:
        return 0
    return round_half_up(part / total * 100)


def tally_by(
    records: Iterable[ApplicationRecord],
    key: Callable[[ApplicationRecord], str],
) -> Dict[str, Dict[str, int]]:
    """
    Count statuses per group.

    Groups keep first-seen order so reports list them in the order the
    snapshot presents them.
    """
    groups: Dict[str, Dict[str, int]] = {}
    for record in records:
        counts = groups.setdefault(key(record), {})
        counts[record.status] = counts.get(record.status, 0) + 1
    return groups


def group_stats(status_counts: Dict[str, int]) -> Dict:
    """
    Build the counts and rates shared by every grouped aggregate.

    Unrecognized statuses add to the total but never to a numerator.
    `success_rate` is left for the caller since each grouping defines it
    differently.
    """
    total = sum(status_counts.values())
    rejected = status_counts.get(ApplicationStatus.REJECTED.value, 0)
    interview = status_counts.get(ApplicationStatus.INTERVIEW.value, 0)
    offer = status_counts.get(ApplicationStatus.OFFER.value, 0)

    return {
        "total_applications": total,
        "status_counts": dict(status_counts),
        "rejection_count": rejected,
        "interview_count": interview,
        "offer_count": offer,
        "rejection_rate": percent(rejected, total),
        "interview_rate": percent(interview, total),
        "offer_rate": percent(offer, total),
    }


def first_max(items: List, key: Callable):
    """Item with the largest key; the earliest one wins ties"""
    if not items:
        return None
    return max(items, key=key)


def first_min(items: List, key: Callable):
    """Item with the smallest key; the earliest one wins ties"""
    if not items:
        return None
    return min(items, key=key)
