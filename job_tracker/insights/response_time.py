"""Average response time per terminal status"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from .grouping import first_max, first_min, round_half_up
from .models import (
    ApplicationRecord,
    ResponseTimeInsights,
    StatusTiming,
    TERMINAL_STATUSES,
)
from .narrative import format_response_time

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def days_since(applied_at: datetime, now: datetime) -> float:
    """Fractional days between an application and now"""
    return (now - applied_at).total_seconds() / SECONDS_PER_DAY


def _normalize_now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def compute_response_time_insights(
    records: Iterable[ApplicationRecord],
    now: Optional[datetime] = None,
) -> ResponseTimeInsights:
    """
    Average the days elapsed since applying, per terminal status.

    Elapsed time is measured up to `now` for whatever status a record holds
    today; no transition timestamps are involved. Statuses without any
    records are left out of `averages` entirely.
    """
    now = _normalize_now(now)

    elapsed: Dict[str, List[float]] = {s.value: [] for s in TERMINAL_STATUSES}
    completed = 0
    for record in records:
        if record.status in elapsed:
            elapsed[record.status].append(days_since(record.applied_at, now))
            completed += 1

    averages: Dict[str, int] = {}
    for status, days in elapsed.items():
        if days:
            averages[status] = round_half_up(sum(days) / len(days))

    timings = [StatusTiming(status=s, average_days=d) for s, d in averages.items()]
    fastest = first_min(timings, key=lambda t: t.average_days)
    slowest = first_max(timings, key=lambda t: t.average_days)

    logger.debug(f"Computed response times over {completed} completed applications")

    return ResponseTimeInsights(
        averages=averages,
        completed_applications=completed,
        fastest=fastest,
        slowest=slowest,
        narrative=format_response_time(averages, fastest, slowest, completed),
    )
