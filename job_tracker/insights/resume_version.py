"""Resume version performance"""

import logging
from typing import Iterable

from .grouping import first_max, first_min, group_stats, percent, tally_by
from .models import ApplicationRecord, ResumeVersionInsights, VersionAggregate
from .narrative import format_resume_version

logger = logging.getLogger(__name__)


def compute_resume_version_insights(
    records: Iterable[ApplicationRecord],
) -> ResumeVersionInsights:
    """
    Group applications by resume version and rank versions by success rate.

    A version's success rate is the share of applications that reached an
    interview or an offer. It is independent of the rejection rate, so the
    two need not sum to 100.
    """
    groups = tally_by(records, key=lambda r: r.resume_version)

    versions = []
    for version, counts in groups.items():
        stats = group_stats(counts)
        successes = stats["interview_count"] + stats["offer_count"]
        versions.append(VersionAggregate(
            version=version,
            success_rate=percent(successes, stats["total_applications"]),
            **stats,
        ))

    best = first_max(versions, key=lambda v: v.success_rate)
    worst = first_min(versions, key=lambda v: v.success_rate)

    logger.debug(f"Computed performance for {len(versions)} resume versions")

    return ResumeVersionInsights(
        versions=versions,
        best_version=best,
        worst_version=worst,
        narrative=format_resume_version(versions, best, worst),
    )
