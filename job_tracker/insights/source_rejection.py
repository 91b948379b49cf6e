"""Rejection rate by application source"""

import logging
from typing import Iterable

from .grouping import first_max, first_min, group_stats, tally_by
from .models import ApplicationRecord, SourceAggregate, SourceRejectionInsights
from .narrative import format_source_rejection

logger = logging.getLogger(__name__)


def compute_source_rejection_insights(
    records: Iterable[ApplicationRecord],
) -> SourceRejectionInsights:
    """
    Group applications by source and rank sources by rejection rate.

    Success rate here is the complement of the rejection rate, so the two
    always sum to 100 for a source.
    """
    groups = tally_by(records, key=lambda r: r.source)

    insights = []
    for source, counts in groups.items():
        stats = group_stats(counts)
        insights.append(SourceAggregate(
            source=source,
            success_rate=100 - stats["rejection_rate"],
            **stats,
        ))

    highest = first_max(insights, key=lambda i: i.rejection_rate)
    lowest = first_min(insights, key=lambda i: i.rejection_rate)

    logger.debug(f"Computed rejection rates for {len(insights)} sources")

    return SourceRejectionInsights(
        insights=insights,
        total_applications=sum(i.total_applications for i in insights),
        highest_rejection=highest,
        lowest_rejection=lowest,
        narrative=format_source_rejection(insights, highest, lowest),
    )
