"""Comprehensive report combining the three analyzers"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from .grouping import first_max
from .models import (
    ApplicationRecord,
    ApplicationStatus,
    ComprehensiveInsights,
    DetailedInsights,
)
from .narrative import format_comprehensive
from .resume_version import compute_resume_version_insights
from .response_time import compute_response_time_insights
from .source_rejection import compute_source_rejection_insights

logger = logging.getLogger(__name__)


def _key_findings(detailed: DetailedInsights) -> List[str]:
    findings = []

    sources = detailed.source_rejection.insights
    best_source = first_max(sources, key=lambda i: i.success_rate)
    if best_source is not None:
        findings.append(
            f"✅ Your best application source is {best_source.source} "
            f"with {best_source.success_rate}% success rate."
        )

    versions = detailed.resume_performance.versions
    best_resume = first_max(versions, key=lambda v: v.success_rate)
    if best_resume is not None:
        findings.append(
            f"📄 Your best performing resume is version {best_resume.version} "
            f"with {best_resume.success_rate}% success rate."
        )

    averages = detailed.response_time.averages
    if ApplicationStatus.INTERVIEW.value in averages:
        findings.append(
            f"⏱️ Average time to interview: {averages[ApplicationStatus.INTERVIEW.value]} days"
        )
    if ApplicationStatus.OFFER.value in averages:
        findings.append(
            f"💼 Average time to offer: {averages[ApplicationStatus.OFFER.value]} days"
        )

    return findings


def _recommendations(detailed: DetailedInsights) -> List[str]:
    recommendations = []

    if any(i.rejection_rate > 50 for i in detailed.source_rejection.insights):
        recommendations.append(
            "🚨 Consider improving your application strategy for sources "
            "with high rejection rates."
        )

    if any(v.success_rate < 30 for v in detailed.resume_performance.versions):
        recommendations.append("📝 Review and update low-performing resume versions.")

    interview = detailed.response_time.averages.get(ApplicationStatus.INTERVIEW.value)
    if interview is not None and interview > 14:
        recommendations.append(
            "⏰ Follow up on applications after 2 weeks if you haven't heard back."
        )

    return recommendations


def compute_comprehensive_insights(
    records: Iterable[ApplicationRecord],
    now: Optional[datetime] = None,
) -> ComprehensiveInsights:
    """
    Run every analyzer over one snapshot and merge the results.

    The snapshot is materialized once so all three sub-reports describe the
    same set of applications.
    """
    snapshot = list(records)
    generated_at = now or datetime.now(timezone.utc)

    detailed = DetailedInsights(
        source_rejection=compute_source_rejection_insights(snapshot),
        resume_performance=compute_resume_version_insights(snapshot),
        response_time=compute_response_time_insights(snapshot, now=generated_at),
    )

    key_findings = _key_findings(detailed)
    recommendations = _recommendations(detailed)

    return ComprehensiveInsights(
        narrative=format_comprehensive(key_findings, recommendations, detailed),
        key_findings=key_findings,
        recommendations=recommendations,
        detailed=detailed,
        generated_at=generated_at,
    )
