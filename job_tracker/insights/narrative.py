"""
Plain-English narratives for insight reports.

Every function here formats aggregates that were already computed; none of
them touch records or do arithmetic on rates.
"""

from typing import Dict, List, Optional

from .models import (
    ApplicationStatus,
    DetailedInsights,
    SourceAggregate,
    StatusTiming,
    VersionAggregate,
)

NO_SOURCE_DATA = "No application data available for analysis."
NO_RESUME_DATA = "No resume version data available for analysis."
NO_RESPONSE_DATA = (
    "📊 **Response Time Analysis**: No completed applications "
    "(Interview/Offer/Rejected) found in the database."
)

REPORT_TITLE = "📊 **COMPREHENSIVE JOB APPLICATION INSIGHTS**"
REPORT_RULE = "=" * 44
KEY_FINDINGS_HEADER = "🔍 **Key Findings**:"
RECOMMENDATIONS_HEADER = "💡 **Recommendations**:"
DETAILED_ANALYSIS_HEADER = "📈 **Detailed Analysis**:"

# Display labels for the per-status response time lines
STATUS_LABELS = {
    ApplicationStatus.INTERVIEW.value: "Interview",
    ApplicationStatus.OFFER.value: "Offer",
    ApplicationStatus.REJECTED.value: "Rejection",
}


def format_source_rejection(
    insights: List[SourceAggregate],
    highest: Optional[SourceAggregate],
    lowest: Optional[SourceAggregate],
) -> str:
    total = sum(i.total_applications for i in insights)
    lines = [f"📊 **Rejection Rate Analysis** (Based on {total} total applications)"]

    if not insights or highest is None or lowest is None:
        lines.append(NO_SOURCE_DATA)
        return "\n".join(lines)

    lines.append("")
    lines.append(
        f"🎯 **Best Performing Source**: {lowest.source} "
        f"with only {lowest.rejection_rate}% rejection rate"
    )
    lines.append(
        f"🚨 **Highest Rejection Source**: {highest.source} "
        f"with {highest.rejection_rate}% rejection rate"
    )

    if highest.rejection_rate > 50:
        lines.append("")
        lines.append(
            f"⚠️ **Recommendation**: Consider improving your approach "
            f"for {highest.source} applications."
        )

    if lowest.success_rate > 70:
        lines.append(
            f"✅ **Success Pattern**: Your strategy for {lowest.source} "
            f"is working well - keep it up!"
        )

    lines.append("")
    lines.append("📋 **Detailed Breakdown**:")
    for insight in insights:
        lines.append(
            f"- {insight.source}: {insight.rejection_rate}% rejection rate "
            f"({insight.rejection_count} rejections out of "
            f"{insight.total_applications} applications)"
        )

    return "\n".join(lines)


def _version_block(title: str, version: VersionAggregate) -> List[str]:
    return [
        f"{title}: Resume {version.version}",
        f"   - Success Rate: {version.success_rate}%",
        f"   - Interview Rate: {version.interview_rate}%",
        f"   - Offer Rate: {version.offer_rate}%",
        f"   - Total Applications: {version.total_applications}",
    ]


def format_resume_version(
    versions: List[VersionAggregate],
    best: Optional[VersionAggregate],
    worst: Optional[VersionAggregate],
) -> str:
    lines = ["📄 **Resume Version Performance Analysis**"]

    if not versions or best is None or worst is None:
        lines.append(NO_RESUME_DATA)
        return "\n".join(lines)

    lines.append("")
    lines.extend(_version_block("🏆 **Best Performing Version**", best))
    lines.append("")
    lines.extend(_version_block("👎 **Lowest Performing Version**", worst))

    if best.success_rate > worst.success_rate + 20:
        lines.append("")
        lines.append(
            f"💡 **Recommendation**: Consider using Resume {best.version} "
            f"as your primary template."
        )

    if worst.rejection_rate > 60:
        lines.append(
            f"⚠️ **Warning**: Resume {worst.version} has a high rejection rate "
            f"- consider revising it."
        )

    lines.append("")
    lines.append("📊 **All Resume Versions**:")
    for version in versions:
        lines.append(
            f"- Resume {version.version}: {version.success_rate}% success rate "
            f"({version.interview_rate}% interviews, {version.offer_rate}% offers)"
        )

    return "\n".join(lines)


def format_response_time(
    averages: Dict[str, int],
    fastest: Optional[StatusTiming],
    slowest: Optional[StatusTiming],
    completed: int,
) -> str:
    if completed == 0:
        return NO_RESPONSE_DATA

    lines = [f"⏱️ **Response Time Analysis** (Based on {completed} completed applications)"]

    if not averages or fastest is None or slowest is None:
        lines.append("No response time data available for analysis.")
        return "\n".join(lines)

    lines.append("")
    lines.append(
        f"🏃 **Fastest Response**: {fastest.status} in {fastest.average_days} days on average"
    )
    lines.append(
        f"🐢 **Slowest Response**: {slowest.status} in {slowest.average_days} days on average"
    )

    lines.append("")
    lines.append("📊 **Average Response Times**:")
    for status, label in STATUS_LABELS.items():
        if status in averages:
            lines.append(f"- {label}: {averages[status]} days from application")

    interview = averages.get(ApplicationStatus.INTERVIEW.value)
    offer = averages.get(ApplicationStatus.OFFER.value)
    rejected = averages.get(ApplicationStatus.REJECTED.value)

    if interview is not None and interview < 7:
        lines.append("")
        lines.append(
            "✅ **Positive Insight**: Getting interviews quickly (under 7 days) "
            "suggests your applications are strong."
        )

    if offer is not None and offer < 14:
        lines.append(
            "✅ **Excellent Performance**: Receiving offers in under 2 weeks "
            "is very competitive."
        )

    if rejected is not None and rejected < 5:
        lines.append("")
        lines.append(
            "⚠️ **Quick Rejections**: Being rejected in under 5 days might indicate "
            "your applications aren't getting proper consideration."
        )

    if interview is not None and interview > 21:
        lines.append("")
        lines.append(
            "💡 **Recommendation**: Consider following up on applications "
            "if you don't hear back within 2-3 weeks."
        )

    return "\n".join(lines)


def format_comprehensive(
    key_findings: List[str],
    recommendations: List[str],
    detailed: DetailedInsights,
) -> str:
    lines = [REPORT_TITLE, REPORT_RULE, "", KEY_FINDINGS_HEADER, ""]
    lines.extend(key_findings)

    lines.append("")
    lines.append(RECOMMENDATIONS_HEADER)
    lines.append("")
    lines.extend(recommendations)

    lines.append("")
    lines.append(DETAILED_ANALYSIS_HEADER)
    for section in (
        detailed.source_rejection.narrative,
        detailed.resume_performance.narrative,
        detailed.response_time.narrative,
    ):
        lines.append("")
        lines.append(section)

    return "\n".join(lines)
