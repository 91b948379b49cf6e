"""Insight service bound to an application store"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, TypeVar

from ..exceptions import InsightComputationError
from .aggregator import compute_comprehensive_insights
from .models import (
    ApplicationRecord,
    ComprehensiveInsights,
    ResponseTimeInsights,
    ResumeVersionInsights,
    SourceRejectionInsights,
)
from .resume_version import compute_resume_version_insights
from .response_time import compute_response_time_insights
from .source_rejection import compute_source_rejection_insights
from .store import ApplicationStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InsightService:
    """
    Pulls a fresh snapshot from the store on every call and runs the
    requested analysis over it.

    Storage failures propagate unchanged. Any other failure during analysis
    is logged and raised as InsightComputationError so callers never get a
    partial report.
    """

    def __init__(self, store: ApplicationStore):
        self.store = store

    def _snapshot(self) -> List[ApplicationRecord]:
        return self.store.fetch_all()

    def _run(self, name: str, analyze: Callable[[List[ApplicationRecord]], T]) -> T:
        records = self._snapshot()
        try:
            return analyze(records)
        except Exception as e:
            logger.error(f"Error computing {name}: {e}", exc_info=True)
            raise InsightComputationError(f"Failed to compute {name}: {e}") from e

    def get_source_rejection_insights(self) -> SourceRejectionInsights:
        """Rejection rate by source"""
        return self._run("rejection rate by source", compute_source_rejection_insights)

    def get_resume_version_insights(self) -> ResumeVersionInsights:
        """Resume version performance"""
        return self._run("resume version performance", compute_resume_version_insights)

    def get_response_time_insights(self, now: Optional[datetime] = None) -> ResponseTimeInsights:
        """Average response time per terminal status"""
        return self._run(
            "average response time",
            lambda records: compute_response_time_insights(records, now=now),
        )

    def get_comprehensive_insights(self, now: Optional[datetime] = None) -> ComprehensiveInsights:
        """All three analyses over a single snapshot"""
        return self._run(
            "comprehensive insights",
            lambda records: compute_comprehensive_insights(records, now=now),
        )
