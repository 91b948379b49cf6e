"""Shared fixtures for unit tests"""

import itertools
from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from job_tracker.exceptions import StorageError
from job_tracker.insights import ApplicationRecord, ApplicationStore

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

_ids = itertools.count(1)


def make_record(
    status: str = "Applied",
    source: str = "LinkedIn",
    resume_version: str = "1.0",
    days_ago: float = 0,
    company: str = "Acme Corp",
    role: str = "Engineer",
) -> ApplicationRecord:
    """Build an application record applied `days_ago` days before NOW"""
    return ApplicationRecord(
        id=next(_ids),
        company=company,
        role=role,
        status=status,
        source=source,
        resume_version=resume_version,
        applied_at=NOW - timedelta(days=days_ago),
    )


class InMemoryStore(ApplicationStore):
    """Application store backed by a list, counting reads"""

    def __init__(self, records: List[ApplicationRecord] = None):
        self.records = list(records or [])
        self.fetch_count = 0

    def fetch_all(self) -> List[ApplicationRecord]:
        self.fetch_count += 1
        return list(self.records)

    def get_application(self, app_id: int):
        return next((r for r in self.records if r.id == app_id), None)


class UnavailableStore(ApplicationStore):
    """Application store whose reads always fail"""

    def fetch_all(self) -> List[ApplicationRecord]:
        raise StorageError("database is locked")


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def mixed_records():
    """Applications across three sources, two resume versions and every status"""
    return [
        make_record("Rejected", "LinkedIn", "1.0", days_ago=3),
        make_record("Rejected", "LinkedIn", "1.0", days_ago=4),
        make_record("Interview", "LinkedIn", "2.0", days_ago=10),
        make_record("Applied", "Referral", "2.0", days_ago=1),
        make_record("Offer", "Referral", "2.0", days_ago=20),
        make_record("Interview", "Referral", "2.0", days_ago=6),
        make_record("Withdrawn", "Indeed", "1.0", days_ago=15),
        make_record("Rejected", "Indeed", "1.0", days_ago=8),
    ]


@pytest.fixture
def store(mixed_records):
    return InMemoryStore(mixed_records)
