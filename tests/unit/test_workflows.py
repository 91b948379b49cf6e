"""Unit Tests for the event bus and lifecycle workflows"""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock, Mock

from job_tracker.exceptions import StorageError
from job_tracker.insights import InsightService
from job_tracker.ui.api.services.email_service import EmailResult
from job_tracker.workflows import (
    ApplicationCreated,
    EventBus,
    StatusUpdated,
    WeeklySummaryRequested,
    Workflows,
    build_event_bus,
)

from conftest import NOW, InMemoryStore, UnavailableStore, make_record


def make_workflows(store, email_service=None, now=NOW):
    return Workflows(
        store=store,
        insight_service=InsightService(store),
        email_service=email_service,
        clock=lambda: now,
    )


class TestEventBus:
    """Test event dispatch"""

    @pytest.mark.asyncio
    async def test_dispatches_to_handler(self):
        """Test the registered handler receives the event"""
        bus = EventBus()
        handler = AsyncMock(return_value={"ok": True})
        bus.register(WeeklySummaryRequested, handler)

        event = WeeklySummaryRequested(to_email=None)
        result = await bus.emit(event)

        handler.assert_awaited_once_with(event)
        assert result.success is True
        assert result.workflow == "WeeklySummaryRequested"
        assert result.data == {"ok": True}

    @pytest.mark.asyncio
    async def test_missing_handler(self):
        """Test an unregistered event yields a failed result"""
        result = await EventBus().emit(WeeklySummaryRequested())

        assert result.success is False
        assert "No workflow registered" in result.error

    @pytest.mark.asyncio
    async def test_handler_failure_is_captured(self):
        """Test a raising handler yields a failed result instead of raising"""
        bus = EventBus()
        bus.register(WeeklySummaryRequested, AsyncMock(side_effect=RuntimeError("smtp down")))

        result = await bus.emit(WeeklySummaryRequested())

        assert result.success is False
        assert result.error == "smtp down"

    def test_registered_events(self):
        """Test build_event_bus wires every lifecycle event"""
        bus = build_event_bus(make_workflows(InMemoryStore()))

        assert sorted(bus.registered_events()) == [
            "ApplicationCreated",
            "StatusUpdated",
            "WeeklySummaryRequested",
        ]


class TestApplicationWorkflows:
    """Test created and status-updated workflows"""

    @pytest.mark.asyncio
    async def test_application_created(self):
        """Test the created workflow reports the application ID"""
        record = make_record()
        bus = build_event_bus(make_workflows(InMemoryStore([record])))

        result = await bus.emit(ApplicationCreated(application=record))

        assert result.success is True
        assert result.data["application_id"] == record.id

    @pytest.mark.asyncio
    async def test_status_updated_response_time(self):
        """Test whole days since applying are reported"""
        record = make_record("Interview", days_ago=9.7, company="Globex", role="SRE")
        bus = build_event_bus(make_workflows(InMemoryStore([record])))

        result = await bus.emit(StatusUpdated(
            application_id=record.id,
            old_status="Applied",
            new_status="Interview",
        ))

        assert result.success is True
        assert result.data["response_time_days"] == 9
        assert result.data["old_status"] == "Applied"
        assert result.data["new_status"] == "Interview"
        assert result.data["company"] == "Globex"
        assert result.data["role"] == "SRE"

    @pytest.mark.asyncio
    async def test_status_updated_missing_application(self):
        """Test an unknown ID fails the workflow"""
        bus = build_event_bus(make_workflows(InMemoryStore()))

        result = await bus.emit(StatusUpdated(application_id=42, old_status="Applied", new_status="Offer"))

        assert result.success is False
        assert result.error == "Application with ID 42 not found"


class TestWeeklySummaryWorkflow:
    """Test the weekly summary workflow"""

    @pytest.mark.asyncio
    async def test_without_recipient_returns_insights(self, store):
        """Test the report is returned when no email is requested"""
        email_service = Mock()
        email_service.send_weekly_summary = AsyncMock()
        bus = build_event_bus(make_workflows(store, email_service))

        result = await bus.emit(WeeklySummaryRequested())

        assert result.success is True
        assert result.data["insights_generated"] is True
        assert result.data["email_sent"] is False
        assert "COMPREHENSIVE JOB APPLICATION INSIGHTS" in result.data["insights"]["narrative"]
        email_service.send_weekly_summary.assert_not_awaited()
        assert store.fetch_count == 1

    @pytest.mark.asyncio
    async def test_with_recipient_sends_email(self, store):
        """Test the report is emailed to the recipient"""
        email_service = Mock()
        email_service.send_weekly_summary = AsyncMock(return_value=EmailResult(
            success=True,
            message="Weekly summary email sent successfully",
            message_id="<abc@example.com>",
        ))
        bus = build_event_bus(make_workflows(store, email_service))

        result = await bus.emit(WeeklySummaryRequested(to_email="me@example.com"))

        assert result.success is True
        assert result.data["email_sent"] is True
        assert result.data["email_result"]["message_id"] == "<abc@example.com>"

        to_email, insights = email_service.send_weekly_summary.await_args.args
        assert to_email == "me@example.com"
        assert insights.generated_at == NOW

    @pytest.mark.asyncio
    async def test_unconfigured_email(self, store):
        """Test an unconfigured mailer still completes the workflow"""
        email_service = Mock()
        email_service.send_weekly_summary = AsyncMock(return_value=EmailResult(
            success=False,
            message="Email not configured",
            logged=True,
        ))
        bus = build_event_bus(make_workflows(store, email_service))

        result = await bus.emit(WeeklySummaryRequested(to_email="me@example.com"))

        assert result.success is True
        assert result.data["email_sent"] is False
        assert result.data["email_result"]["logged"] is True

    @pytest.mark.asyncio
    async def test_storage_failure(self):
        """Test a storage failure fails the workflow"""
        store = UnavailableStore()
        workflows = Workflows(store=store, insight_service=InsightService(store))
        bus = build_event_bus(workflows)

        result = await bus.emit(WeeklySummaryRequested())

        assert result.success is False
        assert "database is locked" in result.error

    @pytest.mark.asyncio
    async def test_clock_drives_response_times(self):
        """Test the workflow clock is the reference time for the report"""
        store = InMemoryStore([make_record("Interview", days_ago=0)])
        bus = build_event_bus(make_workflows(store, now=NOW + timedelta(days=12)))

        result = await bus.emit(WeeklySummaryRequested())

        averages = result.data["insights"]["detailed"]["response_time"]["averages"]
        assert averages == {"Interview": 12}
