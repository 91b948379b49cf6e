"""Unit Tests for SummaryEmailService"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from config.settings import Settings
from job_tracker.insights import compute_comprehensive_insights
from job_tracker.ui.api.services.email_service import SummaryEmailService

from conftest import NOW, make_record


def make_settings(**overrides) -> Settings:
    values = {
        "email_service": "gmail",
        "email_user": None,
        "email_password": None,
        "email_from": "tracker@example.com",
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def insights(mixed_records):
    return compute_comprehensive_insights(mixed_records, now=NOW)


@pytest.fixture
def configured():
    return SummaryEmailService(make_settings(email_user="me@gmail.com", email_password="app-password"))


class TestConfiguration:
    """Test configuration detection"""

    def test_unconfigured_without_credentials(self):
        """Test missing credentials mean not configured"""
        assert SummaryEmailService(make_settings()).is_configured is False

    def test_configured_with_credentials(self, configured):
        """Test credentials plus a known service mean configured"""
        assert configured.is_configured is True
        assert configured.settings.email_hostname == "smtp.gmail.com"

    def test_explicit_host_wins(self):
        """Test EMAIL_HOST overrides the service shortcut"""
        settings = make_settings(email_host="mail.example.com", email_service="outlook")

        assert settings.email_hostname == "mail.example.com"

    def test_unknown_service_has_no_host(self):
        """Test an unknown service name leaves the host unset"""
        service = SummaryEmailService(make_settings(
            email_service="carrier-pigeon", email_user="me", email_password="pw"
        ))

        assert service.settings.email_hostname is None
        assert service.is_configured is False


class TestRendering:
    """Test summary rendering"""

    def test_text_strips_emphasis(self, configured, insights):
        """Test the plain body drops markdown bold markers"""
        text = configured.render_text(insights)

        assert "**" not in text
        assert "COMPREHENSIVE JOB APPLICATION INSIGHTS" in text

    def test_html_highlights_findings_and_recommendations(self, configured, insights):
        """Test findings and recommendations get their own blocks"""
        body = configured.render_html(insights)

        assert '<div class="key-finding">✅ Your best application source is Referral' in body
        assert '<div class="recommendation">📝 Review and update low-performing resume versions.</div>' in body
        assert '<div class="section-title">🔍 Key Findings:</div>' in body

    def test_html_statistics(self, configured, insights):
        """Test the statistics overview lists every group"""
        body = configured.render_html(insights)

        assert "<li>LinkedIn: 67% rejection rate (33% success)</li>" in body
        assert "<li>Resume 2.0: 75% success</li>" in body
        assert "<li>Offer: 20 days average</li>" in body
        assert "Your Weekly Summary - 2025-06-01" in body

    def test_html_escapes_user_text(self, configured):
        """Test company-supplied strings cannot inject markup"""
        report = compute_comprehensive_insights(
            [make_record("Rejected", source="<script>alert(1)</script>")], now=NOW
        )

        body = configured.render_html(report)

        assert "<script>" not in body
        assert "&lt;script&gt;" in body

    def test_build_message(self, configured, insights):
        """Test headers and both alternative parts"""
        message = configured.build_message("me@example.com", insights)

        assert message["To"] == "me@example.com"
        assert message["Subject"] == "Your Weekly Job Application Summary - 2025-06-01"
        assert "tracker@example.com" in message["From"]
        assert message["Message-ID"].endswith("@example.com>")
        assert [p.get_content_type() for p in message.get_payload()] == ["text/plain", "text/html"]


class TestSending:
    """Test summary delivery"""

    @pytest.mark.asyncio
    async def test_unconfigured_logs_instead(self, insights):
        """Test an unconfigured service logs the narrative and never connects"""
        service = SummaryEmailService(make_settings())

        with patch("job_tracker.ui.api.services.email_service.aiosmtplib.send", new_callable=AsyncMock) as send:
            result = await service.send_weekly_summary("me@example.com", insights)

        send.assert_not_awaited()
        assert result.success is False
        assert result.logged is True

    @pytest.mark.asyncio
    async def test_send_success(self, configured, insights):
        """Test a successful send reports the message ID"""
        with patch("job_tracker.ui.api.services.email_service.aiosmtplib.send", new_callable=AsyncMock) as send:
            result = await configured.send_weekly_summary("me@example.com", insights)

        assert result.success is True
        assert result.message_id is not None

        kwargs = send.await_args.kwargs
        assert kwargs["hostname"] == "smtp.gmail.com"
        assert kwargs["port"] == 587
        assert kwargs["start_tls"] is True
        assert kwargs["use_tls"] is False
        assert kwargs["username"] == "me@gmail.com"

    @pytest.mark.asyncio
    async def test_secure_port_uses_direct_tls(self, insights):
        """Test EMAIL_SECURE switches from STARTTLS to direct TLS"""
        service = SummaryEmailService(make_settings(
            email_user="me", email_password="pw", email_port=465, email_secure=True
        ))

        with patch("job_tracker.ui.api.services.email_service.aiosmtplib.send", new_callable=AsyncMock) as send:
            await service.send_weekly_summary("me@example.com", insights)

        kwargs = send.await_args.kwargs
        assert kwargs["use_tls"] is True
        assert kwargs["start_tls"] is False
        assert kwargs["port"] == 465

    @pytest.mark.asyncio
    async def test_send_failure(self, configured, insights):
        """Test SMTP errors become a failed result"""
        with patch(
            "job_tracker.ui.api.services.email_service.aiosmtplib.send",
            new_callable=AsyncMock,
            side_effect=ConnectionRefusedError("connection refused"),
        ):
            result = await configured.send_weekly_summary("me@example.com", insights)

        assert result.success is False
        assert "connection refused" in result.error


class TestVerification:
    """Test SMTP credential verification"""

    @pytest.mark.asyncio
    async def test_verify_unconfigured(self):
        """Test verification fails fast without credentials"""
        result = await SummaryEmailService(make_settings()).verify_configuration()

        assert result.success is False
        assert "EMAIL_USER" in result.message

    @pytest.mark.asyncio
    async def test_verify_logs_in(self, configured):
        """Test verification connects and logs in"""
        smtp = MagicMock()
        smtp.__aenter__ = AsyncMock(return_value=smtp)
        smtp.__aexit__ = AsyncMock(return_value=False)
        smtp.login = AsyncMock()

        with patch("job_tracker.ui.api.services.email_service.aiosmtplib.SMTP", return_value=smtp):
            result = await configured.verify_configuration()

        assert result.success is True
        smtp.login.assert_awaited_once_with("me@gmail.com", "app-password")

    @pytest.mark.asyncio
    async def test_verify_bad_credentials(self, configured):
        """Test a rejected login is reported"""
        smtp = MagicMock()
        smtp.__aenter__ = AsyncMock(return_value=smtp)
        smtp.__aexit__ = AsyncMock(return_value=False)
        smtp.login = AsyncMock(side_effect=Exception("535 authentication failed"))

        with patch("job_tracker.ui.api.services.email_service.aiosmtplib.SMTP", return_value=smtp):
            result = await configured.verify_configuration()

        assert result.success is False
        assert "535" in result.error
