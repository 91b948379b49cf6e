"""Email service for delivering weekly insight summaries"""

import html
import logging
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import List, Optional

import aiosmtplib
from pydantic import BaseModel

from config.settings import Settings
from job_tracker.insights.models import ComprehensiveInsights
from job_tracker.insights.narrative import (
    DETAILED_ANALYSIS_HEADER,
    KEY_FINDINGS_HEADER,
    RECOMMENDATIONS_HEADER,
)

logger = logging.getLogger(__name__)


class EmailResult(BaseModel):
    """Outcome of an email operation"""
    success: bool
    message: str
    message_id: Optional[str] = None
    logged: bool = False
    error: Optional[str] = None


class SummaryEmailService:
    """Renders comprehensive insights and sends them over SMTP"""

    STYLES = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background-color: #4F46E5; color: white; padding: 20px; text-align: center; border-radius: 8px 8px 0 0; }
    .content { background-color: #f8f9fa; padding: 20px; border-radius: 0 0 8px 8px; }
    .section { margin-bottom: 20px; }
    .section-title { color: #4F46E5; font-size: 18px; font-weight: bold; margin-bottom: 10px; }
    .stats { background-color: white; padding: 15px; border-radius: 6px; margin-bottom: 15px; }
    .key-finding { background-color: #e0f7fa; padding: 10px; border-left: 4px solid #4F46E5; margin-bottom: 10px; }
    .recommendation { background-color: #fff3e0; padding: 10px; border-left: 4px solid #FF9800; margin-bottom: 10px; }
    .footer { margin-top: 30px; font-size: 12px; color: #666; text-align: center; }
    """

    SECTION_HEADERS = (KEY_FINDINGS_HEADER, RECOMMENDATIONS_HEADER, DETAILED_ANALYSIS_HEADER)

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def is_configured(self) -> bool:
        """True when SMTP credentials are present"""
        return bool(
            self.settings.email_user
            and self.settings.email_password
            and self.settings.email_hostname
        )

    def _subject(self, when: datetime) -> str:
        return f"Your Weekly Job Application Summary - {when.strftime('%Y-%m-%d')}"

    # ============== Rendering ==============

    def render_text(self, insights: ComprehensiveInsights) -> str:
        """Plain text body, the narrative with markdown emphasis removed"""
        return insights.narrative.replace("**", "")

    def _render_narrative_lines(self, insights: ComprehensiveInsights) -> List[str]:
        findings = set(insights.key_findings)
        recommendations = set(insights.recommendations)

        parts = []
        for line in insights.narrative.split("\n"):
            text = html.escape(line.replace("**", ""))
            if line in self.SECTION_HEADERS:
                parts.append(f'<div class="section-title">{text}</div>')
            elif line in findings:
                parts.append(f'<div class="key-finding">{text}</div>')
            elif line in recommendations:
                parts.append(f'<div class="recommendation">{text}</div>')
            elif not line.strip():
                parts.append("<br>")
            else:
                parts.append(f"<p>{text}</p>")
        return parts

    def _render_statistics(self, insights: ComprehensiveInsights) -> str:
        detailed = insights.detailed

        source_items = "".join(
            f"<li>{html.escape(i.source)}: {i.rejection_rate}% rejection rate "
            f"({i.success_rate}% success)</li>"
            for i in detailed.source_rejection.insights
        )
        resume_items = "".join(
            f"<li>Resume {html.escape(v.version)}: {v.success_rate}% success</li>"
            for v in detailed.resume_performance.versions
        )
        response_items = "".join(
            f"<li>{html.escape(status)}: {days} days average</li>"
            for status, days in detailed.response_time.averages.items()
        )

        return f"""
      <div class="stats">
        <h3>Rejection Rates by Source</h3>
        <ul>{source_items}</ul>
      </div>
      <div class="stats">
        <h3>Resume Performance</h3>
        <ul>{resume_items}</ul>
      </div>
      <div class="stats">
        <h3>Response Times</h3>
        <ul>{response_items}</ul>
      </div>"""

    def render_html(self, insights: ComprehensiveInsights) -> str:
        """HTML email body for a comprehensive report"""
        when = insights.generated_at
        narrative = "".join(self._render_narrative_lines(insights))

        return f"""<!DOCTYPE html>
<html>
<head>
  <style>{self.STYLES}</style>
</head>
<body>
  <div class="header">
    <h1>📊 AI Job Application Tracker</h1>
    <p>Your Weekly Summary - {when.strftime('%Y-%m-%d')}</p>
  </div>
  <div class="content">
    <div class="section">
      {narrative}
    </div>
    <div class="section">
      <div class="section-title">📈 Statistics Overview</div>{self._render_statistics(insights)}
    </div>
    <div class="footer">
      <p>This is an automated weekly summary from your AI Job Application Tracker.</p>
      <p>&copy; {when.year} Job Tracker.</p>
    </div>
  </div>
</body>
</html>
"""

    def build_message(self, to_email: str, insights: ComprehensiveInsights) -> MIMEMultipart:
        """Assemble the multipart message for a summary"""
        message = MIMEMultipart("alternative")
        message["Subject"] = self._subject(insights.generated_at)
        message["From"] = f'"{self.settings.email_from_name}" <{self.settings.email_from}>'
        message["To"] = to_email
        message["Message-ID"] = make_msgid(domain=self.settings.email_from.rpartition("@")[2] or None)

        message.attach(MIMEText(self.render_text(insights), "plain"))
        message.attach(MIMEText(self.render_html(insights), "html"))
        return message

    # ============== Delivery ==============

    def _smtp_options(self) -> dict:
        # Direct TLS for port 465, STARTTLS otherwise
        return {
            "hostname": self.settings.email_hostname,
            "port": self.settings.email_port,
            "use_tls": self.settings.email_secure,
            "start_tls": not self.settings.email_secure,
            "username": self.settings.email_user,
            "password": self.settings.email_password,
            "timeout": self.settings.email_timeout,
        }

    async def send_weekly_summary(self, to_email: str, insights: ComprehensiveInsights) -> EmailResult:
        """Send a weekly summary, or log it when SMTP is not configured"""
        if not self.is_configured:
            logger.info("Email not configured. Logging weekly summary instead:")
            logger.info(insights.narrative)
            return EmailResult(
                success=False,
                message="Email not configured",
                logged=True,
            )

        try:
            message = self.build_message(to_email, insights)
            await aiosmtplib.send(message, **self._smtp_options())

            message_id = message.get("Message-ID")
            logger.info(f"Weekly summary email sent to {to_email}")
            return EmailResult(
                success=True,
                message="Weekly summary email sent successfully",
                message_id=message_id,
            )

        except Exception as e:
            logger.error(f"Error sending weekly summary email: {e}", exc_info=True)
            return EmailResult(
                success=False,
                message="Failed to send weekly summary email",
                error=str(e),
            )

    async def verify_configuration(self) -> EmailResult:
        """Connect and log in to the SMTP server without sending"""
        if not self.is_configured:
            return EmailResult(
                success=False,
                message="Email not configured. Set EMAIL_USER and EMAIL_PASSWORD environment variables.",
            )

        options = self._smtp_options()
        try:
            smtp = aiosmtplib.SMTP(
                hostname=options["hostname"],
                port=options["port"],
                use_tls=options["use_tls"],
                start_tls=options["start_tls"],
                timeout=options["timeout"],
            )
            async with smtp:
                await smtp.login(options["username"], options["password"])

            return EmailResult(
                success=True,
                message="Email configuration is valid and ready to use",
            )
        except Exception as e:
            logger.error(f"Email configuration test failed: {e}")
            return EmailResult(
                success=False,
                message="Email configuration test failed",
                error=str(e),
            )
