"""
Command-Line Interface for the Job Application Tracker

Usage:
    python -m job_tracker.ui.cli list
    python -m job_tracker.ui.cli add "Acme Corp" "Backend Engineer" --source LinkedIn --resume 2.1
    python -m job_tracker.ui.cli status 3 Interview
    python -m job_tracker.ui.cli insights
    python -m job_tracker.ui.cli weekly-summary --to me@example.com
"""

import asyncio
import logging
import sys
from datetime import datetime
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from config.settings import settings
from job_tracker.exceptions import ApplicationNotFoundError, JobTrackerError
from job_tracker.insights import ApplicationStatus
from job_tracker.ui.api.dependencies import get_application_service, get_insight_service
from job_tracker.ui.api.models.requests import ApplicationCreate

app = typer.Typer(
    name="job-tracker",
    help="Track job applications and get insights on what is working",
    add_completion=False
)
console = Console()


@app.callback()
def configure_logging(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show workflow logs")
):
    """Job application tracker"""
    # Workflow logs go to stderr and stay quiet unless asked for
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    if not verbose:
        level = max(level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _fail(message: str):
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)


def _status_style(status: str) -> str:
    return {
        "Applied": "white",
        "Interview": "cyan",
        "Offer": "green",
        "Rejected": "red",
        "Withdrawn": "dim",
    }.get(status, "white")


# ============== Applications ==============

@app.command("list")
def list_applications():
    """List tracked applications, newest first"""
    try:
        applications = get_application_service().list_applications()
    except JobTrackerError as e:
        _fail(f"Error: {e}")

    if not applications:
        console.print("[yellow]No applications tracked yet.[/yellow]")
        return

    table = Table(title=f"Applications ({len(applications)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Company", style="cyan")
    table.add_column("Role", style="white")
    table.add_column("Status")
    table.add_column("Source", style="magenta")
    table.add_column("Resume", style="yellow")
    table.add_column("Applied", style="white")

    for a in applications:
        style = _status_style(a.status)
        table.add_row(
            str(a.id),
            a.company,
            a.role,
            f"[{style}]{a.status}[/{style}]",
            a.source,
            a.resume_version,
            a.applied_at.strftime("%Y-%m-%d"),
        )

    console.print(table)


@app.command()
def add(
    company: str = typer.Argument(..., help="Company name"),
    role: str = typer.Argument(..., help="Role or position"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Where the posting was found"),
    resume: Optional[str] = typer.Option(None, "--resume", "-r", help="Resume version used"),
    status: ApplicationStatus = typer.Option(ApplicationStatus.APPLIED, "--status", help="Initial status"),
    applied: Optional[datetime] = typer.Option(None, "--applied", help="Application date (YYYY-MM-DD)"),
):
    """Track a new application"""
    fields = {"company": company, "role": role, "status": status, "applied_at": applied}
    if source:
        fields["source"] = source
    if resume:
        fields["resume_version"] = resume

    try:
        request = ApplicationCreate(**fields)
        application = asyncio.run(get_application_service().create_application(request))
    except ValidationError as e:
        _fail(f"Invalid application: {e}")
    except JobTrackerError as e:
        _fail(f"Error: {e}")

    console.print(
        f"[green]✓ Tracking application {application.id}: "
        f"{application.company} - {application.role}[/green]"
    )


@app.command()
def status(
    app_id: int = typer.Argument(..., help="Application ID"),
    new_status: ApplicationStatus = typer.Argument(..., help="New status"),
):
    """Change the status of an application"""
    service = get_application_service()
    try:
        old_status = service.get_application(app_id).status
        application = asyncio.run(service.update_status(app_id, new_status.value))
    except ApplicationNotFoundError as e:
        _fail(str(e))
    except JobTrackerError as e:
        _fail(f"Error: {e}")

    console.print(
        f"[green]✓ {application.company} - {application.role}: "
        f"{old_status} → {application.status}[/green]"
    )


@app.command()
def delete(
    app_id: int = typer.Argument(..., help="Application ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Stop tracking an application"""
    service = get_application_service()
    try:
        application = service.get_application(app_id)
        if not yes and not typer.confirm(f"Delete {application.company} - {application.role}?"):
            raise typer.Abort()
        service.delete_application(app_id)
    except ApplicationNotFoundError as e:
        _fail(str(e))
    except JobTrackerError as e:
        _fail(f"Error: {e}")

    console.print(f"[green]✓ Deleted application {app_id}[/green]")


# ============== Insights ==============

@app.command()
def insights():
    """Show the comprehensive insight report"""
    try:
        with console.status("[bold green]Analyzing applications..."):
            report = get_insight_service().get_comprehensive_insights()
    except JobTrackerError as e:
        _fail(f"Error: {e}")

    console.print(Panel(Markdown(report.narrative), title="Job Search Insights", border_style="blue"))


@app.command()
def sources():
    """Rejection rate by application source"""
    try:
        result = get_insight_service().get_source_rejection_insights()
    except JobTrackerError as e:
        _fail(f"Error: {e}")

    if not result.insights:
        console.print(f"[yellow]{result.narrative}[/yellow]")
        return

    table = Table(title=f"Rejection Rate by Source ({result.total_applications} applications)")
    table.add_column("Source", style="cyan")
    table.add_column("Applications", justify="right")
    table.add_column("Rejected", justify="right", style="red")
    table.add_column("Rejection %", justify="right", style="red")
    table.add_column("Success %", justify="right", style="green")

    for s in result.insights:
        table.add_row(
            s.source,
            str(s.total_applications),
            str(s.rejection_count),
            str(s.rejection_rate),
            str(s.success_rate),
        )

    console.print(table)


@app.command()
def resumes():
    """Performance of each resume version"""
    try:
        result = get_insight_service().get_resume_version_insights()
    except JobTrackerError as e:
        _fail(f"Error: {e}")

    if not result.versions:
        console.print(f"[yellow]{result.narrative}[/yellow]")
        return

    table = Table(title="Resume Version Performance")
    table.add_column("Version", style="cyan")
    table.add_column("Applications", justify="right")
    table.add_column("Interview %", justify="right")
    table.add_column("Offer %", justify="right", style="green")
    table.add_column("Rejection %", justify="right", style="red")
    table.add_column("Success %", justify="right", style="green")

    best = result.best_version.version if result.best_version else None
    for v in result.versions:
        marker = " ★" if v.version == best else ""
        table.add_row(
            f"{v.version}{marker}",
            str(v.total_applications),
            str(v.interview_rate),
            str(v.offer_rate),
            str(v.rejection_rate),
            str(v.success_rate),
        )

    console.print(table)


@app.command("response-times")
def response_times():
    """Average days until each outcome"""
    try:
        result = get_insight_service().get_response_time_insights()
    except JobTrackerError as e:
        _fail(f"Error: {e}")

    if not result.averages:
        console.print(Markdown(result.narrative))
        return

    table = Table(title=f"Average Response Time ({result.completed_applications} completed applications)")
    table.add_column("Outcome", style="cyan")
    table.add_column("Average Days", justify="right")

    for status_name, days in result.averages.items():
        table.add_row(status_name, str(days))

    console.print(table)


@app.command("weekly-summary")
def weekly_summary(
    to: Optional[str] = typer.Option(None, "--to", "-t", help="Email the summary to this address"),
):
    """Generate the weekly summary and optionally email it"""
    service = get_application_service()

    with console.status("[bold green]Generating weekly summary..."):
        result = asyncio.run(service.request_weekly_summary(to))

    if not result.success:
        _fail(f"Weekly summary failed: {result.error}")

    if to:
        if result.data.get("email_sent"):
            console.print(f"[green]✓ Weekly summary sent to {to}[/green]")
        else:
            email_result = result.data.get("email_result", {})
            console.print(f"[yellow]Email not sent: {email_result.get('message')}[/yellow]")
        return

    narrative = result.data["insights"]["narrative"]
    console.print(Panel(Markdown(narrative), title="Weekly Summary", border_style="blue"))


# ============== Server ==============

@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Start the HTTP API"""
    import uvicorn
    from job_tracker.ui.api.config import get_settings

    api_settings = get_settings()
    uvicorn.run(
        "job_tracker.ui.api.main:app",
        host=host or api_settings.host,
        port=port or api_settings.port,
        reload=reload,
        log_level=api_settings.log_level,
    )


if __name__ == "__main__":
    app()
