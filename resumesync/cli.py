"""
resumesync Command Line Interface

Provides CLI commands for database setup, job listing queries, resume
inspection and embedding document previews.
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="resumesync",
    help="Resume/job data sync and semantic embedding pipeline",
    add_completion=False,
)
console = Console()


def _require_connection() -> None:
    from resumesync.data.database import get_database_manager

    if not get_database_manager().check_sync_connection():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)


def _truncate(value: str, width: int) -> str:
    return value[:width] + "..." if len(value) > width else value


@app.callback()
def main():
    """Configure logging before any command runs."""
    from resumesync.utils.logger import setup_logging

    setup_logging()


@app.command()
def version():
    """Show application version."""
    from resumesync import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show configuration."""
    from resumesync.utils.config import get_settings

    settings = get_settings()

    table = Table(title="resumesync Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Embedding Provider", settings.ml.embedding_provider)
    table.add_row("Embedding Model", settings.ml.embedding_model)
    table.add_row("Embedding Dimension", str(settings.ml.embedding_dimension))
    table.add_row("Save Policy", settings.persistence.save_policy)
    table.add_row("Page Size", str(settings.jobs.default_page_size))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Create the indexes used by resume and job queries."""
    from resumesync.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    try:
        db_manager = get_database_manager()

        console.print("  Checking database connection...")
        if not db_manager.check_sync_connection():
            console.print("[red]Error: Could not connect to MongoDB.[/red]")
            console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
            raise typer.Exit(1)

        console.print("  [green]✓[/green] Connected to MongoDB")

        console.print("  Creating indexes...")
        asyncio.run(db_manager.ensure_indexes())
        console.print("  [green]✓[/green] Indexes created")

        console.print("\n[green]Database initialized successfully![/green]")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error initializing database: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def list_jobs(
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Search title, company and description"),
    location: Optional[list[str]] = typer.Option(None, "--location", "-L", help="Location (repeatable)"),
    employment_type: Optional[list[str]] = typer.Option(None, "--type", "-t", help="Employment type (repeatable)"),
    experience_level: Optional[list[str]] = typer.Option(None, "--level", help="Experience level (repeatable)"),
    min_salary: Optional[float] = typer.Option(None, "--min-salary", help="Minimum of the salary range"),
    max_salary: Optional[float] = typer.Option(None, "--max-salary", help="Maximum of the salary range"),
    language: Optional[str] = typer.Option(None, "--language", help="Posting language (e.g. en, tr)"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=1, help="Jobs per page"),
):
    """List active jobs matching the filters."""
    from resumesync.data.models import JobFilters, PaginationParams
    from resumesync.data.repositories import get_job_repository
    from resumesync.utils.config import get_settings

    _require_connection()

    filters = JobFilters(
        search=search,
        locations=location or [],
        employment_types=employment_type or [],
        experience_levels=experience_level or [],
        min_salary=min_salary,
        max_salary=max_salary,
        language=language,
    )
    pagination = PaginationParams(page=page, limit=limit or get_settings().jobs.default_page_size)

    result = asyncio.run(get_job_repository().fetch_jobs(filters, pagination))

    if not result.jobs:
        console.print("[yellow]No jobs found.[/yellow]")
        raise typer.Exit(0)

    table = Table(
        title=f"Jobs (page {result.page} of {result.total_pages}, {result.total_count} total)"
    )
    table.add_column("ID", style="dim", width=24)
    table.add_column("Title", style="cyan")
    table.add_column("Company")
    table.add_column("Location")
    table.add_column("Type", justify="center")
    table.add_column("Salary", justify="right")

    for job in result.jobs:
        if job.min_salary is not None or job.max_salary is not None:
            salary = f"{job.min_salary or 0:,.0f}-{job.max_salary or 0:,.0f} {job.currency or ''}".strip()
        else:
            salary = "-"
        table.add_row(
            job.job_id,
            _truncate(job.job_title, 40),
            _truncate(job.company_name, 20),
            _truncate(job.location, 25),
            job.employment_type or "-",
            salary,
        )

    console.print(table)


@app.command()
def job_filters():
    """Show the filter values available across active jobs."""
    from resumesync.data.repositories import get_job_repository

    _require_connection()
    job_repo = get_job_repository()

    async def collect():
        return await asyncio.gather(
            job_repo.get_job_locations(),
            job_repo.get_employment_types(),
            job_repo.get_experience_levels(),
            job_repo.get_salary_range(),
        )

    locations, employment_types, experience_levels, salary = asyncio.run(collect())

    console.print("\n[bold cyan]Job Filters[/bold cyan]")
    console.print(f"[dim]{'─' * 50}[/dim]")
    console.print(f"[bold]Locations:[/bold] {', '.join(locations) or 'None'}")
    console.print(f"[bold]Employment Types:[/bold] {', '.join(employment_types) or 'None'}")
    console.print(f"[bold]Experience Levels:[/bold] {', '.join(experience_levels) or 'None'}")
    console.print(f"[bold]Salary Range:[/bold] {salary.min:,.0f} - {salary.max:,.0f}")


@app.command()
def show_resume(
    resume_id: str = typer.Argument(..., help="Resume ID to display"),
):
    """Show a stored resume section by section."""
    from resumesync.data.repositories import get_resume_repository

    _require_connection()

    resume = asyncio.run(get_resume_repository().fetch(resume_id))
    if resume is None:
        console.print(f"[red]Resume not found: {resume_id}[/red]")
        raise typer.Exit(1)

    info = resume.personal_info
    console.print(f"\n[bold cyan]Resume Details[/bold cyan]")
    console.print(f"[dim]{'─' * 50}[/dim]")
    console.print(f"[bold]ID:[/bold] {resume.resume_id}")
    console.print(f"[bold]Title:[/bold] {resume.title}")
    console.print(f"[bold]Template:[/bold] {resume.template_id}")
    console.print(f"[bold]Primary:[/bold] {'yes' if resume.is_primary else 'no'}")
    console.print(f"[bold]Name:[/bold] {info.full_name or 'N/A'}")
    if info.title:
        console.print(f"[bold]Headline:[/bold] {info.title}")
    console.print(f"[bold]Embedding:[/bold] {'stored' if resume.embedding else 'missing'}")

    table = Table(title="Sections")
    table.add_column("Section", style="cyan")
    table.add_column("Items", justify="right")
    for label, items in (
        ("Experiences", resume.experiences),
        ("Education", resume.education),
        ("Skills", resume.skills),
        ("Projects", resume.projects),
        ("Certificates", resume.certificates),
        ("Languages", resume.languages),
        ("Social Media", resume.social_media),
        ("Interests", resume.interests),
    ):
        table.add_row(label, str(len(items)))
    console.print(table)

    if resume.skills:
        console.print(f"\n[bold]Skills:[/bold] {', '.join(s.name for s in resume.skills)}")
    if resume.experiences:
        console.print(f"\n[bold]Experience ({len(resume.experiences)} positions):[/bold]")
        for exp in resume.experiences[:3]:
            console.print(f"  • {exp.position} at {exp.company}")


@app.command()
def save_resume(
    path: Path = typer.Argument(..., help="Path to a resume JSON file"),
    user_id: str = typer.Option(..., "--user", "-u", help="Owner of the resume"),
):
    """Save a resume from a JSON file and embed it."""
    from pydantic import ValidationError

    from resumesync.data.models import ResumeData
    from resumesync.data.repositories import get_resume_repository

    if not path.exists():
        console.print(f"[red]Error: Path does not exist: {path}[/red]")
        raise typer.Exit(1)

    try:
        resume = ResumeData.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        console.print(f"[red]Invalid resume file: {e}[/red]")
        raise typer.Exit(1)

    _require_connection()
    result = asyncio.run(get_resume_repository().save(resume, user_id))

    if not result.success:
        console.print(f"[red]Error saving resume: {result.error}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Saved resume [cyan]{result.resume_id}[/cyan]")
    for section, error in result.section_errors.items():
        console.print(f"  [yellow]⚠ {section}:[/yellow] {error}")
    if result.embedding_error:
        console.print(f"  [yellow]⚠ embedding:[/yellow] {result.embedding_error}")


@app.command()
def format_resume(
    path: Path = typer.Argument(..., help="Path to a resume JSON file"),
):
    """Print the embedding document for a resume JSON file."""
    from pydantic import ValidationError

    from resumesync.data.models import ResumeData
    from resumesync.ml.embeddings import format_resume as render

    if not path.exists():
        console.print(f"[red]Error: Path does not exist: {path}[/red]")
        raise typer.Exit(1)

    try:
        resume = ResumeData.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        console.print(f"[red]Invalid resume file: {e}[/red]")
        raise typer.Exit(1)

    console.print(render(resume), markup=False, highlight=False)


if __name__ == "__main__":
    app()
