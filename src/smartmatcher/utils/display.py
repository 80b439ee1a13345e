"""
Display utilities for smartmatcher.

This module renders job descriptions, consultant profiles, matches and
dashboard counters with rich.
"""

from typing import Dict, List, Optional, Union

from rich.columns import Columns
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.consultant import Availability, ConsultantProfile
from ..models.job import JobDescription
from ..models.match import Match
from ..models.workflow import humanize_step

STATUS_STYLES = {
    "Completed": "green",
    "Matches Found": "blue",
    "In Progress": "yellow",
    "Pending": "dim",
}

AVAILABILITY_STYLES = {
    Availability.AVAILABLE: "green",
    Availability.BUSY: "yellow",
    Availability.UNAVAILABLE: "red",
}

TIER_STYLES = {"high": "bold green", "good": "yellow", "fair": "red"}


def _truncate(value: Optional[str], width: int) -> str:
    value = value or ""
    return value[:width] + ("..." if len(value) > width else "")


def skill_badges(skills: List[str]) -> Text:
    text = Text()
    for i, skill in enumerate(skills):
        if i:
            text.append(" ")
        text.append(f" {skill} ", style="black on cyan")
    return text


def job_card(job: JobDescription) -> Panel:
    """Summary card: title, status, department/location and a description excerpt."""
    status = job.status_label
    header = Text(job.title, style="bold")
    header.append("  ")
    header.append(status, style=STATUS_STYLES.get(status, "dim"))

    body = Group(
        header,
        Text(f"{job.department} · {job.location}", style="dim"),
        Text(_truncate(job.description, 150)),
        skill_badges(job.skills),
    )
    subtitle = f"Created {job.created_date}" if job.created_date else None
    return Panel(body, title=escape(f"#{job.id}"), subtitle=subtitle, expand=True)


def consultant_card(consultant: ConsultantProfile) -> Panel:
    header = Text(f"[{consultant.initials}] ", style="bold magenta")
    header.append(consultant.name, style="bold")
    header.append("  ")
    header.append(
        str(consultant.availability),
        style=AVAILABILITY_STYLES.get(consultant.availability, "dim"),
    )

    lines = [header, Text(consultant.email, style="dim")]
    if consultant.location:
        lines.append(Text(consultant.location))
    if consultant.experience is not None:
        lines.append(Text(f"{consultant.experience} years experience"))
    lines.append(skill_badges(consultant.skills))
    return Panel(Group(*lines), title=escape(f"#{consultant.id}"), expand=True)


def display_job_cards(jobs: List[JobDescription], console: Console, empty_message: str) -> None:
    if not jobs:
        console.print(Text(empty_message, style="yellow"))
        return
    console.print(Columns([job_card(job) for job in jobs], equal=True, expand=True))


def display_consultant_cards(
    consultants: List[ConsultantProfile], console: Console, empty_message: str
) -> None:
    if not consultants:
        console.print(Text(empty_message, style="yellow"))
        return
    console.print(Columns([consultant_card(c) for c in consultants], equal=True, expand=True))


def display_jobs_table(
    jobs: List[JobDescription],
    console: Console,
    title: str = "Job Descriptions",
    empty_message: str = "No job descriptions yet",
) -> None:
    """Display job descriptions in a formatted table.

    Args:
        jobs: Job descriptions to show
        console: Rich console instance for output
        title: Table title
        empty_message: Printed instead of an empty table
    """
    if not jobs:
        console.print(Text(empty_message, style="yellow"))
        return

    table = Table(title=title, show_lines=True)
    table.add_column("ID", style="dim", width=5)
    table.add_column("Title", style="cyan")
    table.add_column("Department", style="green")
    table.add_column("Location", style="yellow")
    table.add_column("Skills", style="blue")
    table.add_column("Status", style="magenta")
    table.add_column("Created", style="purple")

    for job in jobs:
        table.add_row(
            str(job.id),
            Text(_truncate(job.title, 50)),
            Text(_truncate(job.department, 30)),
            Text(_truncate(job.location, 20)),
            Text(_truncate(", ".join(job.skills), 40)),
            job.status_label,
            job.created_date,
        )

    console.print(table)


def display_consultants_table(
    consultants: List[ConsultantProfile],
    console: Console,
    title: str = "Consultants",
    empty_message: str = "No consultants yet",
) -> None:
    if not consultants:
        console.print(Text(empty_message, style="yellow"))
        return

    table = Table(title=title, show_lines=True)
    table.add_column("ID", style="dim", width=5)
    table.add_column("Name", style="cyan")
    table.add_column("Email", style="green")
    table.add_column("Location", style="yellow")
    table.add_column("Experience", justify="right")
    table.add_column("Skills", style="blue")
    table.add_column("Availability")

    for consultant in consultants:
        style = AVAILABILITY_STYLES.get(consultant.availability, "dim")
        table.add_row(
            str(consultant.id),
            Text(_truncate(consultant.name, 40)),
            Text(consultant.email),
            Text(_truncate(consultant.location, 20)),
            f"{consultant.experience} yrs" if consultant.experience is not None else "",
            Text(_truncate(", ".join(consultant.skills), 40)),
            f"[{style}]{consultant.availability}[/{style}]",
        )

    console.print(table)


def display_consultant_details(consultant: ConsultantProfile, console: Console) -> None:
    console.rule(escape(f"{consultant.name} ({consultant.initials})"))
    console.print(f"[bold]Email:[/bold] {escape(consultant.email)}")
    if consultant.phone:
        console.print(f"[bold]Phone:[/bold] {escape(consultant.phone)}")
    if consultant.location:
        console.print(f"[bold]Location:[/bold] {escape(consultant.location)}")
    if consultant.experience is not None:
        console.print(f"[bold]Experience:[/bold] {consultant.experience} years")
    console.print(f"[bold]Availability:[/bold] {consultant.availability}")
    if consultant.project:
        console.print("\n[bold]Projects:[/bold]")
        console.print(Text(consultant.project))
    console.print("\n[bold]Skills:[/bold]")
    console.print(skill_badges(consultant.skills))
    console.rule()


def match_panel(match: Match) -> Panel:
    profile = match.profile
    name = profile.name if profile else "Unknown"
    score = Text(f"{match.score_percent}%", style=TIER_STYLES[match.score_tier])

    header = Text(name, style="bold")
    header.append("  ")
    header.append(score)

    lines = [header]
    if profile is not None:
        details = []
        if profile.experience is not None:
            details.append(f"{profile.experience:g} years")
        if profile.location:
            details.append(profile.location)
        if profile.availability:
            details.append(profile.availability)
        if details:
            lines.append(Text(" · ".join(details), style="dim"))
        lines.append(skill_badges(profile.skills))
    title = f"Rank {match.rank}" if match.rank is not None else None
    return Panel(Group(*lines), title=title, expand=True)


def display_job_details(view, console: Console) -> None:
    """Render an open :class:`~smartmatcher.views.job_details.JobDetailsView`."""
    job = view.job
    if job is None:
        return

    console.rule(Text(job.title, style="bold"))
    console.print(f"[bold]Department:[/bold] {escape(job.department)}")
    console.print(f"[bold]Location:[/bold] {escape(job.location)}")
    console.print(f"[bold]Experience:[/bold] {escape(job.experience)}")
    console.print()
    console.print(Text(job.description))
    console.print()
    console.print(skill_badges(job.skills))

    console.print("\n[bold]Top Matches[/bold]")
    message = view.matches_message()
    if message:
        console.print(f"[dim]{message}[/dim]")
    else:
        for match in view.top_matches:
            console.print(match_panel(match))

    console.print("\n[bold]Workflow Status[/bold]")
    message = view.status_message()
    if message:
        console.print(f"[dim]{message}[/dim]")
    else:
        for step, done in view.workflow_status.ordered_steps():
            marker = "[green]✓[/green]" if done else "[dim]○[/dim]"
            console.print(f"  {marker} {escape(humanize_step(step))}")
    console.rule()


def display_dashboard(
    values: Dict[str, Union[int, str]], console: Console, title: str = "Dashboard"
) -> None:
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column("Stat", style="bold")
    table.add_column("Value", justify="right", style="cyan")
    for label, value in values.items():
        table.add_row(label, str(value))
    console.print(Panel(table, expand=False))
