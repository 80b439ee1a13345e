"""Command line interface for smartmatcher."""

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from .config import AppConfig, load_config
from .exceptions import ConfigurationError, SmartMatcherError
from .forms import (
    ConsultantForm,
    FormResult,
    JobDescriptionForm,
    JobFileUploadForm,
    LoginForm,
    ResumeUploadForm,
    SignupForm,
)
from .models.consultant import Availability
from .services import AuthService, ConsultantService, JobService, MatchService
from .services.api import ApiClient
from .storage import LocalStorage
from .utils.display import (
    display_consultant_cards,
    display_consultant_details,
    display_consultants_table,
    display_dashboard,
    display_job_cards,
    display_job_details,
    display_jobs_table,
)
from .utils.logging_config import LoggingConfig
from .views import (
    ConsultantListView,
    DashboardView,
    JobDetailsView,
    JobListView,
    Notifier,
    QueryCache,
    dashboard_for_role,
)
from .views.dashboard import AR_DASHBOARD, RECRUITER_DASHBOARD
from .views.listing import ask_confirmation

logger = logging.getLogger(__name__)

console = Console()

Handler = Callable[["Session", argparse.Namespace], Awaitable[int]]


@dataclass
class Session:
    """Everything a command needs for one run against the backend."""

    api: ApiClient
    console: Console
    notifier: Notifier
    cache: QueryCache = field(default_factory=QueryCache)

    @property
    def auth(self) -> AuthService:
        return AuthService(self.api)

    @property
    def jobs(self) -> JobService:
        return JobService(self.api)

    @property
    def consultants(self) -> ConsultantService:
        return ConsultantService(self.api)

    @property
    def matches(self) -> MatchService:
        return MatchService(self.api)

    def job_list(self, args: argparse.Namespace) -> JobListView:
        return JobListView(self.cache, self.notifier, self.jobs, confirm=_confirm_for(args))

    def consultant_list(self, args: argparse.Namespace) -> ConsultantListView:
        return ConsultantListView(
            self.cache, self.notifier, self.consultants, confirm=_confirm_for(args)
        )


def _confirm_for(args: argparse.Namespace) -> Callable[[str], bool]:
    if getattr(args, "yes", False):
        return lambda prompt: True
    return ask_confirmation


def _report(result: FormResult, out: Console) -> int:
    if result.ok:
        return 0
    for name, message in result.errors.items():
        out.print(f"[red]{name}:[/red] {escape(message)}")
    return 1


# Authentication


async def cmd_login(session: Session, args: argparse.Namespace) -> int:
    form = LoginForm(session.auth, session.notifier)
    form.email = args.email or Prompt.ask("Email")
    form.password = args.password or Prompt.ask("Password", password=True)
    result = await form.submit()
    if not result.ok:
        return _report(result, session.console)
    logger.debug(f"Routing to the '{result.value}' view")
    return await cmd_dashboard(session, args)


async def cmd_signup(session: Session, args: argparse.Namespace) -> int:
    form = SignupForm(session.auth, session.notifier)
    form.name = args.name or Prompt.ask("Name")
    form.email = args.email or Prompt.ask("Email")
    form.password = args.password or Prompt.ask("Password", password=True)
    form.confirm_password = args.confirm_password or Prompt.ask(
        "Confirm password", password=True
    )
    form.role = args.role or Prompt.ask(
        "Role (1 = Recruiter, 2 = AR)", choices=["1", "2"]
    )
    return _report(await form.submit(), session.console)


async def cmd_logout(session: Session, args: argparse.Namespace) -> int:
    session.auth.logout()
    session.console.print("Logged out.")
    return 0


async def cmd_whoami(session: Session, args: argparse.Namespace) -> int:
    auth = session.auth
    if not auth.is_authenticated():
        session.console.print("[yellow]Not logged in.[/yellow]")
        return 1
    role = auth.current_role()
    role_name = role.name.title() if role is not None else "Unknown role"
    session.console.print(escape(f"{auth.current_user()} ({role_name})"))
    return 0


async def cmd_dashboard(session: Session, args: argparse.Namespace) -> int:
    target = dashboard_for_role(session.auth.current_role())
    jobs_view = session.job_list(args)

    if target == RECRUITER_DASHBOARD:
        view = DashboardView(jobs_view, session.consultant_list(args))
        title = "Recruiter Dashboard"
    elif target == AR_DASHBOARD:
        view = DashboardView(jobs_view)
        title = "AR Dashboard"
    else:
        jobs = await jobs_view.load()
        display_job_cards(jobs, session.console, jobs_view.empty_state())
        return 0

    stats = await view.load()
    display_dashboard(view.display_values(stats), session.console, title=title)
    display_job_cards(jobs_view.search(), session.console, jobs_view.empty_state())
    return 0


# Job descriptions


def _job_fields(args: argparse.Namespace) -> Dict[str, Any]:
    fields = {
        name: getattr(args, name)
        for name in ("title", "department", "location", "description", "experience")
        if getattr(args, name) is not None
    }
    if args.skills:
        fields["skills"] = args.skills
    return fields


async def cmd_jobs_list(session: Session, args: argparse.Namespace) -> int:
    view = session.job_list(args)
    await view.load()
    jobs = view.search(args.search or "")
    if args.table:
        display_jobs_table(jobs, session.console, empty_message=view.empty_state())
    else:
        display_job_cards(jobs, session.console, view.empty_state())
    return 0 if view.error is None else 1


async def cmd_jobs_show(session: Session, args: argparse.Namespace) -> int:
    job = await session.jobs.get_job(args.id)
    async with JobDetailsView(session.matches, session.notifier) as view:
        await view.open(job)
        display_job_details(view, session.console)
    return 0


async def cmd_jobs_add(session: Session, args: argparse.Namespace) -> int:
    form = JobDescriptionForm(session.jobs, session.notifier, cache=session.cache)
    form.update(**_job_fields(args))
    return _report(await form.submit(), session.console)


async def cmd_jobs_edit(session: Session, args: argparse.Namespace) -> int:
    job = await session.jobs.get_job(args.id)
    form = JobDescriptionForm(session.jobs, session.notifier, initial=job, cache=session.cache)
    form.update(**_job_fields(args))
    return _report(await form.submit(), session.console)


async def cmd_jobs_delete(session: Session, args: argparse.Namespace) -> int:
    deleted = await session.job_list(args).delete(args.id)
    return 0 if deleted else 1


async def cmd_jobs_upload(session: Session, args: argparse.Namespace) -> int:
    form = JobFileUploadForm(session.jobs, session.notifier, cache=session.cache)
    if not form.select(args.files):
        return 1
    return _report(await form.submit(), session.console)


# Consultants


def _consultant_fields(args: argparse.Namespace) -> Dict[str, Any]:
    fields = {
        name: getattr(args, name)
        for name in (
            "name", "email", "phone", "experience", "location", "project", "availability"
        )
        if getattr(args, name) is not None
    }
    if args.skills:
        fields["skills"] = args.skills
    return fields


async def cmd_consultants_list(session: Session, args: argparse.Namespace) -> int:
    view = session.consultant_list(args)
    await view.load()
    consultants = view.search(args.search or "")
    if args.table:
        display_consultants_table(consultants, session.console, empty_message=view.empty_state())
    else:
        display_consultant_cards(consultants, session.console, view.empty_state())
    return 0 if view.error is None else 1


async def cmd_consultants_show(session: Session, args: argparse.Namespace) -> int:
    consultant = await session.consultants.get_consultant(args.id)
    display_consultant_details(consultant, session.console)
    return 0


async def cmd_consultants_add(session: Session, args: argparse.Namespace) -> int:
    form = ConsultantForm(session.consultants, session.notifier, cache=session.cache)
    form.update(**_consultant_fields(args))
    return _report(await form.submit(), session.console)


async def cmd_consultants_edit(session: Session, args: argparse.Namespace) -> int:
    consultant = await session.consultants.get_consultant(args.id)
    form = ConsultantForm(
        session.consultants, session.notifier, initial=consultant, cache=session.cache
    )
    form.update(**_consultant_fields(args))
    return _report(await form.submit(), session.console)


async def cmd_consultants_delete(session: Session, args: argparse.Namespace) -> int:
    deleted = await session.consultant_list(args).delete(args.id)
    return 0 if deleted else 1


async def cmd_consultants_upload(session: Session, args: argparse.Namespace) -> int:
    form = ResumeUploadForm(session.consultants, session.notifier, cache=session.cache)
    if not form.select(args.files):
        return 1
    return _report(await form.submit(), session.console)


async def cmd_consultants_availability(session: Session, args: argparse.Namespace) -> int:
    consultant = await session.consultants.update_availability(args.id, args.availability)
    session.notifier.success(f"{consultant.name} is now {consultant.availability}")
    return 0


async def cmd_consultants_search(session: Session, args: argparse.Namespace) -> int:
    consultants = await session.consultants.search_by_skill(args.skill)
    display_consultants_table(
        consultants,
        session.console,
        title=escape(f"Consultants with {args.skill}"),
        empty_message="No consultants found",
    )
    return 0


def _add_job_field_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--title', help='Job title')
    parser.add_argument('--department', help='Department')
    parser.add_argument('--location', help='Location')
    parser.add_argument('--description', help='Job description text')
    parser.add_argument('--experience', help='Required experience, e.g. "3-5 years"')
    parser.add_argument(
        '--skill', dest='skills', action='append', default=[],
        help='Required skill (repeat for several)'
    )


def _add_consultant_field_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--name', help='Full name')
    parser.add_argument('--email', help='Email address')
    parser.add_argument('--phone', help='Phone number')
    parser.add_argument('--experience', help='Years of experience')
    parser.add_argument('--location', help='Location')
    parser.add_argument('--project', help='Past project notes')
    parser.add_argument(
        '--availability', choices=[a.value for a in Availability], help='Availability'
    )
    parser.add_argument(
        '--skill', dest='skills', action='append', default=[],
        help='Skill (repeat for several)'
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every sub-command."""
    parser = argparse.ArgumentParser(
        prog="smartmatcher",
        description="Smart Document Matcher - job descriptions, consultants and matches",
    )
    parser.add_argument('--config', type=str, help='Path to a YAML configuration file')
    parser.add_argument('--base-url', type=str, help='Backend API base URL')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')

    commands = parser.add_subparsers(dest='command', metavar='COMMAND')
    commands.required = True

    login = commands.add_parser('login', help='Log in and store the access token')
    login.add_argument('--email', help='Account email')
    login.add_argument('--password', help='Account password')
    login.set_defaults(handler=cmd_login)

    signup = commands.add_parser('signup', help='Create an account')
    signup.add_argument('--name', help='Full name')
    signup.add_argument('--email', help='Account email')
    signup.add_argument('--password', help='Password')
    signup.add_argument('--confirm-password', help='Password again')
    signup.add_argument('--role', choices=['1', '2'], help='1 = Recruiter, 2 = AR')
    signup.set_defaults(handler=cmd_signup)

    commands.add_parser('logout', help='Forget the stored session').set_defaults(
        handler=cmd_logout
    )
    commands.add_parser('whoami', help='Show the logged-in user').set_defaults(
        handler=cmd_whoami
    )

    dashboard = commands.add_parser('dashboard', help='Show the dashboard for your role')
    dashboard.set_defaults(handler=cmd_dashboard)

    # jobs
    jobs = commands.add_parser('jobs', help='Manage job descriptions')
    job_commands = jobs.add_subparsers(dest='action', metavar='ACTION')
    job_commands.required = True

    job_list = job_commands.add_parser('list', help='List job descriptions')
    job_list.add_argument('--search', help='Filter by title, department, location, skill or date')
    job_list.add_argument('--table', action='store_true', help='Show a table instead of cards')
    job_list.set_defaults(handler=cmd_jobs_list)

    job_show = job_commands.add_parser('show', help='Show a job with its top matches')
    job_show.add_argument('id', help='Job description ID')
    job_show.set_defaults(handler=cmd_jobs_show)

    job_add = job_commands.add_parser('add', help='Create a job description')
    _add_job_field_options(job_add)
    job_add.set_defaults(handler=cmd_jobs_add)

    job_edit = job_commands.add_parser('edit', help='Update a job description')
    job_edit.add_argument('id', help='Job description ID')
    _add_job_field_options(job_edit)
    job_edit.set_defaults(handler=cmd_jobs_edit)

    job_delete = job_commands.add_parser('delete', help='Delete a job description')
    job_delete.add_argument('id', help='Job description ID')
    job_delete.add_argument('--yes', '-y', action='store_true', help='Do not ask for confirmation')
    job_delete.set_defaults(handler=cmd_jobs_delete)

    job_upload = job_commands.add_parser('upload', help='Upload job description documents')
    job_upload.add_argument('files', nargs='+', help='PDF, TXT, DOC or DOCX files')
    job_upload.set_defaults(handler=cmd_jobs_upload)

    # consultants
    consultants = commands.add_parser('consultants', help='Manage consultant profiles')
    consultant_commands = consultants.add_subparsers(dest='action', metavar='ACTION')
    consultant_commands.required = True

    c_list = consultant_commands.add_parser('list', help='List consultants')
    c_list.add_argument('--search', help='Filter by name, skill, location or availability')
    c_list.add_argument('--table', action='store_true', help='Show a table instead of cards')
    c_list.set_defaults(handler=cmd_consultants_list)

    c_show = consultant_commands.add_parser('show', help='Show a consultant profile')
    c_show.add_argument('id', type=int, help='Consultant ID')
    c_show.set_defaults(handler=cmd_consultants_show)

    c_add = consultant_commands.add_parser('add', help='Create a consultant')
    _add_consultant_field_options(c_add)
    c_add.set_defaults(handler=cmd_consultants_add)

    c_edit = consultant_commands.add_parser('edit', help='Update a consultant')
    c_edit.add_argument('id', type=int, help='Consultant ID')
    _add_consultant_field_options(c_edit)
    c_edit.set_defaults(handler=cmd_consultants_edit)

    c_delete = consultant_commands.add_parser('delete', help='Delete a consultant')
    c_delete.add_argument('id', type=int, help='Consultant ID')
    c_delete.add_argument('--yes', '-y', action='store_true', help='Do not ask for confirmation')
    c_delete.set_defaults(handler=cmd_consultants_delete)

    c_upload = consultant_commands.add_parser('upload', help='Upload resumes')
    c_upload.add_argument('files', nargs='+', help='PDF, TXT, DOC or DOCX files')
    c_upload.set_defaults(handler=cmd_consultants_upload)

    c_availability = consultant_commands.add_parser(
        'availability', help="Change a consultant's availability"
    )
    c_availability.add_argument('id', type=int, help='Consultant ID')
    c_availability.add_argument(
        'availability', choices=[a.value for a in Availability], help='New availability'
    )
    c_availability.set_defaults(handler=cmd_consultants_availability)

    c_search = consultant_commands.add_parser('search', help='Search consultants by skill')
    c_search.add_argument('skill', help='Skill to search for')
    c_search.set_defaults(handler=cmd_consultants_search)

    return parser


def parse_args(args: List[str]) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        args: Command line arguments.

    Returns:
        Parsed arguments.
    """
    return build_parser().parse_args(args)


async def main_async(
    args: argparse.Namespace,
    app_config: AppConfig,
    api: Optional[ApiClient] = None,
    out: Optional[Console] = None,
) -> int:
    """Run the selected command inside one API session."""
    out = out or console
    api = api or ApiClient.from_config(app_config, LocalStorage(app_config.storage.path))
    handler: Handler = args.handler

    async with api:
        session = Session(api=api, console=out, notifier=Notifier())
        try:
            return await handler(session, args)
        except SmartMatcherError as e:
            logger.error(f"Command '{args.command}' failed: {e}")
            out.print(f"[red]Error: {escape(str(e))}[/red]")
            return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application.

    Returns:
        int: Exit code (0 for success, non-zero for error)
    """
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        app_config = load_config(args.config)
    except (FileNotFoundError, ConfigurationError) as e:
        console.print(f"[red]Failed to load configuration: {escape(str(e))}[/red]")
        return 1

    if args.base_url:
        app_config.api.base_url = args.base_url.rstrip("/")

    debug_mode = args.debug or app_config.debug or os.environ.get(
        'SMARTMATCHER_DEBUG', ''
    ).lower() in ('1', 'true', 'yes')
    LoggingConfig(debug=debug_mode, app_config=app_config).setup()
    logger.debug(f"Using backend {app_config.api.base_url}")

    try:
        return asyncio.run(main_async(args, app_config))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
