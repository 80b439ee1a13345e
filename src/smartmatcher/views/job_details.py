"""Job detail view with top matches and workflow progress.

Opening the view fetches the job's top-3 matches and its workflow status
concurrently. When the backend has no matches yet, the view asks it to
generate them once and fetches the top three again. Failures end in an error
toast and an empty state; they are never raised to the caller. Closing the
view cancels a load that is still running and discards its results.
"""

import asyncio
import logging
from typing import Any, List, Optional, Tuple

from ..exceptions import ApiError
from ..models.job import JobDescription
from ..models.match import Match
from ..models.workflow import WorkflowStatus
from ..services.match_service import MatchService
from .notifications import Notifier

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch matches. Please try again."
GENERATE_FAILED_MESSAGE = "Failed to generate matches. Please try again."
LOADING_MATCHES_MESSAGE = "Loading matches..."
LOADING_STATUS_MESSAGE = "Loading status..."
NO_MATCHES_MESSAGE = "No matches found for this job description."
NO_STATUS_MESSAGE = "No workflow status available."

LoadResult = Tuple[List[Match], Optional[WorkflowStatus]]


class JobDetailsView:
    """Detail "modal" for one job description."""

    def __init__(self, matches: MatchService, notifier: Notifier):
        self.matches = matches
        self.notifier = notifier
        self.job: Optional[JobDescription] = None
        self.top_matches: List[Match] = []
        self.workflow_status: Optional[WorkflowStatus] = None
        self.loading = False
        self.closed = False
        self._task: Optional[asyncio.Task] = None

    async def __aenter__(self) -> "JobDetailsView":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self.job is not None and not self.closed

    async def open(self, job: JobDescription) -> None:
        """Show ``job`` and load its matches and workflow status."""
        self.job = job
        self.closed = False
        self.loading = True
        self.top_matches = []
        self.workflow_status = None

        self._task = asyncio.ensure_future(self._load(job))
        try:
            top_matches, workflow_status = await self._task
        except asyncio.CancelledError:
            if self.closed:
                logger.debug(f"Load for job {job.id} cancelled by close")
                return
            raise
        finally:
            self._task = None

        if self.closed:
            return
        self.top_matches = top_matches
        self.workflow_status = workflow_status
        self.loading = False

    async def close(self) -> None:
        """Close the view, cancelling any in-flight load."""
        self.closed = True
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self.loading = False

    async def _load(self, job: JobDescription) -> LoadResult:
        try:
            top_matches, workflow_status = await asyncio.gather(
                self.matches.get_top_matches(job.id),
                self.matches.get_workflow_status(job.id),
            )
        except (ApiError, ValueError) as e:
            logger.error(f"Failed to fetch job details for {job.id}: {e}")
            self.notifier.error(FETCH_FAILED_MESSAGE)
            return [], None

        if not top_matches:
            logger.info(f"No matches found for job {job.id}, generating matches")
            try:
                await self.matches.generate_matches(job.id)
                top_matches = await self.matches.get_top_matches(job.id)
            except (ApiError, ValueError) as e:
                logger.error(f"Failed to generate matches for {job.id}: {e}")
                self.notifier.error(GENERATE_FAILED_MESSAGE)
                top_matches = []

        return top_matches or [], workflow_status

    def matches_message(self) -> Optional[str]:
        """Placeholder text for the matches section, or None when matches exist."""
        if self.loading:
            return LOADING_MATCHES_MESSAGE
        if not self.top_matches:
            return NO_MATCHES_MESSAGE
        return None

    def status_message(self) -> Optional[str]:
        """Placeholder text for the workflow section, or None when a status exists."""
        if self.loading:
            return LOADING_STATUS_MESSAGE
        if self.workflow_status is None:
            return NO_STATUS_MESSAGE
        return None
