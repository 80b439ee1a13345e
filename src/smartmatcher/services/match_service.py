"""Match results and workflow status, both computed server-side."""

import logging
from typing import List, Optional, Union

from ..exceptions import MatchApiError
from ..models.match import Match
from ..models.workflow import WorkflowStatus
from ..utils.http_client import HTTPRequestError
from .base import BaseService

logger = logging.getLogger(__name__)

TOP_MATCHES_PATH = "/match-result/top-3-matches/{job_id}"
ALL_MATCHES_PATH = "/match-result/all-matches/{job_id}"
WORKFLOW_STATUS_PATH = "/workflow-status/"


def _job_key(job_id: Union[int, str]) -> int:
    return int(str(job_id), 10)


class MatchService(BaseService):
    """Read-only access to the matching pipeline's output."""

    error_class = MatchApiError

    async def get_top_matches(self, job_id: Union[int, str]) -> List[Match]:
        """The three best-ranked consultants for a job."""
        path = TOP_MATCHES_PATH.format(job_id=_job_key(job_id))
        try:
            data = await self.api.get(path)
        except HTTPRequestError as e:
            raise self._error(e, "Failed to fetch matches") from e
        return self._parse_list(Match, data)

    async def generate_matches(self, job_id: Union[int, str]) -> List[Match]:
        """Ask the backend to compute every match for a job.

        The all-matches endpoint computes and stores the ranking as a side
        effect, after which the top-3 endpoint has data to serve.
        """
        path = ALL_MATCHES_PATH.format(job_id=_job_key(job_id))
        logger.info(f"Generating matches for job {job_id}")
        try:
            data = await self.api.get(path)
        except HTTPRequestError as e:
            raise self._error(e, "Failed to generate matches") from e
        return self._parse_list(Match, data)

    async def list_workflow_statuses(self) -> List[WorkflowStatus]:
        try:
            data = await self.api.get(WORKFLOW_STATUS_PATH)
        except HTTPRequestError as e:
            raise self._error(e, "Failed to fetch workflow status") from e
        return self._parse_list(WorkflowStatus, data)

    async def get_workflow_status(
        self, job_id: Union[int, str]
    ) -> Optional[WorkflowStatus]:
        """Workflow status for one job, or ``None`` when the backend has none."""
        for status in await self.list_workflow_statuses():
            if status.belongs_to(job_id):
                return status
        return None
