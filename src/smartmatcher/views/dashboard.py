"""Dashboard statistics and role-based routing."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from ..models.consultant import Availability, ConsultantProfile
from ..models.job import JobDescription
from ..models.user import UserRole
from .listing import ConsultantListView, JobListView

logger = logging.getLogger(__name__)

LOADING_PLACEHOLDER = "..."
ERROR_PLACEHOLDER = "Error"

RECRUITER_DASHBOARD = "recruiter"
AR_DASHBOARD = "ar"
JOBS_HOME = "jobs"


def dashboard_for_role(role: Optional[UserRole]) -> str:
    """Recruiters see jobs and consultants, ARs only jobs; anyone else the job list."""
    if role == UserRole.RECRUITER:
        return RECRUITER_DASHBOARD
    if role == UserRole.AR:
        return AR_DASHBOARD
    return JOBS_HOME


@dataclass
class DashboardStats:
    total_jobs: int = 0
    pending_jobs: int = 0
    total_consultants: int = 0
    active_consultants: int = 0

    @classmethod
    def compute(
        cls, jobs: List[JobDescription], consultants: List[ConsultantProfile]
    ) -> "DashboardStats":
        return cls(
            total_jobs=len(jobs),
            pending_jobs=sum(1 for job in jobs if job.is_pending),
            total_consultants=len(consultants),
            active_consultants=sum(
                1 for c in consultants if c.availability == Availability.AVAILABLE
            ),
        )


class DashboardView:
    """Summary counters over the job and (optionally) consultant collections."""

    def __init__(
        self,
        jobs_view: JobListView,
        consultants_view: Optional[ConsultantListView] = None,
    ):
        self.jobs_view = jobs_view
        self.consultants_view = consultants_view

    async def load(self) -> DashboardStats:
        jobs = await self.jobs_view.load()
        consultants = (
            await self.consultants_view.load() if self.consultants_view else []
        )
        return DashboardStats.compute(jobs, consultants)

    def _display(self, view, value: int) -> Union[int, str]:
        if view is None:
            return value
        if view.is_loading:
            return LOADING_PLACEHOLDER
        if view.error is not None:
            return ERROR_PLACEHOLDER
        return value

    def display_values(self, stats: DashboardStats) -> dict:
        """Counter values as shown: a number, ``...`` while loading or ``Error``."""
        values = {
            "Total Jobs": self._display(self.jobs_view, stats.total_jobs),
            "Pending Jobs": self._display(self.jobs_view, stats.pending_jobs),
        }
        if self.consultants_view is not None:
            values["Total Consultants"] = self._display(
                self.consultants_view, stats.total_consultants
            )
            values["Available Consultants"] = self._display(
                self.consultants_view, stats.active_consultants
            )
        return values
