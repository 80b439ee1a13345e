"""Tests for dashboard statistics and role routing."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from smartmatcher.exceptions import ConsultantApiError
from smartmatcher.models import ConsultantProfile, JobDescription, UserRole
from smartmatcher.views import ConsultantListView, DashboardStats, DashboardView, JobListView
from smartmatcher.views.dashboard import dashboard_for_role


@pytest.mark.parametrize(
    "role, target",
    [(UserRole.RECRUITER, "recruiter"), (UserRole.AR, "ar"), (None, "jobs")],
)
def test_dashboard_for_role(role, target):
    assert dashboard_for_role(role) == target


def test_compute_stats():
    jobs = [
        JobDescription(title="a", status="pending"),
        JobDescription(title="b", status="completed"),
        JobDescription(title="c", status="pending"),
    ]
    consultants = [
        ConsultantProfile(name="x", email="x@x.io"),
        ConsultantProfile(name="y", email="y@x.io", availability="busy"),
    ]

    stats = DashboardStats.compute(jobs, consultants)

    assert stats == DashboardStats(
        total_jobs=3, pending_jobs=2, total_consultants=2, active_consultants=1
    )


@pytest.mark.asyncio
async def test_recruiter_dashboard_values(cache, notifier):
    jobs = MagicMock()
    jobs.list_jobs = AsyncMock(return_value=[JobDescription(title="a", status="pending")])
    consultants = MagicMock()
    consultants.list_consultants = AsyncMock(
        side_effect=ConsultantApiError("down", status=503)
    )
    view = DashboardView(
        JobListView(cache, notifier, jobs), ConsultantListView(cache, notifier, consultants)
    )

    stats = await view.load()
    values = view.display_values(stats)

    assert values["Total Jobs"] == 1
    assert values["Pending Jobs"] == 1
    assert values["Total Consultants"] == "Error"
    assert values["Available Consultants"] == "Error"


@pytest.mark.asyncio
async def test_loading_placeholder(cache, notifier):
    jobs = MagicMock()
    jobs.list_jobs = AsyncMock(return_value=[])
    view = DashboardView(JobListView(cache, notifier, jobs))
    cache.state("jobs").loading = True

    values = view.display_values(DashboardStats())

    assert values == {"Total Jobs": "...", "Pending Jobs": "..."}
