"""Tests for the list views, query cache and client-side search."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from smartmatcher.exceptions import ConsultantApiError, JobApiError
from smartmatcher.models import ConsultantProfile, JobDescription
from smartmatcher.views import (
    ConsultantListView,
    JobListView,
    QueryCache,
    filter_consultants,
    filter_jobs,
)

JOBS = [
    JobDescription(
        id=1, title="Backend Engineer", department="Platform", location="Berlin",
        skills=["Python", "Kafka"], created_at="2024-02-10T00:00:00",
    ),
    JobDescription(
        id=2, title="Frontend Engineer", department="Web", location="Paris",
        skills=["TypeScript"], created_at="2024-03-05T00:00:00",
    ),
]

CONSULTANTS = [
    ConsultantProfile(id=1, name="Grace Hopper", email="g@x.io", skills=["COBOL"], location="Arlington"),
    ConsultantProfile(
        id=2, name="Linus", email="l@x.io", skills=["C", "Git"], location="Portland",
        availability="busy",
    ),
]


def job_service(jobs=JOBS):
    service = MagicMock()
    service.list_jobs = AsyncMock(return_value=list(jobs))
    service.delete_job = AsyncMock()
    return service


def consultant_service(consultants=CONSULTANTS):
    service = MagicMock()
    service.list_consultants = AsyncMock(return_value=list(consultants))
    service.delete_consultant = AsyncMock()
    return service


class TestSearch:
    @pytest.mark.parametrize(
        "term, ids",
        [
            ("backend", [1]),
            ("ENGINEER", [1, 2]),
            ("paris", [2]),
            ("platform", [1]),
            ("kaf", [1]),
            ("2024-03", [2]),
            ("", [1, 2]),
            ("nothing", []),
        ],
    )
    def test_filter_jobs(self, term, ids):
        assert [job.id for job in filter_jobs(JOBS, term)] == ids

    @pytest.mark.parametrize(
        "term, ids",
        [("grace", [1]), ("git", [2]), ("PORTLAND", [2]), ("busy", [2]), ("available", [1])],
    )
    def test_filter_consultants(self, term, ids):
        assert [c.id for c in filter_consultants(CONSULTANTS, term)] == ids


class TestQueryCache:
    @pytest.mark.asyncio
    async def test_cached_until_invalidated(self):
        loader = AsyncMock(return_value=[1])
        cache = QueryCache()
        cache.register("jobs", loader)

        await cache.fetch("jobs")
        await cache.fetch("jobs")
        assert loader.await_count == 1

        cache.invalidate("jobs")
        await cache.fetch("jobs")
        assert loader.await_count == 2

    @pytest.mark.asyncio
    async def test_error_recorded(self):
        cache = QueryCache()
        cache.register("jobs", AsyncMock(side_effect=JobApiError("down")))

        with pytest.raises(JobApiError):
            await cache.fetch("jobs")

        state = cache.state("jobs")
        assert isinstance(state.error, JobApiError)
        assert not state.loading
        assert state.stale


class TestJobListView:
    @pytest.mark.asyncio
    async def test_load_and_search(self, cache, notifier):
        view = JobListView(cache, notifier, job_service())

        await view.load()

        assert [job.id for job in view.search("web")] == [2]
        assert view.empty_state() == "No job descriptions found"
        view.search("")
        assert view.empty_state() == "No job descriptions yet"
        assert view.find("2").title == "Frontend Engineer"

    @pytest.mark.asyncio
    async def test_load_failure_toasts(self, cache, notifier):
        service = job_service()
        service.list_jobs.side_effect = JobApiError("down", status=503)
        view = JobListView(cache, notifier, service)

        assert await view.load() == []
        assert view.error is not None
        assert notifier.errors[-1].description == "Failed to fetch job descriptions. Please try again."

    @pytest.mark.asyncio
    async def test_declined_delete_issues_no_request(self, cache, notifier):
        service = job_service()
        prompts = []

        def decline(prompt):
            prompts.append(prompt)
            return False

        view = JobListView(cache, notifier, service, confirm=decline)

        assert await view.delete(1) is False
        service.delete_job.assert_not_called()
        assert prompts == ["Are you sure you want to delete this job description?"]
        assert notifier.history == []

    @pytest.mark.asyncio
    async def test_confirmed_delete_refreshes(self, cache, notifier):
        service = job_service()
        view = JobListView(cache, notifier, service, confirm=lambda prompt: True)
        await view.load()

        assert await view.delete(1) is True

        service.delete_job.assert_awaited_once_with(1)
        assert service.list_jobs.await_count == 2
        assert notifier.history[-1].description == "Job description deleted."

    @pytest.mark.asyncio
    async def test_delete_failure(self, cache, notifier):
        service = job_service()
        service.delete_job.side_effect = JobApiError("nope", status=500)
        view = JobListView(cache, notifier, service, confirm=lambda prompt: True)

        assert await view.delete(1) is False
        assert notifier.errors[-1].description == "Could not delete job description."


class TestConsultantListView:
    @pytest.mark.asyncio
    async def test_empty_state(self, cache, notifier):
        view = ConsultantListView(cache, notifier, consultant_service([]))

        await view.load()

        assert view.search() == []
        assert view.empty_state() == "No consultants yet"

    @pytest.mark.asyncio
    async def test_delete(self, cache, notifier):
        service = consultant_service()
        view = ConsultantListView(cache, notifier, service, confirm=lambda prompt: True)

        assert await view.delete("2") is True

        service.delete_consultant.assert_awaited_once_with(2)
        assert notifier.history[-1].description == "Consultant deleted."

    @pytest.mark.asyncio
    async def test_delete_failure(self, cache, notifier):
        service = consultant_service()
        service.delete_consultant.side_effect = ConsultantApiError("nope")
        view = ConsultantListView(cache, notifier, service, confirm=lambda prompt: True)

        assert await view.delete(2) is False
        assert notifier.errors[-1].description == "Could not delete consultant."
