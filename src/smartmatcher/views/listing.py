"""List views: fetch a collection, search it client-side, delete with confirmation."""

import logging
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

from rich.prompt import Confirm

from ..exceptions import ApiError
from ..models.consultant import ConsultantProfile
from ..models.job import JobDescription
from ..services.consultant_service import ConsultantService
from ..services.job_service import JobService
from .cache import CONSULTANTS_KEY, JOBS_KEY, QueryCache
from .notifications import Notifier

logger = logging.getLogger(__name__)

T = TypeVar("T")

ConfirmCallback = Callable[[str], bool]


def _contains(value: Optional[str], term: str) -> bool:
    return bool(value) and term in value.lower()


def job_matches(job: JobDescription, term: str) -> bool:
    """Case-insensitive substring match on title, department, location, skills and date."""
    term = term.lower()
    return (
        _contains(job.title, term)
        or _contains(job.department, term)
        or _contains(job.location, term)
        or any(_contains(skill, term) for skill in job.skills)
        or _contains(job.created_date, term)
    )


def consultant_matches(consultant: ConsultantProfile, term: str) -> bool:
    """Case-insensitive substring match on name, skills, location and availability."""
    term = term.lower()
    return (
        _contains(consultant.name, term)
        or any(_contains(skill, term) for skill in consultant.skills)
        or _contains(consultant.location, term)
        or _contains(consultant.availability.value, term)
    )


def filter_jobs(jobs: List[JobDescription], term: str) -> List[JobDescription]:
    if not term:
        return list(jobs)
    return [job for job in jobs if job_matches(job, term)]


def filter_consultants(
    consultants: List[ConsultantProfile], term: str
) -> List[ConsultantProfile]:
    if not term:
        return list(consultants)
    return [c for c in consultants if consultant_matches(c, term)]


def ask_confirmation(prompt: str) -> bool:
    return Confirm.ask(prompt, default=False)


class CollectionView(Generic[T]):
    """Shared behaviour of the job and consultant list views."""

    cache_key: str = ""
    delete_prompt: str = "Are you sure you want to delete this item?"
    deleted_message: str = "Item deleted."
    delete_failed_message: str = "Could not delete item."
    load_failed_message: str = "Failed to fetch items. Please try again."
    empty_message: str = "Nothing here yet"
    no_results_message: str = "Nothing found"

    def __init__(
        self,
        cache: QueryCache,
        notifier: Notifier,
        confirm: ConfirmCallback = ask_confirmation,
    ):
        self.cache = cache
        self.notifier = notifier
        self.confirm = confirm
        self.search_term = ""
        self.cache.register(self.cache_key, self._load)

    async def _load(self) -> List[T]:
        raise NotImplementedError

    async def _delete(self, item_id: Union[int, str]) -> None:
        raise NotImplementedError

    def _matches(self, item: T, term: str) -> bool:
        raise NotImplementedError

    @property
    def is_loading(self) -> bool:
        return self.cache.state(self.cache_key).loading

    @property
    def error(self) -> Optional[Exception]:
        return self.cache.state(self.cache_key).error

    @property
    def items(self) -> List[T]:
        return self.cache.state(self.cache_key).data or []

    async def load(self) -> List[T]:
        """Fetch the collection (from cache when fresh); failures yield an empty list."""
        try:
            return await self.cache.fetch(self.cache_key)
        except (ApiError, ValueError) as e:
            logger.error(f"Failed to load '{self.cache_key}': {e}")
            self.notifier.error(self.load_failed_message)
            return []

    def search(self, term: Optional[str] = None) -> List[T]:
        if term is not None:
            self.search_term = term
        if not self.search_term:
            return list(self.items)
        return [item for item in self.items if self._matches(item, self.search_term)]

    def empty_state(self) -> str:
        return self.no_results_message if self.search_term else self.empty_message

    async def refresh(self) -> List[T]:
        self.cache.invalidate(self.cache_key)
        return await self.load()

    async def delete(self, item_id: Union[int, str]) -> bool:
        """Delete after confirmation.

        Returns:
            True if the backend deleted the item; False if the user declined
            or the request failed.
        """
        if not self.confirm(self.delete_prompt):
            logger.debug(f"Deletion of {self.cache_key} {item_id} cancelled")
            return False
        try:
            await self._delete(item_id)
        except ApiError as e:
            logger.error(f"Failed to delete {self.cache_key} {item_id}: {e}")
            self.notifier.error(self.delete_failed_message)
            return False
        self.notifier.success(self.deleted_message)
        await self.refresh()
        return True


class JobListView(CollectionView[JobDescription]):
    cache_key = JOBS_KEY
    delete_prompt = "Are you sure you want to delete this job description?"
    deleted_message = "Job description deleted."
    delete_failed_message = "Could not delete job description."
    load_failed_message = "Failed to fetch job descriptions. Please try again."
    empty_message = "No job descriptions yet"
    no_results_message = "No job descriptions found"

    def __init__(
        self,
        cache: QueryCache,
        notifier: Notifier,
        jobs: JobService,
        confirm: ConfirmCallback = ask_confirmation,
    ):
        self.jobs = jobs
        super().__init__(cache, notifier, confirm)

    async def _load(self) -> List[JobDescription]:
        return await self.jobs.list_jobs()

    async def _delete(self, item_id: Union[int, str]) -> None:
        await self.jobs.delete_job(item_id)

    def _matches(self, item: JobDescription, term: str) -> bool:
        return job_matches(item, term)

    def find(self, job_id: Any) -> Optional[JobDescription]:
        return next((job for job in self.items if str(job.id) == str(job_id)), None)


class ConsultantListView(CollectionView[ConsultantProfile]):
    cache_key = CONSULTANTS_KEY
    delete_prompt = "Are you sure you want to delete this consultant?"
    deleted_message = "Consultant deleted."
    delete_failed_message = "Could not delete consultant."
    load_failed_message = "Failed to fetch consultants. Please try again."
    empty_message = "No consultants yet"
    no_results_message = "No consultants found"

    def __init__(
        self,
        cache: QueryCache,
        notifier: Notifier,
        consultants: ConsultantService,
        confirm: ConfirmCallback = ask_confirmation,
    ):
        self.consultants = consultants
        super().__init__(cache, notifier, confirm)

    async def _load(self) -> List[ConsultantProfile]:
        return await self.consultants.list_consultants()

    async def _delete(self, item_id: Union[int, str]) -> None:
        await self.consultants.delete_consultant(int(item_id))

    def _matches(self, item: ConsultantProfile, term: str) -> bool:
        return consultant_matches(item, term)

    def find(self, consultant_id: Any) -> Optional[ConsultantProfile]:
        return next(
            (c for c in self.items if str(c.id) == str(consultant_id)), None
        )
