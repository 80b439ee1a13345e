"""Job description create/edit form."""

import logging
from typing import Any, Dict, Optional

from ..exceptions import JobApiError
from ..models.job import JobDescription, JobDescriptionInput
from ..services.job_service import JobService
from ..views.cache import JOBS_KEY, QueryCache
from ..views.notifications import Notifier
from .base import Form, FormResult, SkillsMixin

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("title", "department", "location", "description", "experience")


class JobDescriptionForm(Form, SkillsMixin):
    """Collects a job description; editing when created with an existing job."""

    cache_key = JOBS_KEY

    def __init__(
        self,
        service: JobService,
        notifier: Notifier,
        initial: Optional[JobDescription] = None,
        cache: Optional[QueryCache] = None,
    ):
        super().__init__(notifier, cache)
        self.service = service
        self.initial = initial
        self.title = ""
        self.department = ""
        self.location = ""
        self.description = ""
        self.experience = ""
        self.skills = [""]
        if initial is not None:
            for name in TEXT_FIELDS:
                setattr(self, name, getattr(initial, name) or "")
            self.skills = list(initial.skills) or [""]

    @property
    def is_edit(self) -> bool:
        return self.initial is not None and self.initial.id is not None

    def update(self, **fields: Any) -> None:
        for key, value in fields.items():
            if key == "skills":
                self.skills = list(value) or [""]
            elif key in TEXT_FIELDS:
                setattr(self, key, value or "")
            else:
                raise AttributeError(f"Unknown job form field: {key}")

    def validate(self) -> bool:
        errors: Dict[str, str] = {}

        if not self.title.strip() or len(self.title) > 255:
            errors["title"] = "Title is required and must be between 1 and 255 characters"
        if not self.department.strip():
            errors["department"] = "Department is required"
        if not self.location.strip():
            errors["location"] = "Location is required"
        if len(self.description.strip()) < 10:
            errors["description"] = "Description must be at least 10 characters"
        if not self.experience.strip():
            errors["experience"] = "Experience is required"
        if not self.filtered_skills():
            errors["skills"] = "At least one skill is required"

        self.errors = errors
        return not errors

    def build_input(self) -> JobDescriptionInput:
        return JobDescriptionInput(
            title=self.title.strip(),
            department=self.department.strip(),
            location=self.location.strip(),
            description=self.description.strip(),
            skills=self.filtered_skills(),
            experience=self.experience.strip(),
        )

    async def submit(self) -> FormResult:
        if not self.validate():
            logger.debug(f"Job form blocked: {self.errors}")
            return self._blocked()

        self.is_submitting = True
        try:
            if self.is_edit:
                saved = await self.service.update_job(self.initial.id, self.build_input())
                self.notifier.success("Job updated.")
            else:
                saved = await self.service.create_job(self.build_input())
                self.notifier.success("Job created.")
        except JobApiError as e:
            logger.error(f"Error submitting job description: {e}")
            self.notifier.error(
                "Could not update job." if self.is_edit else "Could not create job."
            )
            return FormResult(ok=False, errors=dict(self.errors))
        finally:
            self.is_submitting = False

        self._invalidate()
        return FormResult(ok=True, value=saved)
