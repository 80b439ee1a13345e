"""Consultant create/edit form."""

import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from ..exceptions import ConsultantApiError, DuplicateEmailError
from ..models.consultant import Availability, ConsultantProfile
from ..services.consultant_service import ConsultantService
from ..views.cache import CONSULTANTS_KEY, QueryCache
from ..views.notifications import Notifier
from .base import Form, FormResult, SkillsMixin, is_valid_email

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = (
    "This email is already registered. Please use a different email address."
)
NOT_FOUND_MESSAGE = "Consultant not found. They may have been deleted."


class ConsultantForm(Form, SkillsMixin):
    """Collects and validates a consultant profile before saving it.

    Without ``initial`` (or with an ``initial`` lacking an id) submitting
    creates a consultant; otherwise it updates the existing one.
    """

    cache_key = CONSULTANTS_KEY

    def __init__(
        self,
        service: ConsultantService,
        notifier: Notifier,
        initial: Optional[ConsultantProfile] = None,
        cache: Optional[QueryCache] = None,
    ):
        super().__init__(notifier, cache)
        self.service = service
        self.initial = initial
        self.name = ""
        self.email = ""
        self.phone = ""
        self.experience: Union[int, str, None] = None
        self.location = ""
        self.project = ""
        self.availability = Availability.AVAILABLE
        self.skills = [""]
        if initial is not None:
            self.load(initial)

    @property
    def is_edit(self) -> bool:
        return self.initial is not None and self.initial.id is not None

    def load(self, profile: ConsultantProfile) -> None:
        self.name = profile.name
        self.email = profile.email
        self.phone = profile.phone or ""
        self.experience = profile.experience
        self.location = profile.location or ""
        self.project = profile.project or ""
        self.availability = profile.availability
        self.skills = list(profile.skills) or [""]

    def update(self, **fields: Any) -> None:
        """Set several fields at once, e.g. from parsed command-line options."""
        for key, value in fields.items():
            if key == "skills":
                self.skills = list(value) or [""]
            elif key == "availability":
                self.availability = Availability(value)
            elif hasattr(self, key) and key not in ("service", "initial", "notifier", "cache"):
                setattr(self, key, value)
            else:
                raise AttributeError(f"Unknown consultant form field: {key}")

    def _parsed_experience(self) -> Optional[int]:
        if self.experience in (None, ""):
            return None
        return int(str(self.experience).strip(), 10)

    def validate(self) -> bool:
        errors: Dict[str, str] = {}

        if not self.name or len(self.name) > 255:
            errors["name"] = "Name is required and must be between 1 and 255 characters"

        if not self.email:
            errors["email"] = "Email is required"
        elif not is_valid_email(self.email):
            errors["email"] = "Please enter a valid email address"

        if self.phone and len(self.phone) > 20:
            errors["phone"] = "Phone number must not exceed 20 characters"

        if self.project and len(self.project) < 10:
            errors["project"] = "Project details must be at least 10 characters"

        if self.location and len(self.location) > 100:
            errors["location"] = "Location must not exceed 100 characters"

        try:
            experience = self._parsed_experience()
        except ValueError:
            errors["experience"] = "Experience must be a whole number of years"
        else:
            if experience is not None and experience < 0:
                errors["experience"] = "Experience cannot be negative"

        if not self.filtered_skills():
            errors["skills"] = "At least one skill is required"

        self.errors = errors
        return not errors

    def build_profile(self) -> ConsultantProfile:
        """The submission payload; optional fields left empty are omitted."""
        return ConsultantProfile(
            name=self.name,
            email=self.email,
            skills=self.filtered_skills(),
            availability=self.availability,
            phone=self.phone or None,
            experience=self._parsed_experience(),
            location=self.location or None,
            project=self.project or None,
        )

    async def submit(self) -> FormResult:
        if not self.validate():
            logger.debug(f"Consultant form blocked: {self.errors}")
            return self._blocked()

        self.is_submitting = True
        try:
            profile = self.build_profile()
            if self.is_edit:
                saved = await self.service.update_consultant(self.initial.id, profile)
                self.notifier.success("Consultant updated successfully")
            else:
                saved = await self.service.create_consultant(profile)
                self.notifier.success("Consultant created successfully")
        except DuplicateEmailError as e:
            logger.warning(f"Duplicate consultant email {self.email}: {e}")
            self.errors["email"] = DUPLICATE_EMAIL_MESSAGE
            self.notifier.error(DUPLICATE_EMAIL_MESSAGE)
            return FormResult(ok=False, errors=dict(self.errors))
        except ConsultantApiError as e:
            message = self._error_message(e)
            logger.error(f"Error submitting consultant: {e}")
            self.notifier.error(message)
            return FormResult(ok=False, errors=dict(self.errors))
        except ValidationError as e:
            logger.error(f"Invalid consultant payload: {e}")
            self.notifier.error(self._fallback_message())
            return FormResult(ok=False, errors=dict(self.errors))
        finally:
            self.is_submitting = False

        self._invalidate()
        return FormResult(ok=True, value=saved)

    def _fallback_message(self) -> str:
        return "Failed to update consultant" if self.is_edit else "Failed to create consultant"

    def _error_message(self, error: ConsultantApiError) -> str:
        if error.status == 404:
            return NOT_FOUND_MESSAGE
        return error.message or self._fallback_message()
