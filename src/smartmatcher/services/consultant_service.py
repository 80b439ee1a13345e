"""Consultant profile operations against the backend."""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Union

from ..exceptions import ConsultantApiError, DuplicateEmailError
from ..models.consultant import Availability, ConsultantProfile
from ..utils.http_client import HTTPRequestError
from .base import BaseService, is_duplicate_entry

logger = logging.getLogger(__name__)

CONSULTANTS_PATH = "/consultant-profile/"
UPLOAD_PATH = "/consultant-profile/upload-pdfs/"


class ConsultantService(BaseService):
    """Service for consultant profile operations."""

    error_class = ConsultantApiError

    def _write_error(self, error: HTTPRequestError, fallback: str) -> ConsultantApiError:
        if is_duplicate_entry(error):
            return DuplicateEmailError(status=error.status, data=error.data)
        return self._error(error, fallback)

    async def list_consultants(self) -> List[ConsultantProfile]:
        try:
            data = await self.api.get(CONSULTANTS_PATH)
        except HTTPRequestError as e:
            logger.error(f"Error fetching consultants: {e}")
            raise self._error(e, "Failed to fetch consultants") from e
        return self._parse_list(ConsultantProfile, data)

    async def get_consultant(self, consultant_id: int) -> ConsultantProfile:
        try:
            data = await self.api.get(f"{CONSULTANTS_PATH}{consultant_id}")
        except HTTPRequestError as e:
            logger.error(f"Error fetching consultant {consultant_id}: {e}")
            raise self._error(e, f"Failed to fetch consultant with ID {consultant_id}") from e
        return self._parse(ConsultantProfile, data)

    async def create_consultant(self, consultant: ConsultantProfile) -> ConsultantProfile:
        """Create a consultant.

        Raises:
            DuplicateEmailError: If the backend reports the email already exists.
            ConsultantApiError: For any other failure.
        """
        payload = consultant.to_payload()
        logger.debug(f"Creating consultant with data: {payload}")
        try:
            data = await self.api.post(CONSULTANTS_PATH, json_data=payload)
        except HTTPRequestError as e:
            logger.error(f"Error creating consultant: {e}")
            raise self._write_error(e, "Failed to create consultant") from e
        return self._parse(ConsultantProfile, data)

    async def update_consultant(
        self, consultant_id: int, consultant: ConsultantProfile
    ) -> ConsultantProfile:
        """Update a consultant; same error mapping as :meth:`create_consultant`."""
        payload = consultant.to_payload()
        logger.debug(f"Updating consultant {consultant_id} with data: {payload}")
        try:
            data = await self.api.put(f"{CONSULTANTS_PATH}{consultant_id}", json_data=payload)
        except HTTPRequestError as e:
            logger.error(f"Error updating consultant {consultant_id}: {e}")
            raise self._write_error(
                e, f"Failed to update consultant with ID {consultant_id}"
            ) from e
        if isinstance(data, dict):
            return self._parse(ConsultantProfile, data)
        return consultant.model_copy(update={"id": consultant_id})

    async def delete_consultant(self, consultant_id: int) -> None:
        logger.info(f"Deleting consultant {consultant_id}")
        try:
            await self.api.delete(f"{CONSULTANTS_PATH}{consultant_id}")
        except HTTPRequestError as e:
            logger.error(f"Error deleting consultant {consultant_id}: {e}")
            raise self._error(e, f"Failed to delete consultant with ID {consultant_id}") from e

    async def update_availability(
        self, consultant_id: int, availability: Union[Availability, str]
    ) -> ConsultantProfile:
        availability = Availability(availability)
        logger.info(f"Updating availability for consultant {consultant_id} to {availability}")
        try:
            data = await self.api.put(
                f"{CONSULTANTS_PATH}{consultant_id}/availability",
                params={"availability": availability.value},
            )
        except HTTPRequestError as e:
            raise self._error(
                e, f"Failed to update availability for consultant with ID {consultant_id}"
            ) from e
        return self._parse(ConsultantProfile, data)

    async def search_by_skill(self, skill: str) -> List[ConsultantProfile]:
        """Backend-side skill search."""
        try:
            data = await self.api.get(f"{CONSULTANTS_PATH}search", params={"skill": skill})
        except HTTPRequestError as e:
            raise self._error(e, f"Failed to search consultants with skill: {skill}") from e
        return self._parse_list(ConsultantProfile, data)

    async def upload_resumes(self, files: Iterable[Union[str, Path]]) -> Any:
        """Send resume documents to the backend for profile extraction."""
        try:
            return await self.api.upload_files(UPLOAD_PATH, files)
        except HTTPRequestError as e:
            raise self._error(e, "Failed to upload resumes") from e
