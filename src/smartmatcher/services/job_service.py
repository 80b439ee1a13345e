"""
Job Service for smartmatcher.

This module provides create/read/update/delete and upload operations for job
descriptions held by the backend.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Union

from ..exceptions import JobApiError
from ..models.job import JobDescription, JobDescriptionInput
from ..utils.http_client import HTTPRequestError
from .base import BaseService

logger = logging.getLogger(__name__)

JOBS_PATH = "/job-description/"
UPLOAD_PATH = "/job-description/upload-job-descriptions/"


class JobService(BaseService):
    """Service for job description operations."""

    error_class = JobApiError

    async def list_jobs(self) -> List[JobDescription]:
        """Fetch every job description."""
        try:
            data = await self.api.get(JOBS_PATH)
        except HTTPRequestError as e:
            raise self._error(e, "Failed to fetch job descriptions") from e
        jobs = self._parse_list(JobDescription, data)
        logger.debug(f"Fetched {len(jobs)} job descriptions")
        return jobs

    async def get_pending_jobs(self) -> List[JobDescription]:
        """Job descriptions the backend still reports as pending."""
        return [job for job in await self.list_jobs() if job.is_pending]

    async def get_job(self, job_id: Union[int, str]) -> JobDescription:
        try:
            data = await self.api.get(f"{JOBS_PATH}{job_id}")
        except HTTPRequestError as e:
            raise self._error(e, f"Failed to fetch job description with ID {job_id}") from e
        return self._parse(JobDescription, data)

    async def create_job(self, job: JobDescriptionInput) -> JobDescription:
        logger.info(f"Creating job description: {job.title}")
        try:
            data = await self.api.post(JOBS_PATH, json_data=job.to_payload())
        except HTTPRequestError as e:
            raise self._error(e, "Failed to create job description") from e
        return self._parse(JobDescription, data)

    async def update_job(
        self, job_id: Union[int, str], job: JobDescriptionInput
    ) -> JobDescription:
        logger.info(f"Updating job description {job_id}")
        try:
            data = await self.api.put(f"{JOBS_PATH}{job_id}", json_data=job.to_payload())
        except HTTPRequestError as e:
            raise self._error(e, f"Failed to update job description with ID {job_id}") from e
        if not isinstance(data, dict):
            return JobDescription(id=job_id, **job.to_payload())
        return self._parse(JobDescription, data)

    async def delete_job(self, job_id: Union[int, str]) -> None:
        logger.info(f"Deleting job description {job_id}")
        try:
            await self.api.delete(f"{JOBS_PATH}{job_id}")
        except HTTPRequestError as e:
            raise self._error(e, f"Failed to delete job description with ID {job_id}") from e

    async def upload_job_files(self, files: Iterable[Union[str, Path]]) -> Any:
        """Send job description documents to the backend for extraction."""
        try:
            return await self.api.upload_files(UPLOAD_PATH, files)
        except HTTPRequestError as e:
            raise self._error(e, "Failed to upload job description files") from e
