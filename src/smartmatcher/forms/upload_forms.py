"""Document upload forms for resumes and job description files."""

import logging
from pathlib import Path
from typing import Any, Awaitable, Iterable, List, Optional, Union

from ..exceptions import ApiError, UploadError
from ..services.consultant_service import ConsultantService
from ..services.job_service import JobService
from ..views.cache import CONSULTANTS_KEY, JOBS_KEY, QueryCache
from ..views.notifications import Notifier
from .base import Form, FormResult

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".pdf", ".txt", ".doc", ".docx")
INVALID_FILE_MESSAGE = "Please select a PDF, TXT, or DOC file"


def check_file(path: Union[str, Path]) -> Path:
    """Return ``path`` as a Path, or raise UploadError if it cannot be uploaded."""
    path = Path(path)
    if path.suffix.lower() not in ALLOWED_EXTENSIONS:
        raise UploadError(INVALID_FILE_MESSAGE)
    if not path.is_file():
        raise UploadError(f"File not found: {path}")
    return path


class UploadForm(Form):
    """Selects files and posts them to one upload endpoint."""

    success_message = "Files uploaded successfully"
    failure_message = "Failed to upload files"

    def __init__(self, notifier: Notifier, cache: Optional[QueryCache] = None):
        super().__init__(notifier, cache)
        self.files: List[Path] = []

    def _send(self, files: List[Path]) -> Awaitable[Any]:
        raise NotImplementedError

    def select(self, paths: Iterable[Union[str, Path]]) -> bool:
        """Replace the selection; any unsupported file rejects the whole set."""
        try:
            files = [check_file(p) for p in paths]
        except UploadError as e:
            logger.warning(f"Rejected upload selection: {e}")
            self.files = []
            self.errors = {"files": str(e)}
            self.notifier.error(str(e), title="Invalid file type")
            return False
        self.files = files
        self.errors = {}
        return True

    def validate(self) -> bool:
        if not self.files:
            self.errors = {"files": self.errors.get("files", "Please select a file to upload")}
            return False
        return True

    async def submit(self) -> FormResult:
        if not self.validate():
            return self._blocked()

        self.is_submitting = True
        try:
            response = await self._send(self.files)
        except ApiError as e:
            logger.error(f"Upload failed: {e}")
            self.notifier.error(e.message or self.failure_message)
            return FormResult(ok=False)
        except UploadError as e:
            logger.error(f"Upload failed: {e}")
            self.errors = {"files": str(e)}
            self.notifier.error(str(e), title=self.failure_message)
            return FormResult(ok=False, errors=dict(self.errors))
        finally:
            self.is_submitting = False

        logger.info(f"Uploaded {len(self.files)} file(s)")
        self.notifier.success(self.success_message)
        self.files = []
        self._invalidate()
        return FormResult(ok=True, value=response)


class ResumeUploadForm(UploadForm):
    cache_key = CONSULTANTS_KEY
    success_message = "Resumes uploaded successfully"
    failure_message = "Failed to upload resumes"

    def __init__(
        self,
        service: ConsultantService,
        notifier: Notifier,
        cache: Optional[QueryCache] = None,
    ):
        super().__init__(notifier, cache)
        self.service = service

    def _send(self, files: List[Path]) -> Awaitable[Any]:
        return self.service.upload_resumes(files)


class JobFileUploadForm(UploadForm):
    cache_key = JOBS_KEY
    success_message = "Job descriptions uploaded successfully"
    failure_message = "Failed to upload job descriptions"

    def __init__(
        self,
        service: JobService,
        notifier: Notifier,
        cache: Optional[QueryCache] = None,
    ):
        super().__init__(notifier, cache)
        self.service = service

    def _send(self, files: List[Path]) -> Awaitable[Any]:
        return self.service.upload_job_files(files)
