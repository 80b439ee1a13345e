"""Custom exceptions for smartmatcher."""

from typing import Any, Optional


class SmartMatcherError(Exception):
    """Base exception for smartmatcher errors."""
    pass


class ConfigurationError(SmartMatcherError):
    """Raised when there is a configuration error."""
    pass


class ApiError(SmartMatcherError):
    """Raised when a backend call fails.

    Carries the HTTP status, an optional machine-readable code and the parsed
    response body so callers can map specific failures to field errors.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        data: Any = None,
    ):
        self.message = message
        self.status = status
        self.code = code
        self.data = data
        super().__init__(message)

    @property
    def detail(self) -> Optional[str]:
        """Backend-provided ``detail`` string, if any."""
        if isinstance(self.data, dict):
            detail = self.data.get("detail")
            if isinstance(detail, str):
                return detail
        return None


class JobApiError(ApiError):
    """Raised when a job-description call fails."""
    pass


class ConsultantApiError(ApiError):
    """Raised when a consultant-profile call fails."""
    pass


class DuplicateEmailError(ConsultantApiError):
    """Raised when the backend rejects a consultant because its email exists."""

    def __init__(self, status: Optional[int] = 500, data: Any = None):
        super().__init__(
            "This email is already registered",
            status=status,
            code="DUPLICATE_EMAIL",
            data=data,
        )


class MatchApiError(ApiError):
    """Raised when a match-result or workflow-status call fails."""
    pass


class AuthApiError(ApiError):
    """Raised when login or signup fails."""
    pass


class UploadError(SmartMatcherError):
    """Raised when a file is rejected before upload."""
    pass
