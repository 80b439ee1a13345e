"""Services for talking to the matcher backend."""

from .api import ApiClient
from .auth_service import AuthService
from .consultant_service import ConsultantService
from .job_service import JobService
from .match_service import MatchService

__all__ = [
    "ApiClient",
    "AuthService",
    "ConsultantService",
    "JobService",
    "MatchService",
]
