"""Smart Document Matcher - terminal client for the job/consultant matching backend."""

from .config import get_config, load_config, save_config
from .exceptions import (
    ApiError,
    ConfigurationError,
    ConsultantApiError,
    DuplicateEmailError,
    JobApiError,
    MatchApiError,
    SmartMatcherError,
)

__version__ = "0.1.0"

__all__ = [
    "get_config",
    "load_config",
    "save_config",
    "ApiError",
    "ConfigurationError",
    "ConsultantApiError",
    "DuplicateEmailError",
    "JobApiError",
    "MatchApiError",
    "SmartMatcherError",
    "__version__",
]
