"""Data models for smartmatcher.

All records are owned by the backend; these models are transient copies used
for validation and display.
"""

from .base import BaseModel
from .consultant import Availability, ConsultantProfile
from .job import JobDescription, JobDescriptionInput
from .match import Match, MatchedProfile
from .user import LoginCredentials, SignupRequest, TokenResponse, UserRole
from .workflow import STEP_ORDER, WorkflowStatus, humanize_step, summary_label

__all__ = [
    "BaseModel",
    "Availability",
    "ConsultantProfile",
    "JobDescription",
    "JobDescriptionInput",
    "Match",
    "MatchedProfile",
    "LoginCredentials",
    "SignupRequest",
    "TokenResponse",
    "UserRole",
    "STEP_ORDER",
    "WorkflowStatus",
    "humanize_step",
    "summary_label",
]
