"""Forms with client-side validation in front of the backend services."""

from .auth_forms import LoginForm, SignupForm
from .base import FormResult, is_valid_email
from .consultant_form import ConsultantForm
from .job_form import JobDescriptionForm
from .upload_forms import JobFileUploadForm, ResumeUploadForm, check_file

__all__ = [
    "LoginForm",
    "SignupForm",
    "FormResult",
    "is_valid_email",
    "ConsultantForm",
    "JobDescriptionForm",
    "JobFileUploadForm",
    "ResumeUploadForm",
    "check_file",
]
