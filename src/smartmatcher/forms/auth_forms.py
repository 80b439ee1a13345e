"""Login and signup forms."""

import logging
from typing import Dict, Optional, Union

from ..exceptions import AuthApiError
from ..models.user import LoginCredentials, SignupRequest, UserRole
from ..services.auth_service import AuthService
from ..views.dashboard import dashboard_for_role
from ..views.notifications import Notifier
from .base import Form, FormResult, is_valid_email

logger = logging.getLogger(__name__)


class LoginForm(Form):
    """Email/password login.

    On success ``FormResult.value`` is the dashboard the user's role lands on.
    """

    def __init__(self, service: AuthService, notifier: Notifier):
        super().__init__(notifier)
        self.service = service
        self.email = ""
        self.password = ""

    def validate(self) -> bool:
        errors: Dict[str, str] = {}
        if not self.email:
            errors["email"] = "Email is required"
        elif not is_valid_email(self.email):
            errors["email"] = "Please enter a valid email address"
        if not self.password:
            errors["password"] = "Password is required"
        self.errors = errors
        return not errors

    async def submit(self) -> FormResult:
        if not self.validate():
            return self._blocked()

        self.is_submitting = True
        try:
            role = await self.service.login(
                LoginCredentials(email=self.email, password=self.password)
            )
        except AuthApiError as e:
            logger.error(f"Login failed for {self.email}: {e}")
            self.notifier.error(e.message, title="Login Failed")
            return FormResult(ok=False)
        finally:
            self.is_submitting = False

        self.notifier.success("Redirecting to your dashboard...", title="Login Successful")
        return FormResult(ok=True, value=dashboard_for_role(role))


class SignupForm(Form):
    """Account creation with password confirmation and a role choice."""

    def __init__(self, service: AuthService, notifier: Notifier):
        super().__init__(notifier)
        self.service = service
        self.name = ""
        self.email = ""
        self.password = ""
        self.confirm_password = ""
        self.role: Optional[Union[UserRole, int, str]] = None

    def _parsed_role(self) -> Optional[UserRole]:
        if self.role in (None, ""):
            return None
        try:
            return UserRole(int(self.role))
        except ValueError:
            return None

    def validate(self) -> bool:
        errors: Dict[str, str] = {}
        if not self.name.strip():
            errors["name"] = "Name is required"
        if not self.email:
            errors["email"] = "Email is required"
        elif not is_valid_email(self.email):
            errors["email"] = "Please enter a valid email address"
        if not self.password:
            errors["password"] = "Password is required"
        elif self.password != self.confirm_password:
            errors["confirm_password"] = "Passwords do not match"
        if self._parsed_role() is None:
            errors["role"] = "Please select a role"
        self.errors = errors
        return not errors

    async def submit(self) -> FormResult:
        if not self.validate():
            # the first problem is also toasted
            self.notifier.error(next(iter(self.errors.values())))
            return self._blocked()

        self.is_submitting = True
        try:
            await self.service.signup(
                SignupRequest(
                    name=self.name.strip(),
                    email=self.email,
                    password=self.password,
                    role=self._parsed_role(),
                )
            )
        except AuthApiError as e:
            logger.error(f"Signup failed for {self.email}: {e}")
            self.notifier.error(e.message, title="Signup Failed")
            return FormResult(ok=False)
        finally:
            self.is_submitting = False

        self.notifier.success(
            "Your account has been created. Please log in.", title="Signup Successful"
        )
        return FormResult(ok=True)
