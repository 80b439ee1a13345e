"""Authentication request and response models."""

from __future__ import annotations

from enum import IntEnum

from .base import BaseModel


class UserRole(IntEnum):
    """Role encoded in the access token."""

    RECRUITER = 1
    AR = 2


class LoginCredentials(BaseModel):
    email: str
    password: str

    def to_form(self) -> dict[str, str]:
        """OAuth2 password-flow form fields."""
        return {"username": self.email, "password": self.password}


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str
    role: UserRole


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
