"""Consultant profile models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import BaseModel


class Availability(str, Enum):
    """Enum for consultant availability."""

    AVAILABLE = "available"
    BUSY = "busy"
    UNAVAILABLE = "unavailable"

    def __str__(self):
        return self.value


class ConsultantProfile(BaseModel):
    """A candidate record with skills and availability."""

    id: int | None = None
    name: str
    email: str
    phone: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience: int | None = Field(None, ge=0, description="Experience in years")
    location: str | None = None
    project: str | None = Field(None, description="Past project notes")
    availability: Availability = Availability.AVAILABLE
    created_at: datetime | None = None

    def to_payload(self, exclude: set[str] | None = None) -> dict:
        """Request body without the backend-assigned fields."""
        return super().to_payload(exclude={"id", "created_at"} | (exclude or set()))

    @property
    def initials(self) -> str:
        return "".join(part[0] for part in self.name.split() if part).upper()
