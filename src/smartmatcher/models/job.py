"""Job description models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from .base import BaseModel
from .workflow import summary_label


class JobDescription(BaseModel):
    """A role posting as stored by the backend."""

    id: int | str | None = None
    title: str
    department: str = ""
    location: str = ""
    description: str = ""
    skills: list[str] = Field(default_factory=list)
    experience: str = ""
    created_at: datetime | None = None
    status: str | None = Field(None, description="Backend processing status, e.g. 'pending'")
    workflow: dict[str, bool] | None = None

    @field_validator("department", "location", "description", "experience", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator("skills", mode="before")
    @classmethod
    def coerce_skills(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @property
    def status_label(self) -> str:
        return summary_label(self.workflow)

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"

    @property
    def created_date(self) -> str:
        return self.created_at.strftime("%Y-%m-%d") if self.created_at else ""


class JobDescriptionInput(BaseModel):
    """Request body for creating or updating a job description."""

    title: str
    department: str
    location: str
    description: str
    skills: list[str]
    experience: str
