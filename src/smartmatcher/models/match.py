"""Match results computed by the backend."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field

from .base import BaseModel


class MatchedProfile(BaseModel):
    """The consultant side of a match, as embedded by the backend."""

    id: int | None = None
    name: str = "Unknown"
    email: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience: float | None = None
    location: str | None = None
    project: str | None = None
    availability: str | None = None


class Match(BaseModel):
    """A ranked pairing between a job description and a consultant."""

    id: int | None = None
    profile: MatchedProfile | None = Field(
        None, validation_alias=AliasChoices("profile", "consultant")
    )
    similarity_score: float = Field(..., ge=0.0, le=1.0)
    rank: int | None = None
    ranked_at: datetime | None = None

    @property
    def score_percent(self) -> int:
        return round(self.similarity_score * 100)

    @property
    def score_tier(self) -> str:
        """``high`` from 90%, ``good`` from 75%, otherwise ``fair``."""
        percent = self.similarity_score * 100
        if percent >= 90:
            return "high"
        if percent >= 75:
            return "good"
        return "fair"
