"""Backend-owned workflow progress for a job description."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from .base import BaseModel

JD_PARSED = "jd_parsed"
PROFILES_COMPARED = "profiles_compared"
PROFILES_RANKED = "profiles_ranked"
NOTIFICATION_SENT = "notification_sent"

STEP_ORDER: tuple[str, ...] = (
    JD_PARSED,
    PROFILES_COMPARED,
    PROFILES_RANKED,
    NOTIFICATION_SENT,
)


def humanize_step(step: str) -> str:
    """Turn ``jd_parsed`` into ``Jd parsed``."""
    text = step.replace("_", " ")
    return text[:1].upper() + text[1:]


def summary_label(steps: dict[str, bool] | None) -> str:
    """Collapse workflow steps into the single label shown on a job card."""
    if not steps:
        return "Pending"
    if steps.get(NOTIFICATION_SENT):
        return "Completed"
    if steps.get(PROFILES_RANKED):
        return "Matches Found"
    if steps.get(JD_PARSED) or steps.get(PROFILES_COMPARED):
        return "In Progress"
    return "Pending"


class WorkflowStatus(BaseModel):
    """Named boolean pipeline steps for one job description."""

    id: int | None = None
    job_description_id: int | str | None = None
    steps: dict[str, bool] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_flat_steps(cls, data: Any) -> Any:
        # Some backend versions send the steps as top-level booleans.
        if isinstance(data, dict) and "steps" not in data:
            steps = {
                key: value
                for key, value in data.items()
                if key in STEP_ORDER and isinstance(value, bool)
            }
            data = {**data, "steps": steps}
        return data

    def ordered_steps(self) -> list[tuple[str, bool]]:
        """Known steps in pipeline order, then any extra steps as received."""
        known = [(name, self.steps[name]) for name in STEP_ORDER if name in self.steps]
        extra = [(name, done) for name, done in self.steps.items() if name not in STEP_ORDER]
        return known + extra

    def belongs_to(self, job_id: int | str) -> bool:
        return str(self.job_description_id) == str(job_id)

    @property
    def label(self) -> str:
        return summary_label(self.steps)
