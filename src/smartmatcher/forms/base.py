"""Common form state: field errors, skills editing and submission results."""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..views.cache import QueryCache
from ..views.notifications import Notifier

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value or ""))


@dataclass
class FormResult:
    """Outcome of a form submission.

    ``submitted`` is False when client-side validation blocked the request.
    """

    ok: bool
    submitted: bool = True
    errors: Dict[str, str] = field(default_factory=dict)
    value: Any = None


class Form:
    """Base class for forms; subclasses implement ``validate``."""

    cache_key: Optional[str] = None

    def __init__(self, notifier: Notifier, cache: Optional[QueryCache] = None):
        self.notifier = notifier
        self.cache = cache
        self.errors: Dict[str, str] = {}
        self.is_submitting = False

    def validate(self) -> bool:
        raise NotImplementedError

    def _blocked(self) -> FormResult:
        return FormResult(ok=False, submitted=False, errors=dict(self.errors))

    def _invalidate(self) -> None:
        if self.cache is not None and self.cache_key:
            self.cache.invalidate(self.cache_key)


class SkillsMixin:
    """Editable ordered list of skills; blank entries are ignored on submit."""

    skills: List[str]

    def add_skill(self, value: str = "") -> None:
        self.skills.append(value)

    def remove_skill(self, index: int) -> None:
        # at least one entry always remains
        if len(self.skills) > 1:
            del self.skills[index]

    def update_skill(self, index: int, value: str) -> None:
        self.skills[index] = value

    def filtered_skills(self) -> List[str]:
        return [skill.strip() for skill in self.skills if skill.strip()]
