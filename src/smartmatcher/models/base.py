"""Base models shared by all backend records."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict


class BaseModel(PydanticBaseModel):
    """Base model class that all other models should inherit from."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_payload(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Serialise for a request body, dropping unset optional fields."""
        return self.model_dump(mode="json", exclude=exclude, exclude_none=True)
