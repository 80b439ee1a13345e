"""Shared helpers for backend services."""

import logging
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import ApiError
from ..utils.http_client import HTTPRequestError
from .api import ApiClient

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

DUPLICATE_ENTRY_MARKER = "Duplicate entry"


def is_duplicate_entry(error: HTTPRequestError) -> bool:
    """A 500 whose detail mentions a duplicate key is a unique-email clash."""
    return error.status == 500 and DUPLICATE_ENTRY_MARKER in (error.detail or "")


class BaseService:
    """Base class for services talking to one backend resource."""

    error_class: Type[ApiError] = ApiError

    def __init__(self, api: ApiClient):
        self.api = api

    def _error(self, error: HTTPRequestError, fallback: str) -> ApiError:
        """Wrap a gateway error, preferring the backend's own message."""
        return self.error_class(
            error.detail or fallback,
            status=error.status,
            data=error.data,
        )

    def _parse(self, model: Type[M], data: Any) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected {model.__name__} payload: {e}")
            raise self.error_class(
                f"Unexpected response from server for {model.__name__}", data=data
            ) from e

    def _parse_list(self, model: Type[M], data: Any) -> List[M]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise self.error_class(
                f"Expected a list of {model.__name__}, got {type(data).__name__}",
                data=data,
            )
        return [self._parse(model, item) for item in data]
