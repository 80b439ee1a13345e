"""Keyed query cache with invalidation.

Views read collections through the cache; mutations invalidate a key, and
the next read of that key re-fetches from the backend.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)

JOBS_KEY = "jobs"
CONSULTANTS_KEY = "consultants"

Loader = Callable[[], Awaitable[Any]]


@dataclass
class QueryState:
    loader: Loader
    data: Any = None
    error: Optional[Exception] = None
    stale: bool = True
    loading: bool = False


class QueryCache:
    """Caches the result of one loader per key until it is invalidated."""

    def __init__(self) -> None:
        self._queries: Dict[str, QueryState] = {}

    def register(self, key: str, loader: Loader) -> QueryState:
        state = self._queries.get(key)
        if state is None:
            state = self._queries[key] = QueryState(loader=loader)
        else:
            state.loader = loader
        return state

    def state(self, key: str) -> QueryState:
        return self._queries[key]

    async def fetch(self, key: str) -> Any:
        """Return cached data, loading it first if the key is stale.

        Loader exceptions are recorded on the query state and re-raised.
        """
        state = self._queries[key]
        if not state.stale:
            return state.data

        state.loading = True
        try:
            state.data = await state.loader()
            state.error = None
            state.stale = False
            logger.debug(f"Fetched query '{key}'")
        except Exception as e:
            state.error = e
            raise
        finally:
            state.loading = False
        return state.data

    def invalidate(self, key: str) -> None:
        if key in self._queries:
            logger.debug(f"Invalidating query '{key}'")
            self._queries[key].stale = True
