"""
Test utilities and helpers for the smartmatcher test suite.
"""

import base64
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock


def make_token(claims: Any) -> str:
    """Build an unsigned JWT-shaped token carrying ``claims``."""

    def encode(part: Any) -> str:
        raw = json.dumps(part).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    return f"{encode({'alg': 'HS256', 'typ': 'JWT'})}.{encode(claims)}.signature"


def make_response(
    status: int = 200, data: Any = None, content_type: str = "application/json"
) -> MagicMock:
    """A MagicMock shaped like an aiohttp ClientResponse."""
    response = MagicMock()
    response.status = status
    response.headers = {"Content-Type": content_type}
    response.json = AsyncMock(return_value=data)
    response.text = AsyncMock(
        return_value=data if isinstance(data, str) else json.dumps(data)
    )
    response.read = AsyncMock(return_value=b"")
    return response


def make_session(response: MagicMock) -> MagicMock:
    """A MagicMock ClientSession whose ``request`` context yields ``response``."""
    session = MagicMock()
    session.closed = False
    session.request.return_value.__aenter__.return_value = response
    session.request.return_value.__aexit__.return_value = False
    return session
