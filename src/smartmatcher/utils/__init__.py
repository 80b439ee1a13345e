"""Utility helpers: HTTP gateway, logging setup and console rendering."""

from .http_client import HTTPClient, HTTPClientError, HTTPRequestError

__all__ = ["HTTPClient", "HTTPClientError", "HTTPRequestError"]
