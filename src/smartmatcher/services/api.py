"""
Backend gateway for smartmatcher.

``ApiClient`` owns one :class:`~smartmatcher.utils.http_client.HTTPClient`
pointed at the backend base URL and signs every request with the bearer token
found in local storage. Service classes build on its ``get``/``post``/``put``/
``delete`` helpers, which return the parsed response body only.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import aiohttp

from ..config import AppConfig, get_config
from ..exceptions import UploadError
from ..storage import LocalStorage
from ..utils.http_client import HTTPClient

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin JSON gateway to the matcher backend."""

    def __init__(
        self,
        base_url: str,
        storage: LocalStorage,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        http_client: Optional[HTTPClient] = None,
    ):
        self.storage = storage
        self.http = http_client or HTTPClient(
            base_url=base_url,
            timeout=timeout,
            connect_timeout=connect_timeout,
            headers={"Accept": "application/json"},
            token_provider=storage.get_token,
        )

    @classmethod
    def from_config(
        cls, app_config: Optional[AppConfig] = None, storage: Optional[LocalStorage] = None
    ) -> "ApiClient":
        """Create a client from application configuration."""
        app_config = app_config or get_config()
        return cls(
            base_url=app_config.api.base_url,
            storage=storage or LocalStorage(app_config.storage.path),
            timeout=app_config.api.timeout,
            connect_timeout=app_config.api.connect_timeout,
        )

    async def __aenter__(self) -> "ApiClient":
        await self.http.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.http.close()

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        _, data = await self.http.get(path, params=params)
        return data

    async def post(
        self,
        path: str,
        json_data: Optional[Any] = None,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        _, body = await self.http.post(path, data=data, json_data=json_data, headers=headers)
        return body

    async def put(
        self,
        path: str,
        json_data: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        _, body = await self.http.put(path, json_data=json_data, params=params)
        return body

    async def delete(self, path: str) -> Any:
        _, body = await self.http.delete(path)
        return body

    async def post_form(self, path: str, fields: Dict[str, str]) -> Any:
        """POST ``application/x-www-form-urlencoded`` fields."""
        return await self.post(
            path,
            data=fields,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

    async def upload_files(
        self, path: str, files: Iterable[Union[str, Path]], field_name: str = "files"
    ) -> Any:
        """POST files as ``multipart/form-data``, one part per file."""
        form = aiohttp.FormData()
        handles = []
        try:
            for file_path in files:
                file_path = Path(file_path)
                try:
                    handle = open(file_path, "rb")
                except OSError as e:
                    raise UploadError(f"Could not read {file_path.name}: {e.strerror}") from e
                handles.append(handle)
                form.add_field(field_name, handle, filename=file_path.name)
            logger.info(f"Uploading {len(handles)} file(s) to {path}")
            return await self.post(path, data=form)
        finally:
            for handle in handles:
                handle.close()
