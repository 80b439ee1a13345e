"""File-backed key/value store for the session token and user details."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_EMAIL_KEY = "userEmail"
USER_ROLE_KEY = "userRole"


class LocalStorage:
    """Persistent string key/value storage backed by a JSON file.

    Every read goes to disk so that a token written by one process (e.g. the
    ``login`` command) is seen by the next request in another.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring corrupt storage file: {self.path}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = str(value)
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        self._write({})

    def get_token(self) -> Optional[str]:
        """Return the stored bearer token, if any."""
        return self.get_item(TOKEN_KEY)
