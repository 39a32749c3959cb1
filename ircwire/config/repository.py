from __future__ import annotations

import json
import logging
import os
from typing import Any

from ..logs.logger import logger


class ConfigRepository:
    """Repository for the client configuration file.

    The file holds one JSON object. Loads are cached until the file's
    modification time or size changes.
    """

    def __init__(self, path: str | os.PathLike[str]):
        if not isinstance(path, str | os.PathLike):
            raise TypeError("path must be str or os.PathLike")
        self.path = str(path)
        self._file_mtime: float | None = None
        self._file_size: int | None = None
        self._cached: dict[str, Any] | None = None

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def load_raw(self) -> dict[str, Any]:
        """Load the raw configuration mapping.

        Returns:
            The decoded object, or an empty dict when the file is missing or
            does not hold a JSON object.

        Raises:
            ValueError: The file is not valid JSON.
        """
        try:
            st = os.stat(self.path)
        except FileNotFoundError:
            return {}
        if (
            self._cached is not None
            and self._file_mtime == st.st_mtime
            and self._file_size == st.st_size
        ):
            return self._cached

        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            logger.log_event("config", "not_object", level=logging.WARNING, path=self.path)
            return {}
        self._cached = data
        self._file_mtime = st.st_mtime
        self._file_size = st.st_size
        return data
