"""Key/value storage backends for persisted auth state.

``MemoryStorage`` keeps values for the lifetime of the process.
``JsonFileStorage`` keeps them in one JSON document on disk; every write
replaces the whole file, so a multi-key removal is a single atomic write.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Protocol

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove_many(self, keys: Iterable[str]) -> None: ...


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._values.pop(key, None)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)


class JsonFileStorage:
    """File-backed storage; unreadable files are treated as empty."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._values = self._load()

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable token storage at %s: %s", self._path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring token storage at %s: expected a JSON object", self._path)
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".tokens-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._values, handle)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._flush()

    def remove_many(self, keys: Iterable[str]) -> None:
        removed = False
        for key in keys:
            removed = self._values.pop(key, None) is not None or removed
        if removed:
            self._flush()
