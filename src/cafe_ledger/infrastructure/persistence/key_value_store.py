"""Key-value string stores used for snapshot persistence.

A store only knows how to get and set whole string values under fixed
keys; serialization of collections happens in the repositories.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"[A-Za-z0-9_.-]+")


class SnapshotError(Exception):
    """A snapshot could not be read back or written out."""


class KeyValueStore(ABC):

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``."""


class InMemoryKeyValueStore(KeyValueStore):

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileKeyValueStore(KeyValueStore):
    """One ``<key>.json`` file per key inside ``directory``.

    Writes go to a temporary file in the same directory and are then
    renamed over the target, so a reader sees either the old snapshot or
    the new one, never half of each.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._replace_atomically(path, value)
        except OSError as exc:
            raise SnapshotError(f"Could not write snapshot '{key}': {exc}") from exc
        logger.debug("Flushed snapshot '%s' (%d bytes)", key, len(value))

    @staticmethod
    def _replace_atomically(path: Path, value: str) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.fullmatch(key):
            raise ValueError(f"Unsupported snapshot key: {key!r}")
        return self._directory / f"{key}.json"
