"""Atomic JSON file storage.

Every document is written to a temporary file in the target directory and
moved into place with ``os.replace``, so readers see either the old or the new
document, never a partial one.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Generic, TypeVar

from luckydraw.errors import PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonFileStore:
    """Read/write one JSON document at ``path``."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def read(self) -> Any | None:
        """Return the parsed document, or None when missing or unreadable."""

        if not self._path.exists():
            return None
        try:
            with self._path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError):
            logger.error("Failed to read %s, falling back to defaults", self._path, exc_info=True)
            return None

    def write(self, data: Any) -> None:
        directory = self._path.parent
        tmp_path: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{self._path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                try:
                    os.unlink(tmp_path)
                except OSError:
                    logger.warning("Could not remove temp file %s", tmp_path)
            logger.error("Failed to write %s", self._path, exc_info=True)
            raise PersistenceError(
                message=f"Failed to write {self._path.name}",
                details=str(exc),
            ) from exc


class JsonRepository(Generic[T]):
    """Typed ``load()``/``save()`` over a :class:`JsonFileStore`.

    Subclasses name the file and the model conversions.
    """

    filename: str = ""

    def __init__(
        self,
        data_dir: str | os.PathLike[str],
        *,
        from_dict: Callable[[dict[str, Any]], T],
        to_dict: Callable[[T], dict[str, Any]],
        default: Callable[[], T],
    ) -> None:
        self._store = JsonFileStore(Path(data_dir) / self.filename)
        self._from_dict = from_dict
        self._to_dict = to_dict
        self._default = default

    @property
    def path(self) -> Path:
        return self._store.path

    def exists(self) -> bool:
        return self._store.exists()

    def load(self) -> T:
        raw = self._store.read()
        if not isinstance(raw, dict):
            return self._default()
        try:
            return self._from_dict(raw)
        except (KeyError, TypeError, ValueError):
            logger.error("Malformed document %s, using defaults", self._store.path, exc_info=True)
            return self._default()

    def save(self, value: T) -> None:
        self._store.write(self._to_dict(value))
