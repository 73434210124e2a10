"""Abstractions over media storage backends.

The storage port is a key/value byte store addressed by path strings. Keys
are always built by providers from ``generate_path`` and the media's
``provider_reference``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from ..exceptions import StorageError, StorageKeyNotFoundError

logger = logging.getLogger(__name__)


class Filesystem:
    """Low-level persistence API for stored media bytes."""

    def get(self, key: str, create: bool = False) -> "StoredFile":
        """Return a handle for ``key``.

        Raises :class:`StorageKeyNotFoundError` when the key is missing and
        ``create`` is false.
        """

        raise NotImplementedError

    def has(self, key: str) -> bool:
        raise NotImplementedError

    def read(self, key: str) -> bytes:
        raise NotImplementedError

    def write(self, key: str, content: bytes) -> int:
        """Overwrite ``key`` with ``content`` and return the written size."""

        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


@dataclass(slots=True)
class StoredFile:
    """Handle on a single key of a :class:`Filesystem`."""

    key: str
    filesystem: Filesystem

    def exists(self) -> bool:
        return self.filesystem.has(self.key)

    def get_content(self) -> bytes:
        return self.filesystem.read(self.key)

    def set_content(self, content: bytes) -> int:
        return self.filesystem.write(self.key, content)

    def delete(self) -> None:
        self.filesystem.delete(self.key)


@dataclass(slots=True)
class InMemoryFilesystem(Filesystem):
    """Dictionary backed storage used by tests and ephemeral deployments."""

    files: dict[str, bytes] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self, key: str, create: bool = False) -> StoredFile:
        if not create and key not in self.files:
            raise StorageKeyNotFoundError(key)
        return StoredFile(key=key, filesystem=self)

    def has(self, key: str) -> bool:
        return key in self.files

    def read(self, key: str) -> bytes:
        try:
            return self.files[key]
        except KeyError:
            raise StorageKeyNotFoundError(key) from None

    def write(self, key: str, content: bytes) -> int:
        with self._lock:
            self.files[key] = bytes(content)
        return len(content)

    def delete(self, key: str) -> None:
        with self._lock:
            self.files.pop(key, None)


@dataclass(slots=True)
class LocalFilesystem(Filesystem):
    """Store media bytes as regular files under ``root``."""

    root: Path

    def path_for(self, key: str) -> Path:
        relative = PurePosixPath(key)
        if relative.is_absolute() or ".." in relative.parts:
            raise StorageError(f"invalid storage key '{key}'")
        return self.root.joinpath(*relative.parts)

    def get(self, key: str, create: bool = False) -> StoredFile:
        if not create and not self.has(key):
            raise StorageKeyNotFoundError(key)
        return StoredFile(key=key, filesystem=self)

    def has(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def read(self, key: str) -> bytes:
        path = self.path_for(key)
        if not path.is_file():
            raise StorageKeyNotFoundError(key)
        return path.read_bytes()

    def write(self, key: str, content: bytes) -> int:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(f".{path.name}.tmp")
        tmp.write_bytes(content)
        tmp.replace(path)
        logger.debug("media.storage.local.written", extra={"key": key, "path": str(path)})
        return len(content)

    def delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)
