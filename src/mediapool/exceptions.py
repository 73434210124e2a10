"""Domain level exceptions and helpers for the provider and repository layers."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from sqlalchemy import exc as sa_exc

__all__ = [
    "MediaPoolError",
    "ProviderNotFoundError",
    "InvalidBinaryContentError",
    "MissingMediaNameError",
    "StorageError",
    "StorageKeyNotFoundError",
    "RepositoryError",
    "MediaNotFoundError",
    "IntegrityConstraintViolation",
    "DatabaseOperationError",
    "handle_sqlalchemy_errors",
]


class MediaPoolError(Exception):
    """Base class for application specific errors."""


class ProviderNotFoundError(MediaPoolError, LookupError):
    """Raised when the pool has no provider registered under a name."""

    def __init__(self, name: str | None) -> None:
        super().__init__(f"unable to retrieve the provider named: `{name}`")
        self.name = name


class InvalidBinaryContentError(MediaPoolError):
    """Raised when the binary content of a media cannot be resolved."""


class MissingMediaNameError(MediaPoolError):
    """Raised when no display name can be derived for a media."""


class StorageError(MediaPoolError):
    """Base class for storage port failures."""


class StorageKeyNotFoundError(StorageError, KeyError):
    """Raised when a key is requested without ``create`` and does not exist."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"storage key '{self.key}' not found"


class RepositoryError(MediaPoolError):
    """Base class for persistence layer failures."""


class MediaNotFoundError(RepositoryError):
    """Raised when a media record could not be located."""


class IntegrityConstraintViolation(RepositoryError):
    """Raised when a database constraint is violated."""


class DatabaseOperationError(RepositoryError):
    """Raised for unexpected database errors."""


@dataclass(slots=True)
class _EntityContext:
    """Internal helper describing the entity for error messages."""

    entity: str | None = None

    def format(self, message: str) -> str:
        if self.entity:
            return f"{self.entity}: {message}"
        return message


def _translate_sqlalchemy_error(exc: Exception, *, context: _EntityContext) -> RepositoryError:
    if isinstance(exc, sa_exc.IntegrityError):
        return IntegrityConstraintViolation(context.format("integrity constraint violated"))
    if isinstance(exc, sa_exc.DBAPIError):
        return DatabaseOperationError(context.format("database operation failed"))
    return RepositoryError(context.format(str(exc)))


@contextmanager
def handle_sqlalchemy_errors(*, entity: str | None = None) -> Iterator[None]:
    """Translate SQLAlchemy errors into domain specific ones."""

    context = _EntityContext(entity)
    try:
        yield
    except (sa_exc.IntegrityError, sa_exc.DBAPIError) as exc:
        raise _translate_sqlalchemy_error(exc, context=context) from exc
