from __future__ import annotations


class RepositoryError(Exception):
    """Base class for errors raised by the repository layer itself.

    Store level failures (integrity errors, lost connections, stale data) are
    not wrapped; they reach the caller as raised by SQLAlchemy.
    """

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class InvariantViolation(RepositoryError, ValueError):
    """A caller broke a precondition (missing id, bad parameter list)."""


class InvalidArgument(RepositoryError, ValueError):
    """An argument is outside its allowed range."""


class NoResultError(RepositoryError, LookupError):
    """A single-result query matched no rows."""


class NonUniqueResultError(RepositoryError, LookupError):
    """A single-result query matched more than one row."""


class UnsupportedConfiguration(RepositoryError, TypeError):
    """The repository cannot serve the entity type it was configured with."""


class UnknownNamedQuery(RepositoryError, KeyError):
    def __str__(self) -> str:
        return self.message


class DuplicateNamedQuery(RepositoryError, ValueError):
    pass


__all__ = [
    "DuplicateNamedQuery",
    "InvalidArgument",
    "InvariantViolation",
    "NoResultError",
    "NonUniqueResultError",
    "RepositoryError",
    "UnknownNamedQuery",
    "UnsupportedConfiguration",
]
