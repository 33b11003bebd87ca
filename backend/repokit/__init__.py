"""Generic SQLAlchemy repositories with uniform CRUD and query execution."""

from repokit.repositories import (
    BaseRepository,
    GenericRepository,
    InvalidArgument,
    InvariantViolation,
    NamedQuery,
    NamedQueryRegistry,
    NoResultError,
    NonUniqueResultError,
    ParameterMap,
    RepositoryError,
    UnknownNamedQuery,
    UnsupportedConfiguration,
    create_parameter_map,
)

__version__ = "0.1.0"

__all__ = [
    "BaseRepository",
    "GenericRepository",
    "InvalidArgument",
    "InvariantViolation",
    "NamedQuery",
    "NamedQueryRegistry",
    "NoResultError",
    "NonUniqueResultError",
    "ParameterMap",
    "RepositoryError",
    "UnknownNamedQuery",
    "UnsupportedConfiguration",
    "create_parameter_map",
]
