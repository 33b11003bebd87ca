from .base import BaseRepository, GenericRepository
from .exceptions import (
    DuplicateNamedQuery,
    InvalidArgument,
    InvariantViolation,
    NoResultError,
    NonUniqueResultError,
    RepositoryError,
    UnknownNamedQuery,
    UnsupportedConfiguration,
)
from .named_queries import NamedQuery, NamedQueryRegistry
from .parameters import ParameterMap, create_parameter_map

__all__ = [
    "BaseRepository",
    "GenericRepository",
    "NamedQuery",
    "NamedQueryRegistry",
    "ParameterMap",
    "create_parameter_map",
    "RepositoryError",
    "InvariantViolation",
    "InvalidArgument",
    "NoResultError",
    "NonUniqueResultError",
    "UnsupportedConfiguration",
    "UnknownNamedQuery",
    "DuplicateNamedQuery",
]
