from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import registry as orm_registry
from sqlalchemy.sql import Executable

from .exceptions import DuplicateNamedQuery, UnknownNamedQuery

NAMED_QUERIES_ATTRIBUTE = "__named_queries__"


@dataclass(frozen=True, slots=True)
class NamedQuery:
    """A statement addressable by name.

    ``statement`` is either SQL text with ``:name`` placeholders or a SQLAlchemy
    executable (``select``, ``update``, ``delete``) using ``bindparam``.
    """

    name: str
    statement: str | Executable
    description: str | None = None

    @property
    def is_textual(self) -> bool:
        return isinstance(self.statement, str)


class NamedQueryRegistry:
    """Name -> statement lookup shared by the repositories of one model registry."""

    def __init__(self, queries: Iterable[NamedQuery] = ()) -> None:
        self._queries: dict[str, NamedQuery] = {}
        for query in queries:
            self.add(query)

    def add(self, query: NamedQuery) -> NamedQuery:
        if query.name in self._queries:
            raise DuplicateNamedQuery(
                f"Named query '{query.name}' is already registered",
                details={"name": query.name},
            )
        self._queries[query.name] = query
        return query

    def register(
        self,
        name: str,
        statement: str | Executable,
        *,
        description: str | None = None,
    ) -> NamedQuery:
        return self.add(NamedQuery(name, statement, description))

    def get(self, name: str) -> NamedQuery:
        try:
            return self._queries[name]
        except KeyError:
            raise UnknownNamedQuery(
                f"Named query '{name}' is not registered", details={"name": name}
            ) from None

    def names(self) -> list[str]:
        return sorted(self._queries)

    def __contains__(self, name: object) -> bool:
        return name in self._queries

    def __iter__(self) -> Iterator[NamedQuery]:
        return iter(self._queries.values())

    def __len__(self) -> int:
        return len(self._queries)

    @classmethod
    def from_entities(cls, *entity_classes: type[Any]) -> "NamedQueryRegistry":
        """Collect the ``__named_queries__`` declared on the given classes."""

        instance = cls()
        for entity_class in entity_classes:
            declared = entity_class.__dict__.get(NAMED_QUERIES_ATTRIBUTE)
            if not declared:
                continue
            for query in _normalize(declared):
                instance.add(query)
        return instance

    @classmethod
    def from_registry(cls, registry: orm_registry) -> "NamedQueryRegistry":
        mapped = sorted(
            (mapper.class_ for mapper in registry.mappers),
            key=lambda item: item.__qualname__,
        )
        return cls.from_entities(*mapped)

    @classmethod
    def for_entity(cls, entity_class: type[Any]) -> "NamedQueryRegistry":
        """Registry covering every class mapped alongside ``entity_class``."""

        return cls.from_registry(sa_inspect(entity_class).registry)


def _normalize(
    declared: Mapping[str, str | Executable | NamedQuery] | Iterable[NamedQuery],
) -> list[NamedQuery]:
    if isinstance(declared, Mapping):
        queries = []
        for name, statement in declared.items():
            if isinstance(statement, NamedQuery):
                queries.append(statement)
            else:
                queries.append(NamedQuery(name, statement))
        return queries
    return list(declared)


__all__ = ["NAMED_QUERIES_ATTRIBUTE", "NamedQuery", "NamedQueryRegistry"]
