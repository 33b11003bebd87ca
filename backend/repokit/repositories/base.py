from __future__ import annotations

from typing import Any, Generic, Mapping, TypeVar

from repokit.core.logging import get_logger
from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select, text
from sqlalchemy.engine import Row
from sqlalchemy.exc import MultipleResultsFound, NoResultFound
from sqlalchemy.orm import Mapper, Session, aliased
from sqlalchemy.sql import Executable
from sqlalchemy.sql.expression import TextClause, TextualSelect

from .exceptions import (
    InvalidArgument,
    InvariantViolation,
    NoResultError,
    NonUniqueResultError,
    UnsupportedConfiguration,
)
from .named_queries import NamedQueryRegistry
from .parameters import ParameterMap, bind_parameters, create_parameter_map

E = TypeVar("E")

Statement = str | Executable

logger = get_logger(__name__)


class BaseRepository:
    """Lightweight repository wrapper used by domain services."""

    def __init__(self, session: Session) -> None:
        self.session = session


class GenericRepository(BaseRepository, Generic[E]):
    """Uniform CRUD and query execution for one mapped entity type.

    Concrete repositories bind the entity either declaratively::

        class WidgetRepository(GenericRepository[Widget]):
            entity_class = Widget

    or per instance with ``GenericRepository(session, Widget)``. The session is
    owned by the caller; the repository never commits, rolls back or closes it.

    Textual statements are plain SQL with ``:name`` placeholders. When a
    textual entity query is paginated it is wrapped as a subquery, so it must
    select every column of the entity table under its own name.
    """

    entity_class: type[Any] | None = None

    def __init__(
        self,
        session: Session,
        entity_class: type[E] | None = None,
        *,
        named_queries: NamedQueryRegistry | None = None,
    ) -> None:
        super().__init__(session)
        self.entity_class = self._resolve_entity_class(entity_class)
        self._mapper: Mapper[Any] = sa_inspect(self.entity_class)
        if named_queries is None:
            named_queries = NamedQueryRegistry.for_entity(self.entity_class)
        self.named_queries = named_queries

    @classmethod
    def _resolve_entity_class(cls, explicit: type[Any] | None) -> type[Any]:
        candidate = explicit if explicit is not None else cls.entity_class
        if candidate is None:
            raise UnsupportedConfiguration(
                f"{cls.__name__} does not declare an entity_class",
                details={"repository": cls.__name__},
            )
        mapper = sa_inspect(candidate, raiseerr=False)
        if not isinstance(mapper, Mapper):
            raise UnsupportedConfiguration(
                f"{candidate!r} is not a mapped entity class",
                details={"repository": cls.__name__},
            )
        if len(mapper.primary_key) != 1:
            raise UnsupportedConfiguration(
                f"{candidate.__name__} must have exactly one primary key column",
                details={"primary_key": [column.name for column in mapper.primary_key]},
            )
        return candidate

    @property
    def entity_name(self) -> str:
        return self.entity_class.__name__

    # -- persistence ---------------------------------------------------

    def save(self, entity: E) -> None:
        """Make ``entity`` managed; an entity with a known identity is updated."""

        logger.debug("save %s", self.entity_name)
        self.session.add(entity)

    def merge(self, entity: E) -> E:
        """Copy ``entity`` onto a managed instance, write it and reload it.

        The flush and refresh happen before returning so store computed values
        (server defaults, triggers) are visible on the result.
        """

        logger.debug("merge %s", self.entity_name)
        merged = self.session.merge(entity)
        self.session.flush()
        self.session.refresh(merged)
        return merged

    def delete(self, entity: E) -> None:
        logger.debug("delete %s", self.entity_name)
        self.session.delete(entity)

    def load(self, entity_id: int | None) -> E | None:
        """Return the entity with ``entity_id`` or ``None`` when it does not exist."""

        if entity_id is None:
            raise InvariantViolation(
                "id must not be None", details={"entity": self.entity_name}
            )
        logger.debug("load %s id=%s", self.entity_name, entity_id)
        return self.session.get(self.entity_class, entity_id)

    def exists(self, entity_id: int | None) -> bool:
        return self.load(entity_id) is not None

    def load_all(self) -> list[E]:
        logger.debug("load_all %s", self.entity_name)
        return list(self.session.scalars(select(self.entity_class)).all())

    # -- queries ---------------------------------------------------------

    def load_by_query(
        self, stmt: Statement, parameters: Mapping[str, Any] | None = None
    ) -> E:
        """Run ``stmt`` and return its only row.

        Raises ``NoResultError`` for an empty result and
        ``NonUniqueResultError`` when more than one row matches.
        """

        return self._single_result(self._entity_statement(stmt), parameters, stmt)

    def find_by_query(
        self,
        stmt: Statement,
        parameters: Mapping[str, Any] | None = None,
        max_results: int | None = None,
    ) -> list[E]:
        if max_results is not None:
            self._check_max_results(max_results)
        statement = self._entity_statement(stmt, max_results=max_results)
        return self._result_list(statement, parameters, stmt)

    def load_by_named_query(
        self, query_name: str, parameters: Mapping[str, Any] | None = None
    ) -> E:
        named = self.named_queries.get(query_name)
        return self._single_result(
            self._entity_statement(named.statement), parameters, query_name
        )

    def find_single_by_named_query(
        self, query_name: str, parameters: Mapping[str, Any] | None = None
    ) -> E | None:
        """First row of the named query, or ``None``; extra rows are ignored."""

        named = self.named_queries.get(query_name)
        statement = self._entity_statement(named.statement)
        bindings = bind_parameters(parameters)
        logger.debug(
            "find_single %s query=%s params=%s",
            self.entity_name,
            query_name,
            sorted(bindings),
        )
        return self.session.scalars(statement, bindings).first()

    def find_by_named_query(
        self,
        query_name: str,
        parameters: Mapping[str, Any] | None = None,
        first_result: int | None = None,
        max_results: int | None = None,
    ) -> list[E]:
        """All rows of the named query, optionally paginated.

        ``first_result`` is a zero based row offset applied before the
        ``max_results`` cap.
        """

        if max_results is not None:
            self._check_max_results(max_results)
        if first_result is not None and first_result < 0:
            raise InvalidArgument(
                f"first_result must not be negative [{first_result}]",
                details={"first_result": first_result},
            )
        named = self.named_queries.get(query_name)
        statement = self._entity_statement(
            named.statement, first_result=first_result, max_results=max_results
        )
        return self._result_list(statement, parameters, query_name)

    def find_by_native_query(
        self, stmt: Statement, parameters: Mapping[str, Any] | None = None
    ) -> list[Row[Any]]:
        """Run dialect specific SQL; rows are returned as untyped records."""

        statement = text(stmt) if isinstance(stmt, str) else stmt
        bindings = bind_parameters(parameters)
        logger.debug(
            "native query %s params=%s", _describe(stmt), sorted(bindings)
        )
        self._flush_pending()
        return list(self.session.execute(statement, bindings).all())

    def execute_update(
        self, query_name: str, parameters: Mapping[str, Any] | None = None
    ) -> int:
        """Run a named bulk update or delete and return the affected row count."""

        named = self.named_queries.get(query_name)
        statement = (
            text(named.statement) if named.is_textual else named.statement
        )
        bindings = bind_parameters(parameters)
        self._flush_pending()
        result = self.session.execute(statement, bindings)
        logger.debug(
            "execute_update query=%s params=%s rows=%s",
            query_name,
            sorted(bindings),
            result.rowcount,
        )
        return result.rowcount

    create_parameter_map = staticmethod(create_parameter_map)

    # -- helpers -------------------------------------------------------

    def _entity_statement(
        self,
        stmt: Statement,
        *,
        first_result: int | None = None,
        max_results: int | None = None,
    ) -> Executable:
        paginated = first_result is not None or max_results is not None
        if isinstance(stmt, (str, TextClause, TextualSelect)):
            textual = text(stmt) if isinstance(stmt, str) else stmt
            if not paginated:
                return select(self.entity_class).from_statement(textual)
            if isinstance(textual, TextClause):
                textual = textual.columns(*self._mapper.local_table.columns)
            stmt = select(aliased(self.entity_class, textual.subquery()))
        if first_result is not None:
            stmt = stmt.offset(first_result)
        if max_results is not None:
            stmt = stmt.limit(max_results)
        return stmt

    def _single_result(
        self, statement: Executable, parameters: Mapping[str, Any] | None, source: Any
    ) -> E:
        bindings = bind_parameters(parameters)
        logger.debug(
            "load_single %s query=%s params=%s",
            self.entity_name,
            _describe(source),
            sorted(bindings),
        )
        try:
            return self.session.scalars(statement, bindings).one()
        except NoResultFound as exc:
            logger.debug("no %s matched %s", self.entity_name, _describe(source))
            raise NoResultError(
                f"No {self.entity_name} found for query",
                details={"query": _describe(source)},
            ) from exc
        except MultipleResultsFound as exc:
            logger.debug(
                "several %s matched %s", self.entity_name, _describe(source)
            )
            raise NonUniqueResultError(
                f"More than one {self.entity_name} found for query",
                details={"query": _describe(source)},
            ) from exc

    def _result_list(
        self, statement: Executable, parameters: Mapping[str, Any] | None, source: Any
    ) -> list[E]:
        bindings = bind_parameters(parameters)
        logger.debug(
            "find %s query=%s params=%s",
            self.entity_name,
            _describe(source),
            sorted(bindings),
        )
        return list(self.session.scalars(statement, bindings).all())

    def _flush_pending(self) -> None:
        # textual statements bypass ORM autoflush
        if self.session.autoflush:
            self.session.flush()

    @staticmethod
    def _check_max_results(max_results: int) -> None:
        if max_results < 1:
            raise InvalidArgument(
                f"max_results must not be less than 1 [{max_results}]",
                details={"max_results": max_results},
            )


def _describe(source: Any) -> str:
    if isinstance(source, TextClause):
        source = source.text
    if isinstance(source, str):
        return " ".join(source.split())
    return source.__class__.__name__


__all__ = ["BaseRepository", "GenericRepository", "ParameterMap", "Statement"]
