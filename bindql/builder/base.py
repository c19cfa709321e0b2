"""Shared query-builder machinery.

Every builder keeps a private parameter map.  Each value the caller supplies
is stored under a generated name (``param_0``, ``param_1``, ...) and
referenced in the SQL by a type-tagged marker such as ``i:param_0``, the
same syntax the placeholder compiler parses.  The rendered
:class:`CompiledQuery` can therefore be executed as-is with
:meth:`Connection.query <bindql.connection.Connection.query>`.

Builders are single-use: the first :meth:`BaseQuery.build` freezes the
builder and any later mutation raises :class:`~bindql.errors.CompilationError`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from bindql.clauses import Condition, Identifier
from bindql.compile.types import infer_bind_type, placeholder_for
from bindql.errors import CompilationError
from bindql.grammar.base import Grammar

if TYPE_CHECKING:
    from bindql.connection import Connection

_UNSET: Any = object()

_F = TypeVar("_F", bound="FilterableQuery")

_OPERATORS = frozenset(
    {"=", "!=", "<>", "<", "<=", ">", ">=", "LIKE", "NOT LIKE", "IN", "NOT IN", "IS", "IS NOT"}
)
_LIST_TYPES = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class CompiledQuery:
    """The output of a query builder.

    Attributes:
        sql: SQL with named, type-tagged placeholders.
        params: Values for every placeholder name in ``sql``.
    """

    sql: str
    params: dict[str, Any]

    def __str__(self) -> str:
        return self.sql


class BaseQuery(ABC):
    """Base class for the SELECT / INSERT / UPDATE builders.

    Args:
        grammar: Grammar that renders the statement.
        connection: Connection used by :meth:`execute`; builders created via
            :class:`~bindql.connection.Connection` always have one.
    """

    clause = "QUERY"

    def __init__(self, grammar: Grammar, connection: Connection | None = None) -> None:
        self._grammar = grammar
        self._connection = connection
        self._params: dict[str, Any] = {}
        self._counter = 0
        self._compiled: CompiledQuery | None = None

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    def build(self) -> CompiledQuery:
        """Render the statement.

        The first call freezes the builder; later calls return the same
        :class:`CompiledQuery`.

        Raises:
            CompilationError: If the accumulated state cannot form a statement.
        """
        if self._compiled is None:
            sql = self._render()
            self._compiled = CompiledQuery(sql=sql, params=dict(self._params))
        return self._compiled

    def execute(self) -> Any:
        """Render and run the statement on the builder's connection.

        Returns:
            The driver's result handle.
        """
        if self._connection is None:
            raise CompilationError(
                f"{type(self).__name__} is not attached to a connection.", clause=self.clause
            )
        compiled = self.build()
        return self._connection.query(compiled.sql, compiled.params)

    def __str__(self) -> str:
        return self.build().sql

    @abstractmethod
    def _render(self) -> str:
        """Return the statement SQL."""

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    def _mutate(self) -> None:
        if self._compiled is not None:
            raise CompilationError(
                f"{type(self).__name__} was already rendered and cannot be modified.",
                clause=self.clause,
            )

    def _bind(self, value: Any) -> str:
        """Store ``value`` and return its type-tagged placeholder marker.

        Generated names skip any name already taken by a
        :meth:`FilterableQuery.where_raw` parameter.
        """
        name = f"param_{self._counter}"
        self._counter += 1
        while name in self._params:
            name = f"param_{self._counter}"
            self._counter += 1
        self._params[name] = value
        return placeholder_for(name, infer_bind_type(value))


class FilterableQuery(BaseQuery):
    """Adds ``WHERE`` handling shared by SELECT and UPDATE builders."""

    def __init__(self, grammar: Grammar, connection: Connection | None = None) -> None:
        super().__init__(grammar, connection)
        self._conditions: list[Condition] = []

    def where(self: _F, column: Identifier, operator: Any, value: Any = _UNSET) -> _F:
        """Add an ``AND`` predicate.

        ``where("age", ">", 18)`` compares with an explicit operator;
        ``where("name", "Ada")`` is shorthand for ``=``.  ``None`` renders
        ``IS NULL`` / ``IS NOT NULL`` and a list renders ``IN (...)``.

        Returns:
            ``self`` for chaining.

        Raises:
            CompilationError: Unknown operator, or an operator that does not
                fit the value (``>`` with ``None``, ``IN`` with a scalar).
        """
        return self._add_condition(column, operator, value, "AND")

    def or_where(self: _F, column: Identifier, operator: Any, value: Any = _UNSET) -> _F:
        """Add an ``OR`` predicate; see :meth:`where`."""
        return self._add_condition(column, operator, value, "OR")

    def where_raw(
        self: _F, expression: str, parameters: Mapping[str, Any] | None = None
    ) -> _F:
        """Add a verbatim ``AND`` predicate.

        ``expression`` may use named placeholders of its own; their values
        go in ``parameters``::

            query.where_raw("created_at > d:since", {"since": cutoff})
        """
        self._mutate()
        for name, value in (parameters or {}).items():
            if name in self._params and self._params[name] != value:
                raise CompilationError(
                    f"Parameter '{name}' is already bound to a different value.",
                    clause="WHERE",
                )
            self._params[name] = value
        self._conditions.append(Condition(column=None, raw=expression))
        return self

    def _add_condition(
        self: _F, column: Identifier, operator: Any, value: Any, conjunction: str
    ) -> _F:
        self._mutate()
        if value is _UNSET:
            operator, value = "=", operator
        self._conditions.append(self._condition(column, operator, value, conjunction))
        return self

    def _condition(
        self, column: Identifier, operator: str, value: Any, conjunction: str
    ) -> Condition:
        op = " ".join(str(operator).upper().split())
        if op not in _OPERATORS:
            raise CompilationError(f"Unsupported operator '{operator}'.", clause="WHERE")

        if value is None:
            if op in ("=", "IS"):
                return Condition(column, "IS", (), conjunction)
            if op in ("!=", "<>", "IS NOT"):
                return Condition(column, "IS NOT", (), conjunction)
            raise CompilationError(f"Operator '{op}' cannot compare with NULL.", clause="WHERE")

        if isinstance(value, _LIST_TYPES):
            if op in ("=", "IN"):
                op = "IN"
            elif op in ("!=", "<>", "NOT IN"):
                op = "NOT IN"
            else:
                raise CompilationError(
                    f"Operator '{op}' cannot compare with a list.", clause="WHERE"
                )
            return Condition(column, op, tuple(self._bind(v) for v in value), conjunction)

        if op in ("IN", "NOT IN", "IS", "IS NOT"):
            raise CompilationError(
                f"Operator '{op}' requires a list or None, got {type(value).__name__}.",
                clause="WHERE",
            )
        return Condition(column, op, (self._bind(value),), conjunction)
