"""SELECT query builder."""
from __future__ import annotations

from typing import TYPE_CHECKING

from bindql.builder.base import FilterableQuery
from bindql.clauses import Identifier, Join, OrderItem, SelectParts
from bindql.errors import CompilationError
from bindql.grammar.base import Grammar

if TYPE_CHECKING:
    from bindql.connection import Connection

_JOIN_KINDS = frozenset({"INNER", "LEFT", "RIGHT", "FULL"})
_DIRECTIONS = frozenset({"ASC", "DESC"})


class SelectQuery(FilterableQuery):
    """Fluent ``SELECT`` builder.

    Example::

        query = (
            connection.select("id", "email")
            .from_("users")
            .where("active", True)
            .where("created_at", ">=", since)
            .order_by("id", "DESC")
            .limit(20)
        )
        rows = query.execute().fetchall()

    Args:
        grammar: Grammar that renders the statement.
        columns: Initial column list; empty means ``SELECT *``.
        connection: Connection used by :meth:`execute`.
    """

    clause = "SELECT"

    def __init__(
        self,
        grammar: Grammar,
        columns: tuple[Identifier, ...] = (),
        connection: Connection | None = None,
    ) -> None:
        super().__init__(grammar, connection)
        self._columns: list[Identifier] = list(columns)
        self._table: Identifier | None = None
        self._alias: str | None = None
        self._distinct = False
        self._joins: list[Join] = []
        self._group_by: list[Identifier] = []
        self._order_by: list[OrderItem] = []
        self._limit: int | None = None
        self._offset: int | None = None

    def columns(self, *columns: Identifier) -> SelectQuery:
        self._mutate()
        self._columns.extend(columns)
        return self

    def distinct(self, flag: bool = True) -> SelectQuery:
        self._mutate()
        self._distinct = flag
        return self

    def from_(self, table: Identifier, alias: str | None = None) -> SelectQuery:
        self._mutate()
        self._table = table
        self._alias = alias
        return self

    def join(
        self,
        table: Identifier,
        left: Identifier,
        right: Identifier,
        kind: str = "INNER",
        alias: str | None = None,
    ) -> SelectQuery:
        """Add ``<kind> JOIN table ON left = right``."""
        self._mutate()
        kind = kind.upper()
        if kind not in _JOIN_KINDS:
            raise CompilationError(f"Unsupported join kind '{kind}'.", clause="JOIN")
        self._joins.append(Join(table=table, left=left, right=right, kind=kind, alias=alias))
        return self

    def left_join(
        self, table: Identifier, left: Identifier, right: Identifier, alias: str | None = None
    ) -> SelectQuery:
        return self.join(table, left, right, kind="LEFT", alias=alias)

    def group_by(self, *columns: Identifier) -> SelectQuery:
        self._mutate()
        self._group_by.extend(columns)
        return self

    def order_by(self, column: Identifier, direction: str = "ASC") -> SelectQuery:
        self._mutate()
        direction = direction.upper()
        if direction not in _DIRECTIONS:
            raise CompilationError(
                f"Unsupported sort direction '{direction}'.", clause="ORDER BY"
            )
        self._order_by.append(OrderItem(column=column, direction=direction))
        return self

    def limit(self, limit: int | None) -> SelectQuery:
        self._mutate()
        self._limit = _non_negative(limit, "LIMIT")
        return self

    def offset(self, offset: int | None) -> SelectQuery:
        self._mutate()
        self._offset = _non_negative(offset, "OFFSET")
        return self

    def _render(self) -> str:
        return self._grammar.compile_select(
            SelectParts(
                columns=tuple(self._columns),
                table=self._table,
                alias=self._alias,
                distinct=self._distinct,
                joins=tuple(self._joins),
                conditions=tuple(self._conditions),
                group_by=tuple(self._group_by),
                order_by=tuple(self._order_by),
                limit=self._limit,
                offset=self._offset,
            )
        )


def _non_negative(value: int | None, clause: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise CompilationError(
            f"{clause} must be a non-negative integer, got {value!r}.", clause=clause
        )
    return value
