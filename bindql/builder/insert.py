"""INSERT query builder."""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from bindql.builder.base import BaseQuery
from bindql.clauses import Identifier, InsertParts
from bindql.errors import CompilationError
from bindql.grammar.base import Grammar

if TYPE_CHECKING:
    from bindql.connection import Connection


class InsertQuery(BaseQuery):
    """Fluent ``INSERT`` builder; several :meth:`values` calls insert several rows.

    Example::

        connection.insert("users").values({"email": "ada@example.com", "active": True}).execute()

        connection.insert("points", ["x", "y"]).values((1, 2), (3, 4)).execute()

    Args:
        grammar: Grammar that renders the statement.
        table: Target table.
        columns: Column order.  Inferred from the first mapping row when empty.
        connection: Connection used by :meth:`execute`.
    """

    clause = "INSERT"

    def __init__(
        self,
        grammar: Grammar,
        table: Identifier,
        columns: Sequence[str] = (),
        connection: Connection | None = None,
    ) -> None:
        super().__init__(grammar, connection)
        self._table = table
        self._columns: tuple[str, ...] = tuple(columns)
        self._rows: list[tuple[str, ...]] = []

    def columns(self, *columns: str) -> InsertQuery:
        self._mutate()
        if self._rows:
            raise CompilationError("Columns must be set before adding rows.", clause="INSERT")
        self._columns = tuple(columns)
        return self

    def values(self, *rows: Mapping[str, Any] | Sequence[Any]) -> InsertQuery:
        """Add one row per argument.

        A mapping row is matched to the columns by key; a sequence row by
        position.

        Raises:
            CompilationError: A row does not cover exactly the column set.
                No row of the call is added.
        """
        self._mutate()
        columns, params, counter = self._columns, dict(self._params), self._counter
        try:
            markers = [self._row_markers(row) for row in rows]
        except CompilationError:
            self._columns, self._params, self._counter = columns, params, counter
            raise
        self._rows.extend(markers)
        return self

    def _row_markers(self, row: Mapping[str, Any] | Sequence[Any]) -> tuple[str, ...]:
        if isinstance(row, Mapping):
            if not self._columns:
                self._columns = tuple(row)
            if set(row) != set(self._columns):
                raise CompilationError(
                    f"Row keys {sorted(row)} do not match columns {list(self._columns)}.",
                    clause="VALUES",
                )
            return tuple(self._bind(row[col]) for col in self._columns)

        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise CompilationError(
                f"A row must be a mapping or a sequence, got {type(row).__name__}.",
                clause="VALUES",
            )
        if len(row) != len(self._columns):
            raise CompilationError(
                f"Row has {len(row)} value(s) for {len(self._columns)} column(s).",
                clause="VALUES",
            )
        return tuple(self._bind(value) for value in row)

    def _render(self) -> str:
        if not self._rows:
            raise CompilationError(
                f"INSERT into {self._table!r} has no rows.", clause="VALUES"
            )
        return self._grammar.compile_insert(
            InsertParts(table=self._table, columns=self._columns, rows=tuple(self._rows))
        )
