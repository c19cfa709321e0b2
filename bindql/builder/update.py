"""UPDATE query builder."""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from bindql.builder.base import FilterableQuery
from bindql.clauses import Identifier, UpdateParts
from bindql.errors import CompilationError
from bindql.grammar.base import Grammar

if TYPE_CHECKING:
    from bindql.connection import Connection


class UpdateQuery(FilterableQuery):
    """Fluent ``UPDATE`` builder.

    Example::

        connection.update("users", {"active": False}).where("id", 7).execute()

    An update without any ``where`` call touches every row.

    Args:
        grammar: Grammar that renders the statement.
        table: Target table.
        values: Initial ``column → value`` assignments.
        connection: Connection used by :meth:`execute`.
    """

    clause = "UPDATE"

    def __init__(
        self,
        grammar: Grammar,
        table: Identifier,
        values: Mapping[str, Any] | None = None,
        connection: Connection | None = None,
    ) -> None:
        super().__init__(grammar, connection)
        self._table = table
        self._assignments: dict[str, str] = {}
        if values:
            self.set_values(values)

    def set(self, column: str, value: Any) -> UpdateQuery:
        """Assign ``value`` to ``column``; a repeated column keeps the last value."""
        self._mutate()
        self._assignments[column] = self._bind(value)
        return self

    def set_values(self, values: Mapping[str, Any]) -> UpdateQuery:
        for column, value in values.items():
            self.set(column, value)
        return self

    def _render(self) -> str:
        if not self._assignments:
            raise CompilationError(f"UPDATE of {self._table!r} sets no columns.", clause="SET")
        return self._grammar.compile_update(
            UpdateParts(
                table=self._table,
                assignments=tuple(self._assignments.items()),
                conditions=tuple(self._conditions),
            )
        )
