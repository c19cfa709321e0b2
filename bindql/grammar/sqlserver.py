"""SQL Server dialect grammar."""
from __future__ import annotations

from dataclasses import replace

from bindql.clauses import OrderItem, Raw, SelectParts
from bindql.grammar.base import Grammar


class SQLServerGrammar(Grammar):
    """Renders T-SQL.

    Identifiers are quoted with square brackets; a closing ``]`` inside a
    name is doubled.  Bracketed text in raw SQL is an identifier, so
    placeholders are never rewritten inside it.

    Paging uses ``OFFSET n ROWS FETCH NEXT m ROWS ONLY``, which T-SQL only
    accepts after an ``ORDER BY``: unordered paged queries get
    ``ORDER BY (SELECT NULL)``.
    """

    quote_open = "["
    quote_close = "]"
    bracket_quotes = True

    @property
    def dialect_name(self) -> str:
        return "sqlserver"

    def build_limit(self, limit: int | None, offset: int | None) -> str:
        if limit is None and offset is None:
            return ""
        sql = f"OFFSET {offset or 0} ROWS"
        if limit is not None:
            sql += f" FETCH NEXT {limit} ROWS ONLY"
        return sql

    def compile_select(self, parts: SelectParts) -> str:
        paged = parts.limit is not None or parts.offset is not None
        if paged and not parts.order_by:
            parts = replace(parts, order_by=(OrderItem(Raw("(SELECT NULL)"), ""),))
        return super().compile_select(parts)
