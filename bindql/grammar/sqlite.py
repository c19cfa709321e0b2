"""SQLite dialect grammar."""
from __future__ import annotations

from bindql.grammar.base import Grammar


class SQLiteGrammar(Grammar):
    """Renders SQLite-flavoured SQL.

    Identifiers are double-quoted.  SQLite rejects ``OFFSET`` without a
    ``LIMIT``, so an offset-only query renders ``LIMIT -1 OFFSET n``
    (a negative limit means "no limit").

    Date-time values use ``YYYY-MM-DD HH:MM:SS``, the format produced by
    SQLite's own ``datetime()`` function.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def build_limit(self, limit: int | None, offset: int | None) -> str:
        if limit is None and offset is not None:
            return f"LIMIT -1 OFFSET {offset}"
        return super().build_limit(limit, offset)
