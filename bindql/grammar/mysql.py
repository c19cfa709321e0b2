"""MySQL dialect grammar."""
from __future__ import annotations

from datetime import datetime

from bindql.grammar.base import Grammar, to_utc

# Largest LIMIT MySQL accepts.
_MYSQL_MAX_LIMIT = 18446744073709551615


class MySQLGrammar(Grammar):
    """Renders MySQL-flavoured SQL.

    Identifiers are quoted with backticks (`` ` ``) rather than double-quotes,
    and string literals may contain backslash escapes (``'it\\'s'``).

    Note: MySQL has no ``OFFSET`` without ``LIMIT``; an offset-only query
    renders the maximum unsigned 64-bit limit.  ``DATETIME`` has no UTC
    offset, so aware values are converted to UTC; fractional seconds are
    kept for ``DATETIME(6)`` columns.
    """

    quote_open = "`"
    quote_close = "`"
    backslash_escapes = True

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def build_limit(self, limit: int | None, offset: int | None) -> str:
        if limit is None and offset is not None:
            return f"LIMIT {_MYSQL_MAX_LIMIT} OFFSET {offset}"
        return super().build_limit(limit, offset)

    def format_datetime(self, value: datetime) -> str:
        value = to_utc(value)
        if value.microsecond:
            return value.strftime("%Y-%m-%d %H:%M:%S.%f")
        return value.strftime(self.date_time_format)
