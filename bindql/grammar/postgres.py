"""PostgreSQL dialect grammar."""
from __future__ import annotations

from datetime import datetime, time

from bindql.grammar.base import Grammar


class PostgresGrammar(Grammar):
    """Renders PostgreSQL-flavoured SQL.

    Identifiers are double-quoted.  Date-time and time parameters are sent as
    ISO-8601 text, keeping fractional seconds and the UTC offset of aware
    values so ``timestamptz`` / ``timetz`` columns receive the exact instant.
    """

    @property
    def dialect_name(self) -> str:
        return "postgres"

    def format_datetime(self, value: datetime) -> str:
        return value.isoformat(sep=" ")

    def format_time(self, value: time) -> str:
        return value.isoformat()
