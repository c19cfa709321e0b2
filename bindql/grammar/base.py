"""Grammar: dialect-specific identifier quoting and clause rendering.

The Template Method pattern is used:

- ``Grammar`` defines how every clause and statement is rendered, using
  ANSI SQL (double-quoted identifiers, ``LIMIT`` / ``OFFSET``).
- ``SQLiteGrammar``, ``PostgresGrammar``, ``MySQLGrammar`` and
  ``SQLServerGrammar`` override only the steps where their dialect differs.

A Grammar holds no per-call state.  One instance is shared by a
:class:`~bindql.connection.Connection` and every query builder it creates.
"""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, time, timezone

from bindql.clauses import (
    Condition,
    Identifier,
    InsertParts,
    Join,
    OrderItem,
    Raw,
    SelectParts,
    UpdateParts,
)


def to_utc(value: datetime) -> datetime:
    """Return ``value`` converted to naive UTC; naive values are returned as-is."""
    if value.utcoffset() is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Grammar:
    """ANSI SQL grammar and base class for dialect grammars.

    Attributes:
        quote_open: Opening identifier quote character.
        quote_close: Closing identifier quote character; doubled when it
            appears inside an identifier.
        date_time_format: ``strftime`` format for ``d:`` parameters.
        time_format: ``strftime`` format for ``t:`` parameters.
        backslash_escapes: String literals use backslash escapes.
        bracket_quotes: ``[...]`` is identifier quoting, not an array subscript.
    """

    quote_open: str = '"'
    quote_close: str = '"'
    date_time_format: str = "%Y-%m-%d %H:%M:%S"
    time_format: str = "%H:%M:%S"
    backslash_escapes: bool = False
    bracket_quotes: bool = False

    @property
    def dialect_name(self) -> str:
        """Return the canonical dialect name."""
        return "ansi"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # ------------------------------------------------------------------
    # Identifiers and values
    # ------------------------------------------------------------------

    def quote_identifier(self, name: Identifier) -> str:
        """Return a properly-quoted SQL identifier.

        Dotted names are quoted part by part and a ``*`` part is left bare,
        so ``users.*`` renders as ``"users".*``.  :class:`~bindql.clauses.Raw`
        fragments are returned verbatim.

        Args:
            name: Unquoted identifier (table or column name).

        Returns:
            Quoted identifier.
        """
        if isinstance(name, Raw):
            return name.sql
        return ".".join(self._quote_part(part) for part in name.split("."))

    def _quote_part(self, part: str) -> str:
        if part == "*":
            return part
        escaped = part.replace(self.quote_close, self.quote_close * 2)
        return f"{self.quote_open}{escaped}{self.quote_close}"

    def format_datetime(self, value: datetime) -> str:
        """Render a ``d:`` parameter value in the dialect's wire format.

        The format has no UTC offset, so aware values are converted to UTC
        first.
        """
        return to_utc(value).strftime(self.date_time_format)

    def format_time(self, value: time) -> str:
        """Render a ``t:`` parameter value in the dialect's wire format.

        A time carries no date to convert with, so the offset of an aware
        value is dropped.
        """
        return value.strftime(self.time_format)

    # ------------------------------------------------------------------
    # Clause renderers
    # ------------------------------------------------------------------

    def build_columns(self, columns: Sequence[Identifier]) -> str:
        if not columns:
            return "*"
        return ", ".join(self.quote_identifier(col) for col in columns)

    def build_table(self, table: Identifier, alias: str | None = None) -> str:
        table_sql = self.quote_identifier(table)
        if alias:
            return f"{table_sql} AS {self.quote_identifier(alias)}"
        return table_sql

    def build_join(self, join: Join) -> str:
        table_sql = self.build_table(join.table, join.alias)
        left = self.quote_identifier(join.left)
        right = self.quote_identifier(join.right)
        return f"{join.kind} JOIN {table_sql} ON {left} = {right}"

    def build_condition(self, condition: Condition) -> str:
        if condition.raw is not None:
            return f"({condition.raw})"

        column = self.quote_identifier(condition.column)
        op = condition.operator
        if op in ("IS", "IS NOT"):
            return f"{column} {op} NULL"
        if op in ("IN", "NOT IN"):
            if not condition.markers:
                # Empty list: IN matches nothing, NOT IN matches everything.
                return "1 = 0" if op == "IN" else "1 = 1"
            return f"{column} {op} ({', '.join(condition.markers)})"
        return f"{column} {op} {condition.markers[0]}"

    def build_conditions(self, conditions: Sequence[Condition]) -> str:
        parts: list[str] = []
        for i, condition in enumerate(conditions):
            sql = self.build_condition(condition)
            parts.append(sql if i == 0 else f"{condition.conjunction} {sql}")
        return " ".join(parts)

    def build_group_by(self, columns: Sequence[Identifier]) -> str:
        return ", ".join(self.quote_identifier(col) for col in columns)

    def build_order_by(self, items: Sequence[OrderItem]) -> str:
        rendered = []
        for item in items:
            column = self.quote_identifier(item.column)
            rendered.append(f"{column} {item.direction}" if item.direction else column)
        return ", ".join(rendered)

    def build_limit(self, limit: int | None, offset: int | None) -> str:
        parts: list[str] = []
        if limit is not None:
            parts.append(f"LIMIT {limit}")
        if offset is not None:
            parts.append(f"OFFSET {offset}")
        return " ".join(parts)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def compile_select(self, parts: SelectParts) -> str:
        keyword = "SELECT DISTINCT" if parts.distinct else "SELECT"
        sql: list[str] = [f"{keyword} {self.build_columns(parts.columns)}"]

        if parts.table is not None:
            sql.append(f"FROM {self.build_table(parts.table, parts.alias)}")
        for join in parts.joins:
            sql.append(self.build_join(join))
        if parts.conditions:
            sql.append(f"WHERE {self.build_conditions(parts.conditions)}")
        if parts.group_by:
            sql.append(f"GROUP BY {self.build_group_by(parts.group_by)}")
        if parts.order_by:
            sql.append(f"ORDER BY {self.build_order_by(parts.order_by)}")

        limit_sql = self.build_limit(parts.limit, parts.offset)
        if limit_sql:
            sql.append(limit_sql)
        return " ".join(sql)

    def compile_insert(self, parts: InsertParts) -> str:
        columns = ", ".join(self.quote_identifier(col) for col in parts.columns)
        rows = ", ".join(f"({', '.join(row)})" for row in parts.rows)
        return f"INSERT INTO {self.quote_identifier(parts.table)} ({columns}) VALUES {rows}"

    def compile_update(self, parts: UpdateParts) -> str:
        assignments = ", ".join(
            f"{self.quote_identifier(col)} = {marker}" for col, marker in parts.assignments
        )
        sql = f"UPDATE {self.quote_identifier(parts.table)} SET {assignments}"
        if parts.conditions:
            sql += f" WHERE {self.build_conditions(parts.conditions)}"
        return sql
