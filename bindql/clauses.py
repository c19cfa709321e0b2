"""Clause descriptors passed from query builders to a Grammar.

Builders collect user input into these immutable value objects; the
:class:`~bindql.grammar.base.Grammar` turns them into SQL.  Values never
appear here: wherever a value belongs, the descriptor carries the named
placeholder marker (e.g. ``i:param_0``) that the builder generated for it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Raw:
    """A SQL fragment rendered verbatim (never quoted).

    Example::

        connection.select(Raw("COUNT(*)")).from_("users")
    """

    sql: str

    def __str__(self) -> str:
        return self.sql


#: A column or table reference: an identifier to quote, or a raw fragment.
Identifier = Union[str, Raw]


@dataclass(frozen=True)
class Condition:
    """One ``WHERE`` predicate.

    Attributes:
        column: Left-hand identifier; ``None`` for a raw predicate.
        operator: Normalised upper-case operator (``=``, ``IN``, ``IS`` ...).
        markers: Placeholder markers for the right-hand side.  Empty for
            ``IS NULL`` / ``IS NOT NULL`` and for an empty ``IN`` list.
        conjunction: ``AND`` or ``OR`` joining this predicate to the previous.
        raw: Verbatim predicate SQL (used by ``where_raw``).
    """

    column: Identifier | None
    operator: str = "="
    markers: tuple[str, ...] = ()
    conjunction: str = "AND"
    raw: str | None = None


@dataclass(frozen=True)
class Join:
    """A ``JOIN table ON left = right`` clause."""

    table: Identifier
    left: Identifier
    right: Identifier
    kind: str = "INNER"
    alias: str | None = None


@dataclass(frozen=True)
class OrderItem:
    """One ``ORDER BY`` term."""

    column: Identifier
    direction: str = "ASC"


@dataclass(frozen=True)
class SelectParts:
    """Everything a Grammar needs to render a ``SELECT`` statement."""

    columns: tuple[Identifier, ...] = ()
    table: Identifier | None = None
    alias: str | None = None
    distinct: bool = False
    joins: tuple[Join, ...] = ()
    conditions: tuple[Condition, ...] = ()
    group_by: tuple[Identifier, ...] = ()
    order_by: tuple[OrderItem, ...] = ()
    limit: int | None = None
    offset: int | None = None


@dataclass(frozen=True)
class InsertParts:
    """An ``INSERT`` statement: one tuple of markers per row."""

    table: Identifier
    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class UpdateParts:
    """An ``UPDATE`` statement: ``(column, marker)`` assignments plus filters."""

    table: Identifier
    assignments: tuple[tuple[str, str], ...]
    conditions: tuple[Condition, ...] = ()
