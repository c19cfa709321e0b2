"""Prepared statement wrapper.

A :class:`PreparedStatement` pairs a driver statement handle with the
:class:`~bindql.compile.placeholders.CompiledStatement` produced when it was
prepared.  The placeholder names and type map belong to the statement, so
preparing another statement on the same connection never changes how this
one binds.

Executing is a three-step, all-or-nothing sequence:

1. resolve: look up and coerce the value of every positional slot;
2. bind: hand each value to the driver at its 1-based position;
3. execute: run the driver statement and return its result handle.

Missing or unconvertible values fail in step 1, before the driver sees any
value.  Driver exceptions from steps 2-3 propagate unchanged.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bindql.compile.coercion import coerce_value
from bindql.compile.placeholders import CompiledStatement
from bindql.compile.types import BindType
from bindql.driver.base import DriverStatement
from bindql.errors import MissingParameterError
from bindql.grammar.base import Grammar

#: ``(position, value, bind_type)`` for one positional slot.
BoundValue = tuple[int, Any, BindType]


class PreparedStatement:
    """A driver statement plus the placeholder layout it was compiled with.

    Args:
        handle: Driver-native statement for ``compiled.sql``.
        compiled: Compilation result captured at prepare time.
        grammar: Grammar used to render date-time and time values.
    """

    def __init__(
        self,
        handle: DriverStatement,
        compiled: CompiledStatement,
        grammar: Grammar,
    ) -> None:
        self._handle = handle
        self._compiled = compiled
        self._grammar = grammar

    def __repr__(self) -> str:
        return f"PreparedStatement(sql={self.sql!r}, names={self.names!r})"

    @property
    def handle(self) -> DriverStatement:
        return self._handle

    @property
    def sql(self) -> str:
        """The positional SQL handed to the driver."""
        return self._compiled.sql

    @property
    def names(self) -> tuple[str, ...]:
        return self._compiled.names

    @property
    def types(self) -> Mapping[str, BindType]:
        return self._compiled.types

    def parameters(self, parameters: Mapping[str, Any] | None = None) -> list[BoundValue]:
        """Resolve and coerce the value of every positional slot.

        Nothing is bound; useful for logging or inspecting a call.

        Args:
            parameters: Name → value map.  Names not used by the statement
                are ignored.

        Returns:
            One ``(position, value, bind_type)`` tuple per positional marker,
            in marker order.

        Raises:
            MissingParameterError: A placeholder name has no value.
            TypeCoercionError: A value cannot be converted to its bind type.
        """
        supplied = parameters or {}
        coerced: dict[str, Any] = {}
        bound: list[BoundValue] = []

        for position, name in enumerate(self._compiled.names, start=1):
            bind_type = self._compiled.types[name]
            if name not in coerced:
                if name not in supplied:
                    raise MissingParameterError(name, position)
                coerced[name] = coerce_value(name, supplied[name], bind_type, self._grammar)
            bound.append((position, coerced[name], bind_type))
        return bound

    def execute(self, parameters: Mapping[str, Any] | None = None) -> Any:
        """Bind ``parameters`` and execute.

        Args:
            parameters: Name → value map covering every placeholder name.

        Returns:
            The driver's result handle (a DB-API cursor, a SQLAlchemy
            ``CursorResult``, ...).

        Raises:
            MissingParameterError: A placeholder name has no value.
            TypeCoercionError: A value cannot be converted to its bind type.
        """
        for position, value, bind_type in self.parameters(parameters):
            self._handle.bind_value(position, value, bind_type)
        return self._handle.execute()

    __call__ = execute
