"""Custom exception hierarchy for bindQL.

All public errors inherit from BindQLError so callers can catch the base
class for any bindQL-specific failure.

Errors raised by the underlying database driver (``sqlite3.Error``,
``sqlalchemy.exc.DBAPIError``, ...) are never wrapped: they reach the caller
exactly as the driver raised them.
"""
from __future__ import annotations

from typing import Any


class BindQLError(Exception):
    """Base exception for all bindQL errors."""


class ParseAmbiguityError(BindQLError):
    """Raised in strict mode when a token looks like a malformed placeholder.

    Args:
        message: Human-readable description.
        token: The offending source text (e.g. ``x:foo``).
        position: Offset of the token in the raw SQL string.
    """

    def __init__(self, message: str, token: str, position: int) -> None:
        super().__init__(message)
        self.token = token
        self.position = position


class BindingError(BindQLError):
    """Base class for failures detected while resolving bind values.

    Binding errors are always raised before the driver statement receives a
    single value, so a statement is either fully bound and executed or not
    touched at all.
    """


class MissingParameterError(BindingError):
    """Raised when a placeholder name has no value in the supplied parameters."""

    def __init__(self, name: str, position: int) -> None:
        super().__init__(
            f"Missing value for parameter '{name}' (position {position})."
        )
        self.name = name
        self.position = position


class TypeCoercionError(BindingError):
    """Raised when a value cannot be converted to its resolved bind type.

    Args:
        name: Parameter name.
        bind_type: The :class:`~bindql.compile.types.BindType` the name
            resolved to.
        value: The offending value.
    """

    def __init__(self, name: str, bind_type: Any, value: Any) -> None:
        super().__init__(
            f"Cannot bind {type(value).__name__} value {value!r} "
            f"to parameter '{name}' as {bind_type}."
        )
        self.name = name
        self.bind_type = bind_type
        self.value = value


class CompilationError(BindQLError):
    """Raised when a query builder cannot render a statement.

    Args:
        message: Human-readable description.
        clause: The clause being built when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class ConfigurationError(BindQLError):
    """Raised when a grammar, driver or connection is misconfigured."""


class TransactionError(BindQLError):
    """Raised when a transaction is started while another is still active."""
