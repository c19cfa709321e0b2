"""Driver collaborator interfaces.

bindQL never talks to a database itself.  A driver adapter supplies the few
primitives the core needs: compile-time knowledge of the positional marker,
statement preparation, per-position binding, execution and transaction
control.  Transport, authentication and pooling stay inside the driver.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from bindql.compile.types import BindType
from bindql.errors import ConfigurationError

#: DB-API ``paramstyle`` → positional marker the placeholder compiler emits.
PARAMSTYLE_MARKERS: dict[str, str] = {
    "qmark": "?",
    "format": "%s",
    "pyformat": "%s",
}


def marker_for_paramstyle(paramstyle: str) -> str:
    """Return the positional marker for a DB-API ``paramstyle``.

    Raises:
        ConfigurationError: For styles without a single positional marker
            (``numeric``, ``named``).
    """
    try:
        return PARAMSTYLE_MARKERS[paramstyle]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported paramstyle '{paramstyle}'. "
            f"Supported: {', '.join(sorted(PARAMSTYLE_MARKERS))}."
        ) from None


@runtime_checkable
class DriverStatement(Protocol):
    """A driver-native prepared statement."""

    def bind_value(self, position: int, value: Any, bind_type: BindType) -> None:
        """Bind ``value`` at 1-based ``position``."""
        ...

    def execute(self) -> Any:
        """Execute with the bound values and return the driver's result handle."""
        ...


@runtime_checkable
class DriverConnection(Protocol):
    """A driver-native connection."""

    @property
    def placeholder(self) -> str:
        """Positional marker the driver expects (``?`` or ``%s``)."""
        ...

    def prepare(self, sql: str) -> DriverStatement: ...

    def begin(self) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def close(self) -> None: ...
