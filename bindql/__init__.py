"""bindQL – typed named placeholders and fluent query building over any SQL driver.

Write SQL with named, type-tagged placeholders; bindQL rewrites it for the
driver and binds every value with the right type::

    db.query(
        "SELECT * FROM orders WHERE customer_id = i:customer AND placed_at >= d:since",
        {"customer": "42", "since": date(2024, 1, 1)},
    )

Public API
----------
``connect``
    Open a :class:`Connection` from a SQLAlchemy URL.

``Connection``
    ``prepare`` / ``query`` / transactions / ``select`` / ``insert`` /
    ``update`` over a driver adapter.

``PlaceholderCompiler`` / ``compile_placeholders``
    The named → positional placeholder compiler on its own.

Placeholder prefixes
--------------------
``:name`` or ``s:name`` string, ``i:`` integer, ``f:`` float, ``b:`` boolean,
``l:`` large object, ``d:`` date-time, ``t:`` time.

Extensibility
-------------
New dialect grammars can be registered via::

    from bindql.grammar.registry import GrammarFactory

    @GrammarFactory.register("oracle")
    class OracleGrammar(Grammar):
        ...
"""

from __future__ import annotations

from typing import Any

from bindql.builder import CompiledQuery, InsertQuery, SelectQuery, UpdateQuery
from bindql.clauses import Raw
from bindql.compile import (
    TYPE_MAP,
    BindType,
    CompiledStatement,
    PlaceholderCompiler,
    compile_placeholders,
)
from bindql.config import ConnectionConfig
from bindql.connection import Connection
from bindql.driver import DBAPIDriver, DriverConnection, DriverStatement
from bindql.errors import (
    BindingError,
    BindQLError,
    CompilationError,
    ConfigurationError,
    MissingParameterError,
    ParseAmbiguityError,
    TransactionError,
    TypeCoercionError,
)
from bindql.grammar import (
    Grammar,
    GrammarFactory,
    MySQLGrammar,
    PostgresGrammar,
    SQLiteGrammar,
    SQLServerGrammar,
)
from bindql.statement import PreparedStatement

__all__ = [
    # Entry points
    "connect",
    "Connection",
    "ConnectionConfig",
    "PreparedStatement",
    # Placeholder compilation
    "TYPE_MAP",
    "BindType",
    "CompiledStatement",
    "PlaceholderCompiler",
    "compile_placeholders",
    # Grammars
    "Grammar",
    "GrammarFactory",
    "MySQLGrammar",
    "PostgresGrammar",
    "SQLiteGrammar",
    "SQLServerGrammar",
    # Builders
    "CompiledQuery",
    "InsertQuery",
    "Raw",
    "SelectQuery",
    "UpdateQuery",
    # Drivers
    "DBAPIDriver",
    "DriverConnection",
    "DriverStatement",
    # Errors
    "BindQLError",
    "BindingError",
    "CompilationError",
    "ConfigurationError",
    "MissingParameterError",
    "ParseAmbiguityError",
    "TransactionError",
    "TypeCoercionError",
]


def connect(url: str, **options: Any) -> Connection:
    """Open a :class:`Connection` for a SQLAlchemy database URL.

    This is a shortcut for ``Connection.from_config(ConnectionConfig(url=url, ...))``::

        db = bindql.connect("sqlite:///:memory:", strict_placeholders=True)

    Args:
        url: SQLAlchemy database URL.
        **options: Any other :class:`ConnectionConfig` field.

    Returns:
        A connection whose grammar matches the URL's backend unless
        ``grammar`` is given.

    Raises:
        pydantic.ValidationError: If ``options`` contains unknown or invalid fields.
        ConfigurationError: If no grammar fits the backend.
    """
    return Connection.from_config(ConnectionConfig(url=url, **options))
