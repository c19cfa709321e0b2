"""Connection facade.

:class:`Connection` composes a driver adapter with a
:class:`~bindql.grammar.base.Grammar` and a
:class:`~bindql.compile.placeholders.PlaceholderCompiler`.  It exposes only the
operations bindQL needs (prepare, query, transactions, query builders) rather
than the driver's full surface.

Usage::

    import sqlite3
    from bindql import Connection, DBAPIDriver, SQLiteGrammar

    db = Connection(DBAPIDriver(sqlite3.connect(":memory:")), SQLiteGrammar())
    db.query("CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT, joined TEXT)")
    db.query(
        "INSERT INTO users (email, joined) VALUES (:email, d:joined)",
        {"email": "ada@example.com", "joined": datetime(2024, 5, 1, 9, 30)},
    )
    with db.transaction():
        db.update("users", {"email": "ada@example.org"}).where("id", 1).execute()
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from types import TracebackType
from typing import TYPE_CHECKING, Any

from bindql.builder.insert import InsertQuery
from bindql.builder.select import SelectQuery
from bindql.builder.update import UpdateQuery
from bindql.clauses import Identifier
from bindql.compile.placeholders import PlaceholderCompiler
from bindql.driver.base import DriverConnection
from bindql.errors import TransactionError
from bindql.grammar.base import Grammar
from bindql.statement import PreparedStatement

if TYPE_CHECKING:
    from bindql.config import ConnectionConfig

logger = logging.getLogger("bindql.connection")


class Connection:
    """Prepares, executes and builds statements over a driver connection.

    Args:
        driver: Driver adapter (see :mod:`bindql.driver`).
        grammar: Dialect grammar shared with every builder; defaults to the
            ANSI :class:`~bindql.grammar.base.Grammar`.
        strict_placeholders: Reject malformed placeholder tokens with
            :class:`~bindql.errors.ParseAmbiguityError` instead of passing
            them through.
    """

    def __init__(
        self,
        driver: DriverConnection,
        grammar: Grammar | None = None,
        *,
        strict_placeholders: bool = False,
    ) -> None:
        self._driver = driver
        self._grammar = grammar if grammar is not None else Grammar()
        self._compiler = PlaceholderCompiler(
            driver.placeholder,
            strict=strict_placeholders,
            backslash_escapes=self._grammar.backslash_escapes,
            bracket_quotes=self._grammar.bracket_quotes,
        )
        self._in_transaction = False

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> Connection:
        """Open a connection described by ``config`` through SQLAlchemy.

        Raises:
            ImportError: If SQLAlchemy is not installed.
            ConfigurationError: If no grammar fits the URL's backend.
        """
        try:
            from sqlalchemy import create_engine
        except ImportError as exc:
            raise ImportError(
                "SQLAlchemy is required for Connection.from_config(). "
                'Install it with: pip install "bindql[sqlalchemy]"'
            ) from exc

        from bindql.driver.sqla import SQLAlchemyDriver
        from bindql.grammar.registry import GrammarFactory

        grammar = GrammarFactory.create(config.resolve_grammar())
        engine = create_engine(config.url, echo=config.echo, **config.engine_options)
        logger.debug("Connecting to %s with %r", engine.url, grammar)
        driver = SQLAlchemyDriver(engine.connect(), engine=engine)
        return cls(driver, grammar, strict_placeholders=config.strict_placeholders)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def driver(self) -> DriverConnection:
        return self._driver

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def in_transaction(self) -> bool:
        """Whether :meth:`begin_transaction` was called without a commit/rollback."""
        return self._in_transaction

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def prepare(self, sql: str) -> PreparedStatement:
        """Compile ``sql`` and prepare it on the driver.

        Each call compiles into a new
        :class:`~bindql.compile.placeholders.CompiledStatement` owned by the
        returned statement.

        Args:
            sql: SQL with named, optionally type-tagged placeholders.

        Returns:
            The prepared statement.
        """
        compiled = self._compiler.compile(sql)
        handle = self._driver.prepare(compiled.sql)
        logger.debug("Prepared %r", compiled.sql)
        return PreparedStatement(handle, compiled, self._grammar)

    __call__ = prepare

    def query(self, sql: str, parameters: Mapping[str, Any] | None = None) -> Any:
        """Prepare and execute ``sql`` with ``parameters``.

        Returns:
            The driver's result handle.
        """
        return self.prepare(sql).execute(parameters)

    def quote_id(self, identifier: Identifier) -> str:
        """Quote ``identifier`` with the connection's grammar."""
        return self._grammar.quote_identifier(identifier)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def begin_transaction(self) -> Connection:
        """Start a transaction.

        Raises:
            TransactionError: A transaction started here is still active.
        """
        if self._in_transaction:
            raise TransactionError("A transaction is already active on this connection.")
        self._driver.begin()
        self._in_transaction = True
        logger.debug("Transaction started")
        return self

    def commit(self) -> Connection:
        """Commit; the transaction is over even if the driver raises."""
        try:
            self._driver.commit()
        finally:
            self._in_transaction = False
        logger.debug("Transaction committed")
        return self

    def rollback(self) -> Connection:
        try:
            self._driver.rollback()
        finally:
            self._in_transaction = False
        logger.debug("Transaction rolled back")
        return self

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Run the ``with`` block in a transaction.

        Commits when the block exits normally; rolls back and re-raises when
        the block or the commit raises.
        """
        self.begin_transaction()
        try:
            yield self
        except BaseException:
            self.rollback()
            raise
        try:
            self.commit()
        except BaseException:
            logger.debug("Commit failed; rolling back")
            self.rollback()
            raise

    # ------------------------------------------------------------------
    # Query builders
    # ------------------------------------------------------------------

    def select(self, *columns: Identifier) -> SelectQuery:
        """Start a ``SELECT``; no columns means ``SELECT *``."""
        return SelectQuery(self._grammar, columns, connection=self)

    def insert(self, table: Identifier, columns: Sequence[str] | None = None) -> InsertQuery:
        return InsertQuery(self._grammar, table, columns or (), connection=self)

    def update(self, table: Identifier, values: Mapping[str, Any] | None = None) -> UpdateQuery:
        return UpdateQuery(self._grammar, table, values, connection=self)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._driver.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
