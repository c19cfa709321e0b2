"""SQLAlchemy driver adapter.

Wraps a :class:`sqlalchemy.engine.Connection` and executes positional SQL
with :meth:`~sqlalchemy.engine.Connection.exec_driver_sql`, bypassing
SQLAlchemy's own SQL compilation.  The positional marker is taken from the
dialect's DBAPI ``paramstyle``.

Requires the ``sqlalchemy`` extra::

    pip install "bindql[sqlalchemy]"
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bindql.compile.types import BindType
from bindql.driver.base import marker_for_paramstyle

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, CursorResult, Engine

logger = logging.getLogger("bindql.driver.sqlalchemy")


class SQLAlchemyStatement:
    """Positional SQL executed through ``exec_driver_sql``."""

    def __init__(self, connection: Connection, sql: str) -> None:
        self._connection = connection
        self.sql = sql
        self._values: dict[int, Any] = {}

    def bind_value(self, position: int, value: Any, bind_type: BindType) -> None:
        self._values[position] = value

    @property
    def values(self) -> tuple[Any, ...]:
        return tuple(self._values[i] for i in sorted(self._values))

    def execute(self) -> CursorResult[Any]:
        return self._connection.exec_driver_sql(self.sql, self.values)


class SQLAlchemyDriver:
    """Adapts a SQLAlchemy connection to :class:`~bindql.driver.base.DriverConnection`.

    Args:
        connection: An open SQLAlchemy 2.x connection.
        engine: Engine owning ``connection``; disposed on :meth:`close` when
            given (used by :meth:`Connection.from_config
            <bindql.connection.Connection.from_config>`).
    """

    def __init__(self, connection: Connection, engine: Engine | None = None) -> None:
        self.connection = connection
        self.engine = engine
        self._placeholder = marker_for_paramstyle(connection.dialect.paramstyle)

    @property
    def placeholder(self) -> str:
        return self._placeholder

    def prepare(self, sql: str) -> SQLAlchemyStatement:
        return SQLAlchemyStatement(self.connection, sql)

    def begin(self) -> None:
        # SQLAlchemy autobegins on first execute; only open one if idle.
        if not self.connection.in_transaction():
            self.connection.begin()

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()

    def close(self) -> None:
        self.connection.close()
        if self.engine is not None:
            logger.debug("Disposing engine %s", self.engine.url)
            self.engine.dispose()
