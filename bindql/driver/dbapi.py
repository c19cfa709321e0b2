"""PEP 249 (DB-API 2.0) driver adapter.

Works with any DB-API connection whose ``paramstyle`` has a single positional
marker: ``sqlite3`` (``qmark``), ``psycopg`` / ``psycopg2`` / ``PyMySQL``
(``format`` / ``pyformat``).

DB-API has no separate prepare step: a :class:`DBAPIStatement` keeps the
positional SQL and the bound values, and runs them on a fresh cursor when
executed.
"""
from __future__ import annotations

import logging
from typing import Any

from bindql.compile.types import BindType
from bindql.driver.base import marker_for_paramstyle

logger = logging.getLogger("bindql.driver.dbapi")


class DBAPIStatement:
    """Positional SQL plus bound values, executed on a new cursor."""

    def __init__(self, connection: Any, sql: str) -> None:
        self._connection = connection
        self.sql = sql
        self._values: dict[int, Any] = {}

    def bind_value(self, position: int, value: Any, bind_type: BindType) -> None:
        # Coercion already produced the native Python value.
        self._values[position] = value

    @property
    def values(self) -> tuple[Any, ...]:
        return tuple(self._values[i] for i in sorted(self._values))

    def execute(self) -> Any:
        cursor = self._connection.cursor()
        cursor.execute(self.sql, self.values)
        return cursor


class DBAPIDriver:
    """Adapts a DB-API connection to :class:`~bindql.driver.base.DriverConnection`.

    Args:
        connection: An open DB-API connection.
        paramstyle: The driver module's ``paramstyle``
            (e.g. ``sqlite3.paramstyle``).

    DB-API connections open transactions implicitly, so :meth:`begin` only
    marks the start of a unit of work; :meth:`commit` and :meth:`rollback`
    delegate to the connection.
    """

    def __init__(self, connection: Any, paramstyle: str = "qmark") -> None:
        self.connection = connection
        self.paramstyle = paramstyle
        self._placeholder = marker_for_paramstyle(paramstyle)

    @property
    def placeholder(self) -> str:
        return self._placeholder

    def prepare(self, sql: str) -> DBAPIStatement:
        return DBAPIStatement(self.connection, sql)

    def begin(self) -> None:
        logger.debug("DB-API transaction started implicitly by the driver")

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()

    def close(self) -> None:
        self.connection.close()
