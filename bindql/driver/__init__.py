"""Driver adapters consumed by :class:`~bindql.connection.Connection`."""
from bindql.driver.base import (
    PARAMSTYLE_MARKERS,
    DriverConnection,
    DriverStatement,
    marker_for_paramstyle,
)
from bindql.driver.dbapi import DBAPIDriver, DBAPIStatement

__all__ = [
    "PARAMSTYLE_MARKERS",
    "DBAPIDriver",
    "DBAPIStatement",
    "DriverConnection",
    "DriverStatement",
    "marker_for_paramstyle",
]
