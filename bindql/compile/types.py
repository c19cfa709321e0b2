"""Bind types and the placeholder prefix lookup table.

Each placeholder carries an optional one-character type prefix::

    ''  / 's'  -> BindType.STR
    'i'        -> BindType.INT
    'f'        -> BindType.FLOAT
    'b'        -> BindType.BOOL
    'l'        -> BindType.LOB
    'd'        -> BindType.DATE_TIME
    't'        -> BindType.TIME
"""
from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class BindType(Enum):
    """Native type a parameter value is coerced to before binding."""

    STR = "str"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    LOB = "lob"
    DATE_TIME = "date_time"
    TIME = "time"

    def __str__(self) -> str:
        return self.name


#: Prefix character → bind type.  The empty prefix means "string".
TYPE_MAP: Mapping[str, BindType] = MappingProxyType(
    {
        "": BindType.STR,
        "s": BindType.STR,
        "i": BindType.INT,
        "f": BindType.FLOAT,
        "b": BindType.BOOL,
        "l": BindType.LOB,
        "d": BindType.DATE_TIME,
        "t": BindType.TIME,
    }
)

#: Prefix written by the query builders for each bind type.
TYPE_PREFIXES: Mapping[BindType, str] = MappingProxyType(
    {
        BindType.STR: "",
        BindType.INT: "i",
        BindType.FLOAT: "f",
        BindType.BOOL: "b",
        BindType.LOB: "l",
        BindType.DATE_TIME: "d",
        BindType.TIME: "t",
    }
)


def infer_bind_type(value: Any) -> BindType:
    """Pick the bind type a builder should tag ``value`` with."""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return BindType.BOOL
    if isinstance(value, int):
        return BindType.INT
    if isinstance(value, float):
        return BindType.FLOAT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BindType.LOB
    if isinstance(value, (datetime, date)):
        return BindType.DATE_TIME
    if isinstance(value, time):
        return BindType.TIME
    return BindType.STR


def placeholder_for(name: str, bind_type: BindType = BindType.STR) -> str:
    """Return the named placeholder marker for ``name`` (e.g. ``i:param_0``)."""
    return f"{TYPE_PREFIXES[bind_type]}:{name}"
