"""Bind-time value coercion.

Converts a caller-supplied value to the Python value a driver binds for a
given :class:`~bindql.compile.types.BindType`.  Numeric, boolean and temporal
parsing is delegated to pydantic's lax-mode :class:`~pydantic.TypeAdapter`
validation, so ``"42"`` binds as ``42`` for an ``i:`` placeholder while
``"forty-two"`` is rejected.

Date-time and time values are rendered to the dialect's wire format through
the :class:`~bindql.grammar.base.Grammar` the statement was prepared with.
"""
from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from bindql.compile.types import BindType
from bindql.errors import TypeCoercionError

if TYPE_CHECKING:
    from bindql.grammar.base import Grammar

_ADAPTERS: dict[BindType, TypeAdapter[Any]] = {
    BindType.INT: TypeAdapter(int),
    BindType.FLOAT: TypeAdapter(float),
    BindType.BOOL: TypeAdapter(bool),
    BindType.DATE_TIME: TypeAdapter(datetime),
    BindType.TIME: TypeAdapter(time),
}

_CONTAINERS = (list, tuple, set, frozenset, dict)


def coerce_value(name: str, value: Any, bind_type: BindType, grammar: Grammar) -> Any:
    """Return ``value`` converted for binding as ``bind_type``.

    Args:
        name: Parameter name (used in error messages only).
        value: The caller-supplied value.
        bind_type: Resolved bind type for ``name``.
        grammar: Grammar used to render date-time and time values.

    Returns:
        The driver-ready value.  ``None`` is always returned unchanged so it
        binds as SQL ``NULL``.

    Raises:
        TypeCoercionError: If ``value`` cannot be represented as ``bind_type``.
    """
    if value is None:
        return None
    if bind_type is BindType.STR:
        return _to_str(name, value)
    if bind_type is BindType.LOB:
        return _to_bytes(name, value)
    if bind_type is BindType.DATE_TIME:
        if isinstance(value, date) and not isinstance(value, datetime):
            value = datetime.combine(value, time())
        return grammar.format_datetime(_validate(name, value, bind_type))
    if bind_type is BindType.TIME:
        if isinstance(value, datetime):
            value = value.timetz()
        return grammar.format_time(_validate(name, value, bind_type))
    return _validate(name, value, bind_type)


def _validate(name: str, value: Any, bind_type: BindType) -> Any:
    try:
        return _ADAPTERS[bind_type].validate_python(value)
    except ValidationError as exc:
        raise TypeCoercionError(name, bind_type, value) from exc


def _to_str(name: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, Enum):
        return _to_str(name, value.value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TypeCoercionError(name, BindType.STR, value) from exc
    if isinstance(value, _CONTAINERS):
        raise TypeCoercionError(name, BindType.STR, value)
    return str(value)


def _to_bytes(name: str, value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    read = getattr(value, "read", None)
    if callable(read):
        data = read()
        return data.encode("utf-8") if isinstance(data, str) else bytes(data)
    raise TypeCoercionError(name, BindType.LOB, value)
