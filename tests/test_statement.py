"""Unit tests for PreparedStatement binding and execution."""

from __future__ import annotations

from datetime import datetime

import pytest

from bindql.compile.types import BindType
from bindql.connection import Connection
from bindql.errors import BindingError, MissingParameterError, TypeCoercionError
from bindql.statement import PreparedStatement
from tests.fixtures import RecordingDriver


def test_prepare_sends_positional_sql_to_driver(connection, driver):
    stmt = connection.prepare("SELECT * FROM t WHERE a = :x AND b = i:y")
    assert isinstance(stmt, PreparedStatement)
    assert stmt.sql == "SELECT * FROM t WHERE a = ? AND b = ?"
    assert driver.calls("prepare") == [("prepare", "SELECT * FROM t WHERE a = ? AND b = ?")]
    assert stmt.handle is driver.statements[0]


def test_execute_binds_each_position_with_its_type(connection, driver):
    stmt = connection.prepare("SELECT * FROM t WHERE a = :x AND b = i:y")
    result = stmt.execute({"x": "v", "y": "5"})

    handle = driver.statements[0]
    assert handle.binds == [(1, "v", BindType.STR), (2, 5, BindType.INT)]
    assert handle.executions == 1
    assert result == {"sql": stmt.sql, "binds": handle.binds}


def test_binds_all_happen_before_execute(connection, driver):
    connection.prepare("SELECT :a, :b").execute({"a": 1, "b": 2})
    kinds = [entry[0] for entry in driver.log]
    assert kinds == ["prepare", "bind", "bind", "execute"]


def test_repeated_name_binds_same_value_at_every_position(connection, driver):
    stmt = connection.prepare("SELECT * FROM t WHERE a > d:foo OR b < :foo")
    stmt.execute({"foo": datetime(2024, 5, 1, 9, 30)})
    assert driver.statements[0].binds == [
        (1, "2024-05-01 09:30:00", BindType.DATE_TIME),
        (2, "2024-05-01 09:30:00", BindType.DATE_TIME),
    ]


def test_missing_parameter_binds_nothing(connection, driver):
    stmt = connection.prepare("SELECT * FROM t WHERE a = :x AND b = i:y")
    with pytest.raises(MissingParameterError) as exc_info:
        stmt.execute({"x": "v"})

    assert exc_info.value.name == "y"
    assert exc_info.value.position == 2
    assert driver.statements[0].binds == []
    assert driver.statements[0].executions == 0


def test_coercion_failure_binds_nothing(connection, driver):
    stmt = connection.prepare("UPDATE t SET a = :a, b = i:b")
    with pytest.raises(TypeCoercionError) as exc_info:
        stmt.execute({"a": "ok", "b": "not a number"})

    assert isinstance(exc_info.value, BindingError)
    assert exc_info.value.name == "b"
    assert driver.calls("bind") == []
    assert driver.calls("execute") == []


def test_extra_parameters_are_ignored(connection, driver):
    connection.prepare("SELECT :a").execute({"a": "x", "unused": object()})
    assert driver.statements[0].binds == [(1, "x", BindType.STR)]


def test_statement_without_placeholders_executes_without_binds(connection, driver):
    connection.prepare("DELETE FROM t").execute()
    assert driver.calls("bind") == []
    assert driver.statements[0].executions == 1


def test_none_binds_as_null(connection, driver):
    connection.prepare("UPDATE t SET a = i:a").execute({"a": None})
    assert driver.statements[0].binds == [(1, None, BindType.INT)]


def test_later_prepare_does_not_affect_earlier_statement(connection, driver):
    first = connection.prepare("SELECT * FROM t WHERE a = i:a")
    second = connection.prepare("SELECT * FROM t WHERE b = :b AND c = :c")

    first.execute({"a": "7"})
    second.execute({"b": "x", "c": "y"})

    assert first.names == ("a",)
    assert first.types == {"a": BindType.INT}
    assert driver.statements[0].binds == [(1, 7, BindType.INT)]
    assert driver.statements[1].binds == [(1, "x", BindType.STR), (2, "y", BindType.STR)]


def test_statement_can_be_executed_repeatedly(connection, driver):
    stmt = connection.prepare("INSERT INTO t (a) VALUES (i:a)")
    stmt.execute({"a": 1})
    stmt.execute({"a": 2})
    assert driver.statements[0].executions == 2
    assert [b[1] for b in driver.statements[0].binds] == [1, 2]


def test_parameters_resolves_without_binding(connection, driver):
    stmt = connection.prepare("SELECT b:flag, :flag2")
    assert stmt.parameters({"flag": "true", "flag2": 3}) == [
        (1, True, BindType.BOOL),
        (2, "3", BindType.STR),
    ]
    assert driver.calls("bind") == []


def test_call_is_execute(connection, driver):
    stmt = connection.prepare("SELECT :a")
    stmt({"a": "x"})
    assert driver.statements[0].executions == 1


def test_driver_errors_propagate_unwrapped():
    class Boom(Exception):
        pass

    class FailingDriver(RecordingDriver):
        def prepare(self, sql):
            statement = super().prepare(sql)

            def fail():
                raise Boom(sql)

            statement.execute = fail
            return statement

    with pytest.raises(Boom):
        Connection(FailingDriver()).query("SELECT :a", {"a": 1})
