"""Shared pytest fixtures for bindQL unit and integration tests."""
from __future__ import annotations

import pytest

from bindql.connection import Connection
from bindql.grammar import Grammar, MySQLGrammar, PostgresGrammar, SQLiteGrammar, SQLServerGrammar
from tests.fixtures import RecordingDriver


@pytest.fixture()
def driver() -> RecordingDriver:
    return RecordingDriver()


@pytest.fixture()
def connection(driver: RecordingDriver) -> Connection:
    """Connection over the recording driver with the ANSI grammar."""
    return Connection(driver)


@pytest.fixture(scope="session")
def ansi() -> Grammar:
    return Grammar()


@pytest.fixture(scope="session")
def sqlite_grammar() -> SQLiteGrammar:
    return SQLiteGrammar()


@pytest.fixture(scope="session")
def pg() -> PostgresGrammar:
    return PostgresGrammar()


@pytest.fixture(scope="session")
def mysql() -> MySQLGrammar:
    return MySQLGrammar()


@pytest.fixture(scope="session")
def mssql() -> SQLServerGrammar:
    return SQLServerGrammar()
