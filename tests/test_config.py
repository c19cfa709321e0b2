"""Unit tests for ConnectionConfig and paramstyle handling."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from bindql.config import ConnectionConfig
from bindql.driver.base import marker_for_paramstyle
from bindql.driver.dbapi import DBAPIDriver
from bindql.errors import ConfigurationError


@pytest.mark.parametrize(
    ("url", "grammar"),
    [
        ("sqlite:///:memory:", "sqlite"),
        ("sqlite://", "sqlite"),
        ("postgresql+psycopg://app@db/app", "postgres"),
        ("mysql+pymysql://app@db/app", "mysql"),
        ("mariadb://app@db/app", "mysql"),
        ("mssql+pyodbc://app@dsn", "sqlserver"),
    ],
)
def test_grammar_is_inferred_from_url(url, grammar):
    assert ConnectionConfig(url=url).resolve_grammar() == grammar


def test_explicit_grammar_wins():
    config = ConnectionConfig(url="postgresql://db/app", grammar="ansi")
    assert config.resolve_grammar() == "ansi"


def test_backend_strips_driver():
    assert ConnectionConfig(url="PostgreSQL+asyncpg://db/app").backend == "postgresql"


def test_unknown_backend_raises():
    with pytest.raises(ConfigurationError, match="oracle"):
        ConnectionConfig(url="oracle://db").resolve_grammar()


def test_unknown_field_is_rejected():
    with pytest.raises(ValidationError):
        ConnectionConfig(url="sqlite://", strict=True)


def test_empty_url_is_rejected():
    with pytest.raises(ValidationError):
        ConnectionConfig(url="")


def test_config_is_frozen():
    config = ConnectionConfig(url="sqlite://")
    with pytest.raises(ValidationError):
        config.echo = True


def test_defaults():
    config = ConnectionConfig(url="sqlite://")
    assert config.grammar is None
    assert config.strict_placeholders is False
    assert config.echo is False
    assert config.engine_options == {}


@pytest.mark.parametrize(
    ("paramstyle", "marker"),
    [("qmark", "?"), ("format", "%s"), ("pyformat", "%s")],
)
def test_paramstyle_markers(paramstyle, marker):
    assert marker_for_paramstyle(paramstyle) == marker


@pytest.mark.parametrize("paramstyle", ["numeric", "named", "bogus"])
def test_unsupported_paramstyle_raises(paramstyle):
    with pytest.raises(ConfigurationError):
        marker_for_paramstyle(paramstyle)
    with pytest.raises(ConfigurationError):
        DBAPIDriver(object(), paramstyle)
