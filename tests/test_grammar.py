"""Unit tests for the dialect grammars and the grammar registry."""

from __future__ import annotations

import pytest

from bindql.clauses import Condition, InsertParts, Join, OrderItem, Raw, SelectParts, UpdateParts
from bindql.errors import ConfigurationError
from bindql.grammar import (
    Grammar,
    GrammarFactory,
    MySQLGrammar,
    PostgresGrammar,
    SQLiteGrammar,
    SQLServerGrammar,
)

# ---------------------------------------------------------------------------
# Identifier quoting
# ---------------------------------------------------------------------------


def test_ansi_quoting(ansi):
    assert ansi.quote_identifier("users") == '"users"'
    assert ansi.quote_identifier("public.users") == '"public"."users"'
    assert ansi.quote_identifier("users.*") == '"users".*'
    assert ansi.quote_identifier("*") == "*"
    assert ansi.quote_identifier('odd"name') == '"odd""name"'


def test_postgres_and_sqlite_use_double_quotes(pg, sqlite_grammar):
    assert pg.quote_identifier("users.id") == '"users"."id"'
    assert sqlite_grammar.quote_identifier("users.id") == '"users"."id"'


def test_mysql_uses_backticks(mysql):
    assert mysql.quote_identifier("orders.total") == "`orders`.`total`"
    assert mysql.quote_identifier("we`ird") == "`we``ird`"


def test_sqlserver_uses_brackets(mssql):
    assert mssql.quote_identifier("dbo.users") == "[dbo].[users]"
    assert mssql.quote_identifier("a]b") == "[a]]b]"


def test_raw_is_not_quoted(ansi, mysql):
    assert ansi.quote_identifier(Raw("COUNT(*)")) == "COUNT(*)"
    assert mysql.quote_identifier(Raw("NOW()")) == "NOW()"


def test_quoting_is_pure_but_not_idempotent(ansi):
    assert ansi.quote_identifier("x") == ansi.quote_identifier("x")
    assert ansi.quote_identifier(ansi.quote_identifier("x")) == '"""x"""'


def test_dialect_names():
    assert Grammar().dialect_name == "ansi"
    assert SQLiteGrammar().dialect_name == "sqlite"
    assert PostgresGrammar().dialect_name == "postgres"
    assert MySQLGrammar().dialect_name == "mysql"
    assert SQLServerGrammar().dialect_name == "sqlserver"


# ---------------------------------------------------------------------------
# Clauses
# ---------------------------------------------------------------------------


def test_empty_column_list_is_star(ansi):
    assert ansi.build_columns(()) == "*"
    assert ansi.compile_select(SelectParts()) == "SELECT *"


def test_conditions_render_in_order(ansi):
    conditions = (
        Condition("a", "=", (":param_0",)),
        Condition("b", "IS NOT", (), "OR"),
        Condition("c", "IN", ("i:param_1", "i:param_2")),
        Condition(None, raw="d > i:min"),
    )
    assert ansi.build_conditions(conditions) == (
        '"a" = :param_0 OR "b" IS NOT NULL AND "c" IN (i:param_1, i:param_2) AND (d > i:min)'
    )


def test_empty_in_lists(ansi):
    assert ansi.build_condition(Condition("a", "IN")) == "1 = 0"
    assert ansi.build_condition(Condition("a", "NOT IN")) == "1 = 1"


def test_join_with_alias(mysql):
    join = Join("orders", "u.id", "o.user_id", kind="LEFT", alias="o")
    assert mysql.build_join(join) == "LEFT JOIN `orders` AS `o` ON `u`.`id` = `o`.`user_id`"


@pytest.mark.parametrize(
    ("grammar", "limit", "offset", "expected"),
    [
        (Grammar(), 10, None, "LIMIT 10"),
        (Grammar(), 10, 20, "LIMIT 10 OFFSET 20"),
        (Grammar(), None, 20, "OFFSET 20"),
        (Grammar(), None, None, ""),
        (SQLiteGrammar(), None, 20, "LIMIT -1 OFFSET 20"),
        (SQLiteGrammar(), 5, 0, "LIMIT 5 OFFSET 0"),
        (MySQLGrammar(), None, 20, "LIMIT 18446744073709551615 OFFSET 20"),
        (PostgresGrammar(), None, 20, "OFFSET 20"),
        (SQLServerGrammar(), 10, None, "OFFSET 0 ROWS FETCH NEXT 10 ROWS ONLY"),
        (SQLServerGrammar(), 10, 20, "OFFSET 20 ROWS FETCH NEXT 10 ROWS ONLY"),
        (SQLServerGrammar(), None, 20, "OFFSET 20 ROWS"),
        (SQLServerGrammar(), None, None, ""),
    ],
)
def test_limit_rendering(grammar, limit, offset, expected):
    assert grammar.build_limit(limit, offset) == expected


def test_sqlserver_orders_unordered_paged_select(mssql):
    parts = SelectParts(table="users", limit=10)
    assert mssql.compile_select(parts) == (
        "SELECT * FROM [users] ORDER BY (SELECT NULL) OFFSET 0 ROWS FETCH NEXT 10 ROWS ONLY"
    )


def test_sqlserver_keeps_explicit_order(mssql):
    parts = SelectParts(table="users", order_by=(OrderItem("id", "DESC"),), offset=5)
    assert mssql.compile_select(parts) == "SELECT * FROM [users] ORDER BY [id] DESC OFFSET 5 ROWS"


def test_sqlserver_unpaged_select_has_no_order(mssql):
    assert mssql.compile_select(SelectParts(table="users")) == "SELECT * FROM [users]"


def test_insert_and_update_statements(pg):
    insert = InsertParts("users", ("email", "age"), ((":param_0", "i:param_1"),))
    assert pg.compile_insert(insert) == (
        'INSERT INTO "users" ("email", "age") VALUES (:param_0, i:param_1)'
    )
    update = UpdateParts(
        "users", (("email", ":param_0"),), (Condition("id", "=", ("i:param_1",)),)
    )
    assert pg.compile_update(update) == (
        'UPDATE "users" SET "email" = :param_0 WHERE "id" = i:param_1'
    )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def test_registry_knows_builtin_grammars():
    assert GrammarFactory.registered_grammars() == [
        "ansi",
        "mysql",
        "postgres",
        "sqlite",
        "sqlserver",
    ]
    assert isinstance(GrammarFactory.create("postgres"), PostgresGrammar)
    assert isinstance(GrammarFactory.create("sqlserver"), SQLServerGrammar)


def test_registry_creates_fresh_instances():
    assert GrammarFactory.create("sqlite") is not GrammarFactory.create("sqlite")


def test_registry_rejects_unknown_grammar():
    with pytest.raises(ConfigurationError, match="oracle"):
        GrammarFactory.create("oracle")


def test_register_decorator(monkeypatch):
    monkeypatch.setattr(GrammarFactory, "_grammars", dict(GrammarFactory._grammars))

    @GrammarFactory.register("bracketed")
    class BracketGrammar(SQLServerGrammar):
        pass

    assert isinstance(GrammarFactory.create("bracketed"), BracketGrammar)
