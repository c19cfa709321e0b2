"""bindQL grammars: dialect-specific quoting and clause rendering."""
from bindql.grammar.base import Grammar
from bindql.grammar.mysql import MySQLGrammar
from bindql.grammar.postgres import PostgresGrammar
from bindql.grammar.registry import GrammarFactory
from bindql.grammar.sqlite import SQLiteGrammar
from bindql.grammar.sqlserver import SQLServerGrammar

GrammarFactory.register_class("ansi", Grammar)
GrammarFactory.register_class("sqlite", SQLiteGrammar)
GrammarFactory.register_class("postgres", PostgresGrammar)
GrammarFactory.register_class("mysql", MySQLGrammar)
GrammarFactory.register_class("sqlserver", SQLServerGrammar)

__all__ = [
    "Grammar",
    "GrammarFactory",
    "MySQLGrammar",
    "PostgresGrammar",
    "SQLiteGrammar",
    "SQLServerGrammar",
]
