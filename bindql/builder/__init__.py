"""bindQL query builders."""
from bindql.builder.base import BaseQuery, CompiledQuery, FilterableQuery
from bindql.builder.insert import InsertQuery
from bindql.builder.select import SelectQuery
from bindql.builder.update import UpdateQuery

__all__ = [
    "BaseQuery",
    "CompiledQuery",
    "FilterableQuery",
    "InsertQuery",
    "SelectQuery",
    "UpdateQuery",
]
