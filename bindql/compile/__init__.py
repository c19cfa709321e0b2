"""bindQL compilation layer: named placeholders → positional SQL + bind types."""
from bindql.compile.coercion import coerce_value
from bindql.compile.placeholders import (
    CompiledStatement,
    PlaceholderCompiler,
    compile_placeholders,
)
from bindql.compile.types import TYPE_MAP, BindType, infer_bind_type, placeholder_for

__all__ = [
    "TYPE_MAP",
    "BindType",
    "CompiledStatement",
    "PlaceholderCompiler",
    "coerce_value",
    "compile_placeholders",
    "infer_bind_type",
    "placeholder_for",
]
