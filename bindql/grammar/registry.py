"""Grammar registry.

``GrammarFactory`` maps dialect names to :class:`~bindql.grammar.base.Grammar`
classes so new dialects can be added without touching the connection or
configuration code.

Usage::

    from bindql.grammar.registry import GrammarFactory

    @GrammarFactory.register("oracle")
    class OracleGrammar(Grammar):
        ...

    grammar = GrammarFactory.create("oracle")
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from bindql.errors import ConfigurationError
from bindql.grammar.base import Grammar


class GrammarFactory:
    """Registry mapping dialect names to :class:`Grammar` classes.

    Callers register a grammar class once; connections create instances on
    demand via :meth:`create`.
    """

    _grammars: ClassVar[dict[str, type[Grammar]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[Grammar]], type[Grammar]]:
        """Decorator that registers a grammar class under ``name``.

        Args:
            name: The dialect name (e.g. ``"postgres"``).

        Returns:
            A decorator that registers and returns the grammar class.
        """

        def decorator(grammar_cls: type[Grammar]) -> type[Grammar]:
            cls._grammars[name] = grammar_cls
            return grammar_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, grammar_cls: type[Grammar]) -> None:
        """Register a grammar class without using the decorator form."""
        cls._grammars[name] = grammar_cls

    @classmethod
    def create(cls, name: str) -> Grammar:
        """Instantiate the grammar registered for ``name``.

        Raises:
            ConfigurationError: If no grammar is registered for ``name``.
        """
        grammar_cls = cls._grammars.get(name)
        if grammar_cls is None:
            raise ConfigurationError(
                f"Unsupported grammar: '{name}'. Registered grammars: {sorted(cls._grammars)}."
            )
        return grammar_cls()

    @classmethod
    def registered_grammars(cls) -> list[str]:
        """Return the sorted list of registered dialect names."""
        return sorted(cls._grammars)
