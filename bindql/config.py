"""Pydantic model describing how to open a :class:`~bindql.connection.Connection`.

Example::

    config = ConnectionConfig(url="postgresql+psycopg://app@db/app")
    db = Connection.from_config(config)        # PostgresGrammar inferred

    config = ConnectionConfig(url="sqlite:///app.db", strict_placeholders=True)
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bindql.errors import ConfigurationError

#: SQLAlchemy backend name → registered grammar name.
BACKEND_GRAMMARS: dict[str, str] = {
    "sqlite": "sqlite",
    "postgresql": "postgres",
    "mysql": "mysql",
    "mariadb": "mysql",
    "mssql": "sqlserver",
}


class ConnectionConfig(BaseModel):
    """Connection settings.

    Attributes:
        url: SQLAlchemy database URL (``dialect+driver://user:pw@host/db``).
        grammar: Registered grammar name.  Inferred from the URL's backend
            when omitted.
        strict_placeholders: Reject malformed placeholder tokens instead of
            passing them through.
        echo: Forwarded to :func:`sqlalchemy.create_engine`.
        engine_options: Extra keyword arguments for
            :func:`sqlalchemy.create_engine`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field(min_length=1)
    grammar: str | None = None
    strict_placeholders: bool = False
    echo: bool = False
    engine_options: dict[str, Any] = Field(default_factory=dict)

    @property
    def backend(self) -> str:
        """Backend part of the URL scheme (``postgresql`` for ``postgresql+psycopg``)."""
        scheme = self.url.split("://", 1)[0]
        return scheme.split("+", 1)[0].lower()

    def resolve_grammar(self) -> str:
        """Return the grammar name to use for this connection.

        Raises:
            ConfigurationError: No grammar was given and the backend is unknown.
        """
        if self.grammar is not None:
            return self.grammar
        try:
            return BACKEND_GRAMMARS[self.backend]
        except KeyError:
            raise ConfigurationError(
                f"Cannot infer a grammar for backend '{self.backend}'. "
                f"Set ConnectionConfig.grammar explicitly."
            ) from None
