"""Named placeholder → positional placeholder compiler.

Raw SQL handed to :meth:`Connection.prepare <bindql.connection.Connection.prepare>`
carries named, optionally type-tagged placeholders::

    SELECT * FROM users WHERE id = i:id AND created_at > d:since AND name = :name

:class:`PlaceholderCompiler` rewrites every marker to the driver's positional
marker and records, per statement, the ordered placeholder names and the
name → :class:`~bindql.compile.types.BindType` map::

    SELECT * FROM users WHERE id = ? AND created_at > ? AND name = ?
    names = ("id", "since", "name")
    types = {"id": INT, "since": DATE_TIME, "name": STR}

Lexical rules
-------------
* String literals, quoted identifiers and comments are copied verbatim.
  A quote inside a string literal is escaped by doubling it (``''``).
  Backslash escapes (MySQL) and ``[bracket]`` identifiers (SQL Server) are
  only recognised when the compiler is built with ``backslash_escapes=True``
  or ``bracket_quotes=True``.
* ``::`` (PostgreSQL cast) is never a placeholder.
* A marker may not be glued to a preceding word character or colon, so
  ``x:foo``, ``12:30`` and ``arr[1:2]`` are not placeholders.  Such tokens
  are passed through unchanged, or rejected with
  :class:`~bindql.errors.ParseAmbiguityError` when ``strict=True``.
* When a name repeats with a different type prefix, the first occurrence
  wins.
"""
from __future__ import annotations

import logging
import re
from functools import lru_cache
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping

from bindql.compile.types import TYPE_MAP, BindType
from bindql.errors import ParseAmbiguityError

__all__ = (
    "CompiledStatement",
    "PlaceholderCompiler",
    "compile_placeholders",
)

logger = logging.getLogger("bindql.compile.placeholders")

_SQUOTE: Final = r"(?P<squote>'(?:[^']|'')*')"
_SQUOTE_BACKSLASH: Final = r"(?P<squote>'(?:[^'\\]|\\.|'')*')"
_BRACKET: Final = r"(?P<bracket>\[(?:[^\]]|\]\])*\])"

_TOKEN_PATTERN: Final = r"""
    # Copied verbatim
    {squote} |
    (?P<dquote>"(?:[^"]|"")*") |
    (?P<btick>`(?:[^`]|``)*`) |
    {bracket}
    (?P<line_comment>--[^\r\n]*) |
    (?P<block_comment>/\*[\s\S]*?\*/) |
    (?P<cast>::) |

    # Named placeholder: optional type prefix, colon, word name
    (?P<marker>(?<![\w:])(?P<prefix>[sbilfdt]?):(?P<name>\w+)) |

    # Anything else shaped like word:word
    (?P<malformed>(?<![\w:])\w+:\w+)
    """


@lru_cache(maxsize=None)
def _token_regex(backslash_escapes: bool, bracket_quotes: bool) -> re.Pattern[str]:
    return re.compile(
        _TOKEN_PATTERN.format(
            squote=_SQUOTE_BACKSLASH if backslash_escapes else _SQUOTE,
            bracket=f"{_BRACKET} |" if bracket_quotes else "",
        ),
        re.VERBOSE,
    )


@dataclass(frozen=True)
class CompiledStatement:
    """Result of compiling one raw SQL string.

    Attributes:
        sql: SQL with every placeholder replaced by the positional marker.
        names: Placeholder names in marker order; ``names[n]`` belongs to
            the ``n + 1``-th positional marker.  Names may repeat.
        types: Read-only map of each distinct name to its bind type.
    """

    sql: str
    names: tuple[str, ...]
    types: Mapping[str, BindType]

    @property
    def placeholder_count(self) -> int:
        return len(self.names)


class PlaceholderCompiler:
    """Rewrites named placeholders into a driver's positional marker.

    The compiler holds no per-statement state; every :meth:`compile` call
    builds and returns its own :class:`CompiledStatement`.

    Args:
        marker: Positional marker of the target driver (``?`` or ``%s``).
        strict: Raise :class:`~bindql.errors.ParseAmbiguityError` on
            malformed placeholder tokens instead of passing them through.
        backslash_escapes: Treat ``\\'`` inside a string literal as an
            escaped quote.
        bracket_quotes: Copy ``[...]`` identifiers verbatim.
    """

    def __init__(
        self,
        marker: str = "?",
        strict: bool = False,
        *,
        backslash_escapes: bool = False,
        bracket_quotes: bool = False,
    ) -> None:
        self.marker = marker
        self.strict = strict
        self.backslash_escapes = backslash_escapes
        self.bracket_quotes = bracket_quotes
        self._escape_percent = marker == "%s"
        self._regex = _token_regex(backslash_escapes, bracket_quotes)

    def compile(self, sql: str) -> CompiledStatement:
        """Compile ``sql``.

        Args:
            sql: Raw SQL with named placeholders.

        Returns:
            The positional SQL with its placeholder names and type map.

        Raises:
            ParseAmbiguityError: Only in strict mode, for a malformed token.
        """
        names: list[str] = []
        types: dict[str, BindType] = {}
        pieces: list[str] = []
        last = 0

        for match in self._regex.finditer(sql):
            pieces.append(self._literal(sql[last : match.start()]))
            last = match.end()

            if match.group("marker"):
                name = match.group("name")
                bind_type = TYPE_MAP[match.group("prefix")]
                if name not in types:
                    types[name] = bind_type
                elif types[name] is not bind_type:
                    logger.debug(
                        "Placeholder '%s' re-tagged as %s at offset %d; keeping %s",
                        name,
                        bind_type,
                        match.start(),
                        types[name],
                    )
                names.append(name)
                pieces.append(self.marker)
                continue

            if match.group("malformed"):
                self._reject_or_log(match)
            pieces.append(self._literal(match.group(0)))

        pieces.append(self._literal(sql[last:]))

        compiled = CompiledStatement(
            sql="".join(pieces),
            names=tuple(names),
            types=MappingProxyType(types),
        )
        logger.debug(
            "Compiled statement with %d placeholder(s), %d distinct name(s)",
            compiled.placeholder_count,
            len(types),
        )
        return compiled

    def _literal(self, text: str) -> str:
        if self._escape_percent:
            return text.replace("%", "%%")
        return text

    def _reject_or_log(self, match: re.Match[str]) -> None:
        token = match.group(0)
        if self.strict:
            prefix = token.split(":", 1)[0]
            raise ParseAmbiguityError(
                f"Ambiguous placeholder token '{token}' at offset {match.start()}: "
                f"'{prefix}' is not a type prefix (expected one of "
                f"{', '.join(sorted(k for k in TYPE_MAP if k))}).",
                token=token,
                position=match.start(),
            )
        logger.debug("Passing through non-placeholder token '%s'", token)


def compile_placeholders(sql: str, marker: str = "?") -> CompiledStatement:
    """Compile ``sql`` with a default, non-strict :class:`PlaceholderCompiler`."""
    return PlaceholderCompiler(marker).compile(sql)
