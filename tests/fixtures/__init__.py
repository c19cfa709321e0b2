"""Test fixtures: a recording driver that stands in for a real database."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bindql.compile.types import BindType


@dataclass
class RecordingStatement:
    """Driver statement that records every bind and execute call."""

    sql: str
    log: list[tuple[Any, ...]]
    binds: list[tuple[int, Any, BindType]] = field(default_factory=list)
    executions: int = 0

    def bind_value(self, position: int, value: Any, bind_type: BindType) -> None:
        self.binds.append((position, value, bind_type))
        self.log.append(("bind", position, value, bind_type))

    def execute(self) -> dict[str, Any]:
        self.executions += 1
        self.log.append(("execute", self.sql))
        return {"sql": self.sql, "binds": list(self.binds)}


@dataclass
class RecordingDriver:
    """Driver connection that records prepares and transaction calls."""

    placeholder: str = "?"
    log: list[tuple[Any, ...]] = field(default_factory=list)
    statements: list[RecordingStatement] = field(default_factory=list)
    closed: bool = False

    def prepare(self, sql: str) -> RecordingStatement:
        self.log.append(("prepare", sql))
        statement = RecordingStatement(sql, self.log)
        self.statements.append(statement)
        return statement

    def begin(self) -> None:
        self.log.append(("begin",))

    def commit(self) -> None:
        self.log.append(("commit",))

    def rollback(self) -> None:
        self.log.append(("rollback",))

    def close(self) -> None:
        self.closed = True

    def calls(self, kind: str) -> list[tuple[Any, ...]]:
        return [entry for entry in self.log if entry[0] == kind]
