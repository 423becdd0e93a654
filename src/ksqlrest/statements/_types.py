"""Internal types for statement classification."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Action(enum.Enum):
    CREATE = "create"
    DROP = "drop"
    INSERT = "insert"
    OTHER = "other"  # Anything we can't classify → permissive default


class ObjectKind(enum.Enum):
    TABLE = "table"
    SOURCE_TABLE = "source table"
    STREAM = "stream"
    INTO = "into"  # INSERT INTO
    SOURCE_CONNECTOR = "source connector"
    SINK_CONNECTOR = "sink connector"
    CONNECTOR = "connector"

    @property
    def is_connector(self) -> bool:
        return self in (
            ObjectKind.SOURCE_CONNECTOR,
            ObjectKind.SINK_CONNECTOR,
            ObjectKind.CONNECTOR,
        )


@dataclass(frozen=True)
class Statement:
    """A classified statement. `name` is lower-cased unless it was quoted ("..." or `...`)."""

    text: str
    action: Action
    kind: ObjectKind | None = None
    name: str | None = None
    kind_span: tuple[int, int] | None = None  # [start, end) of the kind keyword in text

    @property
    def is_connector(self) -> bool:
        return self.kind is not None and self.kind.is_connector

    @property
    def is_connector_ddl(self) -> bool:
        """CREATE/DROP of a connector: the engine assigns no command id."""
        return self.is_connector and self.action in (Action.CREATE, Action.DROP)
