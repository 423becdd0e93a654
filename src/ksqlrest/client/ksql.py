"""KsqlClient: one object per server: statements, commands, server metadata."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from pathlib import Path

import requests

from ksqlrest.client._base import (
    OFFSET_RESET_PROPERTY,
    Envelope,
    PollPolicy,
    ServerConfig,
    StatementResult,
)
from ksqlrest.client.drop import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_PAUSE, DropOrchestrator
from ksqlrest.client.executor import StatementExecutor
from ksqlrest.client.poller import CommandPoller
from ksqlrest.client.transport import KsqlTransport
from ksqlrest.statements import ObjectKind, lower_if_unquoted

logger = logging.getLogger(__name__)

_CONNECTOR_KINDS = {
    ObjectKind.CONNECTOR.value,
    ObjectKind.SOURCE_CONNECTOR.value,
    ObjectKind.SINK_CONNECTOR.value,
}


def offset_properties(earliest: bool = False, latest: bool = False) -> dict[str, str]:
    """Streams properties for auto.offset.reset. `earliest` wins if both are set."""
    if earliest:
        return {OFFSET_RESET_PROPERTY: "earliest"}
    if latest:
        return {OFFSET_RESET_PROPERTY: "latest"}
    return {}


def _first_entry(body: object) -> dict:
    if isinstance(body, list) and body and isinstance(body[0], dict):
        return body[0]
    if isinstance(body, dict):
        return body
    return {}


class KsqlClient:
    """ksqlDB REST client.

    Wires a transport, a command poller, a statement executor and a drop
    orchestrator around one ServerConfig. Everything is blocking and
    sequential.
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        poll_policy: PollPolicy | None = None,
        drop_retry_pause: float = DEFAULT_RETRY_PAUSE,
        drop_max_retries: int = DEFAULT_MAX_RETRIES,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or ServerConfig()
        self.transport = KsqlTransport(self.config, session=session)
        self.poller = CommandPoller(self.transport, poll_policy, sleep=sleep, clock=clock)
        self.executor = StatementExecutor(self.transport, self.poller)
        self.dropper = DropOrchestrator(
            self.executor,
            retry_pause=drop_retry_pause,
            max_retries=drop_max_retries,
            sleep=sleep,
        )

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> KsqlClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- Statements ------------------------------------------------------------

    @staticmethod
    def _props(properties: dict[str, str] | None, earliest: bool, latest: bool = False) -> dict:
        merged = offset_properties(earliest, latest)
        merged.update(properties or {})
        return merged

    def execute(
        self, statement: str, properties: dict[str, str] | None = None, *, earliest: bool = False
    ) -> Envelope:
        return self.executor.execute(statement, self._props(properties, earliest))

    def execute_many(
        self,
        statements: Iterable[str],
        properties: dict[str, str] | None = None,
        *,
        earliest: bool = False,
    ) -> list[Envelope]:
        return [self.execute(s, properties, earliest=earliest) for s in statements]

    def create(
        self,
        statement: str,
        properties: dict[str, str] | None = None,
        *,
        earliest: bool = False,
        latest: bool = False,
    ) -> StatementResult:
        return self.executor.run(statement, self._props(properties, earliest, latest))

    def create_many(
        self,
        statements: Iterable[str],
        properties: dict[str, str] | None = None,
        *,
        earliest: bool = False,
        latest: bool = False,
    ) -> list[StatementResult]:
        return self.executor.run_many(statements, self._props(properties, earliest, latest))

    def drop(self, statement: str, properties: dict[str, str] | None = None) -> StatementResult:
        return self.dropper.drop(statement, properties or {})

    def drop_many(
        self, statements: Iterable[str], properties: dict[str, str] | None = None
    ) -> list[StatementResult]:
        return self.dropper.drop_many(statements, properties or {})

    def command_status(self, command_id: str) -> str | None:
        return self.poller.status(command_id)

    # -- Server metadata ---------------------------------------------------------

    def source_description(self, name: str, kind: str | None = None) -> object | None:
        """DESCRIBE result: `sourceDescription`, or the connector `status` for connectors."""
        folded = lower_if_unquoted(name)
        if kind in _CONNECTOR_KINDS:
            envelope = self.execute(f"DESCRIBE CONNECTOR {folded}")
            return _first_entry(envelope.body).get("status")
        return self.execute(f"DESCRIBE {folded}").first("sourceDescription")

    def _queries(self, name: str, key: str) -> dict | None:
        description = self.source_description(name)
        if not isinstance(description, dict):
            return None
        queries = description.get(key) or []
        return queries[0] if queries else None

    def read_queries(self, name: str) -> dict | None:
        """First query reading from `name`, or None."""
        return self._queries(name, "readQueries")

    def write_queries(self, name: str) -> dict | None:
        """First query writing to `name`, or None."""
        return self._queries(name, "writeQueries")

    def query_ids(self, name: str) -> list[str]:
        queries = [self.read_queries(name), self.write_queries(name)]
        return [q["id"] for q in queries if isinstance(q, dict) and q.get("id")]

    def properties(self) -> dict[str, object]:
        envelope = self.execute("LIST PROPERTIES")
        properties = _first_entry(envelope.body).get("properties") or {}
        # Newer servers return a list of {name, value} entries.
        if isinstance(properties, list):
            properties = {
                p["name"]: p.get("value") for p in properties if isinstance(p, dict) and "name" in p
            }
        logger.debug("properties: %s", properties)
        return properties

    def property(self, name: str) -> object | None:
        return self.properties().get(name)

    def extension_path(self) -> str | None:
        value = self.property("ksql.extension.dir")
        return str(value) if value is not None else None

    def extension_dir(self) -> Path | None:
        path = self.extension_path()
        return Path(path) if path is not None else None

    def schema_registry(self) -> str | None:
        value = self.property("ksql.schema.registry.url")
        return str(value) if value is not None else None

    def topics(self) -> list[dict]:
        topics = self.execute("SHOW TOPICS").first("topics") or []
        logger.debug("Topics: %s", topics)
        return topics

    def streams(self) -> list[dict]:
        streams = self.execute("SHOW STREAMS").first("streams") or []
        logger.debug("Streams: %s", streams)
        return streams
