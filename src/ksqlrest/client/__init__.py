"""ksqlDB REST client: transport, command polling, statement execution."""

from ksqlrest.client._base import (
    DEFAULT_URL,
    FAILED_STATUSES,
    PENDING_STATUSES,
    CommandIdMissing,
    CommandTimeout,
    Envelope,
    KsqlError,
    PollPolicy,
    ServerConfig,
    StatementRejected,
    StatementResult,
)
from ksqlrest.client.drop import DropOrchestrator
from ksqlrest.client.executor import StatementExecutor
from ksqlrest.client.ksql import KsqlClient, offset_properties
from ksqlrest.client.poller import CommandPoller
from ksqlrest.client.transport import KsqlTransport

__all__ = [
    "DEFAULT_URL",
    "FAILED_STATUSES",
    "PENDING_STATUSES",
    "CommandIdMissing",
    "CommandPoller",
    "CommandTimeout",
    "DropOrchestrator",
    "Envelope",
    "KsqlClient",
    "KsqlError",
    "KsqlTransport",
    "PollPolicy",
    "ServerConfig",
    "StatementExecutor",
    "StatementRejected",
    "StatementResult",
    "offset_properties",
]
