"""ksqlrest: drive ksqlDB DDL through its REST API from build steps."""

from ksqlrest.client import (
    CommandIdMissing,
    CommandTimeout,
    KsqlClient,
    KsqlError,
    ServerConfig,
    StatementRejected,
)

__all__ = [
    "CommandIdMissing",
    "CommandTimeout",
    "KsqlClient",
    "KsqlError",
    "ServerConfig",
    "StatementRejected",
]
