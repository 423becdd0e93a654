"""Statement execution: normalize → transmit → (for DDL) wait for the command."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ksqlrest.client._base import Envelope, StatementRejected, StatementResult
from ksqlrest.client.poller import CommandPoller
from ksqlrest.client.transport import KsqlTransport
from ksqlrest.statements import Action, classify, normalize

logger = logging.getLogger(__name__)

_VERBOSE_ACTIONS = (Action.CREATE, Action.DROP)


class StatementExecutor:
    def __init__(self, transport: KsqlTransport, poller: CommandPoller) -> None:
        self._transport = transport
        self._poller = poller

    def execute(self, statement: str, properties: dict[str, str] | None = None) -> Envelope:
        """Send one statement as-is (after normalization). No fault decisions."""
        prepared = normalize(statement)
        if classify(statement).action in _VERBOSE_ACTIONS:
            logger.info(prepared)
        else:
            logger.debug(prepared)
        return self._transport.post_statement(prepared, properties)

    def await_command(self, result: StatementResult) -> StatementResult:
        """Block until the result's command is terminal and record the outcome."""
        if result.command_id is None:
            return result
        result.final_status = self._poller.await_completion(result.command_id)
        return result

    def run(self, statement: str, properties: dict[str, str] | None = None) -> StatementResult:
        """Execute a CREATE (or other DDL/DML) and wait for its command.

        Raises StatementRejected when the engine returns an error code.
        Connector DDL returns immediately: the engine assigns it no command.
        """
        envelope = self.execute(statement, properties)
        result = StatementResult.from_envelope(envelope)

        if result.error_code:
            raise StatementRejected(result.error_code, result.message, statement)

        if classify(statement).is_connector_ddl:
            return result

        if result.command_id is None:
            msg = f"no command id returned for statement: {normalize(statement)}"
            logger.warning(msg)
            result.warnings.append(msg)
            return result

        self.await_command(result)
        logger.debug("result: %s", result)
        return result

    def run_many(
        self, statements: Iterable[str], properties: dict[str, str] | None = None
    ) -> list[StatementResult]:
        results = [self.run(s, properties) for s in statements]
        logger.warning("%d objects created.", len(results))
        return results
