"""DROP with recovery: object-kind drift and late command ids.

A DROP can fail for two recoverable reasons:

- the object is registered under the other kind (dropping a TABLE that is
  now a STREAM, or the reverse). The engine answers 400 with
  "Incompatible data source type is <KIND>"; the statement is rewritten once
  with the right keyword and re-issued.
- the engine has not assigned a command id yet (the object is still being
  registered). The statement is re-issued after a pause, up to a budget.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from ksqlrest.client._base import CommandIdMissing, Envelope, StatementResult
from ksqlrest.client.executor import StatementExecutor
from ksqlrest.statements import Action, ObjectKind, classify, swap_kind

logger = logging.getLogger(__name__)

DEFAULT_RETRY_PAUSE = 10.0
DEFAULT_MAX_RETRIES = 10

_MISMATCH_MARKER = "Incompatible data source type is {}"

# Requested kind → the kind the engine reports instead.
_SWAPS: dict[ObjectKind, str] = {
    ObjectKind.TABLE: "STREAM",
    ObjectKind.STREAM: "TABLE",
}


def _kind_mismatch(statement: str, envelope: Envelope) -> str | None:
    """The corrected statement if the response reports a TABLE/STREAM mismatch."""
    if envelope.status != 400:
        return None
    message = envelope.first("message")
    if not isinstance(message, str):
        return None

    classified = classify(statement)
    if classified.action is not Action.DROP or classified.kind not in _SWAPS:
        return None
    actual = _SWAPS[classified.kind]
    if _MISMATCH_MARKER.format(actual) not in message:
        return None
    logger.info("Type is now %s. Issuing DROP %s...", actual, actual)
    return swap_kind(classified, actual)


class DropOrchestrator:
    def __init__(
        self,
        executor: StatementExecutor,
        *,
        retry_pause: float = DEFAULT_RETRY_PAUSE,
        max_retries: int = DEFAULT_MAX_RETRIES,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._executor = executor
        self.retry_pause = retry_pause
        self.max_retries = max_retries
        self._sleep = sleep

    def drop(self, statement: str, properties: dict[str, str] | None = None) -> StatementResult:
        """Execute a DROP and block until its command is terminal.

        Raises CommandIdMissing when no command id arrives within the budget.
        """
        retries_left = self.max_retries
        kind_corrected = False
        attempts = 0

        while True:
            envelope = self._executor.execute(statement, properties)
            attempts += 1
            logger.debug("result: %s", envelope)

            if classify(statement).is_connector_ddl:
                return StatementResult.from_envelope(envelope, attempts=attempts)

            if not kind_corrected:
                corrected = _kind_mismatch(statement, envelope)
                if corrected is not None:
                    kind_corrected = True
                    statement = corrected
                    envelope = self._executor.execute(statement, properties)
                    attempts += 1

            result = StatementResult.from_envelope(envelope, attempts=attempts)
            if result.command_id is not None:
                break

            if retries_left <= 0:
                raise CommandIdMissing(statement, attempts, result.message)
            retries_left -= 1
            logger.info(
                "Command id is null. Pausing for %g seconds before retrying.", self.retry_pause
            )
            self._sleep(self.retry_pause)

        self._executor.await_command(result)
        logger.debug("final result: %s", result)
        return result

    def drop_many(
        self, statements: Iterable[str], properties: dict[str, str] | None = None
    ) -> list[StatementResult]:
        return [self.drop(s, properties) for s in statements]
