"""Wait for an asynchronous command to leave the pending set."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ksqlrest.client._base import PENDING_STATUSES, CommandTimeout, PollPolicy
from ksqlrest.client.transport import KsqlTransport

logger = logging.getLogger(__name__)


class CommandPoller:
    def __init__(
        self,
        transport: KsqlTransport,
        policy: PollPolicy | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._transport = transport
        self.policy = policy or PollPolicy()
        self._sleep = sleep
        self._clock = clock

    def status(self, command_id: str) -> str | None:
        """One status query. None when the response carries no status."""
        status = self._transport.get_status(command_id).first("status")
        return str(status) if status is not None else None

    def await_completion(self, command_id: str) -> str | None:
        """Poll until the command is terminal and return that status as-is.

        SUCCESS and ERROR are both terminal; telling them apart is the
        caller's job. Raises CommandTimeout once the deadline passes with
        the command still pending.
        """
        policy = self.policy
        deadline = self._clock() + policy.timeout
        interval = policy.initial_interval

        while True:
            status = self.status(command_id)
            if status not in PENDING_STATUSES:
                logger.debug("command %s finished: %s", command_id, status)
                return status

            remaining = deadline - self._clock()
            if remaining <= 0:
                raise CommandTimeout(command_id, status, policy.timeout)

            logger.info("Command %s still pending (%s)...", command_id, status)
            self._sleep(min(interval, remaining))
            interval = min(interval * policy.multiplier, policy.max_interval)
