"""Client types and errors: the contract between transport, poller, and callers."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_URL = "http://localhost:8088"
KSQL_CONTENT_TYPE = "application/vnd.ksql.v1+json"
OFFSET_RESET_PROPERTY = "ksql.streams.auto.offset.reset"

PENDING_STATUSES = frozenset({"QUEUED", "PARSING", "EXECUTING"})
FAILED_STATUSES = frozenset({"ERROR", "TERMINATED"})


@dataclass
class ServerConfig:
    name: str = "default"
    url: str = DEFAULT_URL
    username: str | None = None
    password: str | None = None
    request_timeout: float = 60.0

    @property
    def auth(self) -> tuple[str, str] | None:
        """Basic-auth pair, only when both halves are configured."""
        if self.username and self.password:
            return (self.username, self.password)
        return None

    @property
    def base_url(self) -> str:
        return self.url.rstrip("/")


@dataclass
class PollPolicy:
    """Bounded exponential backoff for command status polling."""

    initial_interval: float = 0.5
    max_interval: float = 5.0
    multiplier: float = 2.0
    timeout: float = 300.0


@dataclass
class Envelope:
    """One decoded HTTP response. The body shape is engine-defined."""

    status: int
    status_text: str
    body: object = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def first(self, key: str) -> object | None:
        """First non-null value of `key` in an object body or a list-of-objects body."""
        items = self.body if isinstance(self.body, list) else [self.body]
        for item in items:
            if isinstance(item, dict) and item.get(key) is not None:
                return item[key]
        return None


@dataclass
class StatementResult:
    """What a create/drop run returns: HTTP outcome, engine fields, command outcome."""

    status: int
    status_text: str
    statement_text: str | None = None
    error_code: object | None = None
    message: str | None = None
    command_id: str | None = None
    command_status: str | None = None
    command_message: str | None = None
    final_status: str | None = None
    body: object = None
    attempts: int = 1
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_envelope(cls, envelope: Envelope, *, attempts: int = 1) -> StatementResult:
        command_status = envelope.first("commandStatus")
        status_value = message_value = None
        if isinstance(command_status, dict):
            status_value = command_status.get("status")
            message_value = command_status.get("message")
        raw_id = envelope.first("commandId")
        return cls(
            status=envelope.status,
            status_text=envelope.status_text,
            statement_text=envelope.first("statementText"),
            error_code=envelope.first("error_code"),
            message=envelope.first("message"),
            command_id=normalize_command_id(raw_id),
            command_status=status_value,
            command_message=message_value,
            body=envelope.body,
            attempts=attempts,
        )

    @property
    def failed(self) -> bool:
        return self.final_status in FAILED_STATUSES


def normalize_command_id(raw: object | None) -> str | None:
    """Strip the backtick quoting the engine puts around names in command ids."""
    if raw is None:
        return None
    command_id = str(raw).replace("`", "")
    return command_id or None


class KsqlError(Exception):
    """Base class for client faults. Transport failures stay requests exceptions."""


class StatementRejected(KsqlError):
    """The engine answered with a non-empty error code."""

    def __init__(self, error_code: object, message: str | None, statement: str | None = None):
        self.error_code = error_code
        self.message = message
        self.statement = statement
        super().__init__(f"error_code: {error_code}: {message}")


class CommandIdMissing(KsqlError):
    """A DROP could not obtain a command id within its retry budget."""

    def __init__(self, statement: str, attempts: int, last_message: str | None = None):
        self.statement = statement
        self.attempts = attempts
        self.last_message = last_message
        detail = f" Last response: {last_message}" if last_message else ""
        super().__init__(
            f"Maximum retry attempts made for drop statement ({attempts} attempts). "
            f"Failed to get the command id.{detail}"
        )


class CommandTimeout(KsqlError):
    """A command stayed in the pending set past the poll deadline."""

    def __init__(self, command_id: str, last_status: str | None, timeout: float):
        self.command_id = command_id
        self.last_status = last_status
        self.timeout = timeout
        super().__init__(
            f"Command {command_id} still {last_status} after {timeout:g}s"
        )
