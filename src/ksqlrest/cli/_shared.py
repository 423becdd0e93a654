"""Shared helpers for CLI commands: statement sources, server resolution, errors."""

from __future__ import annotations

import functools
import json
import sys
from collections.abc import Callable

import click
from sqlglot.errors import TokenError

from ksqlrest.auth import basic_auth
from ksqlrest.client import DEFAULT_URL, KsqlClient, PollPolicy, ServerConfig
from ksqlrest.client.drop import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_PAUSE
from ksqlrest.servers import get_server
from ksqlrest.statements import split_statements

format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="json",
    help="Output format.",
)


def connection_options(f: Callable) -> Callable:
    """Attach --server/--username/--password to a command."""
    options = [
        click.option(
            "--server",
            envvar="KSQL_URL",
            default=None,
            help=f"Server name from servers.toml, or a URL. Default: {DEFAULT_URL}.",
        ),
        click.option("--username", envvar="KSQL_USERNAME", default=None, help="Basic-auth user."),
        click.option("--password", envvar="KSQL_PASSWORD", default=None, help="Basic-auth password."),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def server_options(f: Callable) -> Callable:
    """Attach the connection options and the polling knobs to a command."""
    options = [
        connection_options,
        click.option(
            "--poll-timeout",
            type=float,
            default=PollPolicy.timeout,
            show_default=True,
            help="Seconds to wait for a command to leave QUEUED/PARSING/EXECUTING.",
        ),
        click.option(
            "--drop-retry-pause",
            type=float,
            default=DEFAULT_RETRY_PAUSE,
            show_default=True,
            help="Seconds between DROP attempts while no command id is returned.",
        ),
        click.option(
            "--drop-max-retries",
            type=int,
            default=DEFAULT_MAX_RETRIES,
            show_default=True,
            help="DROP attempts allowed without a command id.",
        ),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def resolve_server(value: str | None, username: str | None, password: str | None) -> ServerConfig:
    """Resolve --server: named server first, then a raw URL, then the default URL.

    Stored credentials fill in whatever --username/--password leave unset.
    """
    if value is None:
        config = ServerConfig()
    else:
        try:
            config = get_server(value)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="'--server'") from e
        if config is None:
            if "://" not in value:
                raise click.BadParameter(
                    f"Server '{value}' not found in ~/.ksqlrest/servers.toml and is not a URL.\n"
                    f"  Add it: ksqlrest server add {value} http://host:8088",
                    param_hint="'--server'",
                )
            config = ServerConfig(name=value, url=value)

    stored_user, stored_password = basic_auth(config.name)
    config.username = username or config.username or stored_user
    config.password = password or stored_password
    return config


def build_client(
    server: str | None,
    username: str | None,
    password: str | None,
    *,
    poll_timeout: float = PollPolicy.timeout,
    drop_retry_pause: float = DEFAULT_RETRY_PAUSE,
    drop_max_retries: int = DEFAULT_MAX_RETRIES,
) -> KsqlClient:
    config = resolve_server(server, username, password)
    return KsqlClient(
        config,
        poll_policy=PollPolicy(timeout=poll_timeout),
        drop_retry_pause=drop_retry_pause,
        drop_max_retries=drop_max_retries,
    )


def resolve_statements(sql: tuple[str, ...], file: str | None, from_stdin: bool) -> list[str]:
    """Collect statements from arguments, --file, or stdin. Exactly one source required."""
    sources = sum([bool(sql), file is not None, from_stdin])
    if sources > 1:
        raise click.UsageError("Provide SQL as arguments, --file, or --from-stdin, not several.")
    if from_stdin:
        if sys.stdin.isatty():
            raise click.UsageError("--from-stdin requires piped input (stdin is a terminal).")
        texts = [sys.stdin.read()]
    elif file is not None:
        with open(file) as f:
            texts = [f.read()]
    else:
        texts = list(sql)

    try:
        statements = [s for text in texts for s in split_statements(text)]
    except TokenError as e:
        raise click.UsageError(f"could not split statements: {e}") from e
    if not statements:
        raise click.UsageError("No statements given. Provide SQL, --file, or --from-stdin.")
    return statements


def parse_properties(values: tuple[str, ...]) -> dict[str, str]:
    """--property key=value pairs → streamsProperties."""
    properties: dict[str, str] = {}
    for value in values:
        if "=" not in value:
            raise click.BadParameter(f"Expected key=value, got '{value}'", param_hint="'--property'")
        k, v = value.split("=", 1)
        properties[k.strip()] = v.strip()
    return properties


def fail(output_format: str, message: str, **extra: object) -> None:
    """Report an error in the requested format and exit 1."""
    if output_format == "json":
        click.echo(json.dumps({**extra, "error": message}, indent=2, default=str))
    else:
        click.echo(f"error: {message}", err=True)
    raise SystemExit(1)


def handle_errors(*errors: type[BaseException]) -> Callable:
    """Turn the given exceptions into `fail(...)` at the command boundary."""

    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except errors as e:
                fail(kwargs.get("output_format", "json"), str(e))

        return wrapper

    return decorator
