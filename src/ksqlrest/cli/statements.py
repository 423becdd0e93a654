"""The `exec`, `create` and `drop` commands: submit statements to the server.

`create` and `drop` block until each statement's command leaves the pending
set; `drop` additionally re-issues statements whose object kind drifted and
retries while the server has not assigned a command id. `exec` sends the
statement and prints the raw response.
"""

from __future__ import annotations

import json
import time

import click
import requests

from ksqlrest.cli._output import envelope_to_dict, render_text, result_to_dict
from ksqlrest.cli._shared import (
    build_client,
    format_option,
    parse_properties,
    resolve_statements,
    server_options,
)
from ksqlrest.client import KsqlClient, KsqlError
from ksqlrest.statementlog import cleanup_old_logs, log_statement
from ksqlrest.statements import classify


def statement_options(f):
    options = [
        click.argument("sql", nargs=-1),
        click.option("--file", type=click.Path(exists=True, dir_okay=False), default=None,
                     help="Read statements from a script file."),
        click.option("--from-stdin", is_flag=True, help="Read statements from stdin."),
        click.option("--property", "-p", "properties", multiple=True,
                     help="Streams property key=value (repeatable)."),
        server_options,
        format_option,
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _submit(client: KsqlClient, mode: str, statement: str, properties: dict,
            earliest: bool, latest: bool) -> tuple[dict[str, object], bool]:
    """Run one statement in `mode`. Returns (output entry, failed)."""
    if mode == "exec":
        envelope = client.execute(statement, properties, earliest=earliest)
        return envelope_to_dict(statement, envelope), not envelope.ok
    if mode == "create":
        result = client.create(statement, properties, earliest=earliest, latest=latest)
    else:
        result = client.drop(statement, properties)
    return result_to_dict(statement, result), result.failed


def _run(mode: str, sql, file, from_stdin, properties, server, username, password,
         poll_timeout, drop_retry_pause, drop_max_retries, output_format,
         earliest=False, latest=False) -> None:
    cleanup_old_logs()
    statements = resolve_statements(sql, file, from_stdin)
    props = parse_properties(properties)

    try:
        client = build_client(
            server, username, password,
            poll_timeout=poll_timeout,
            drop_retry_pause=drop_retry_pause,
            drop_max_retries=drop_max_retries,
        )
    except click.BadParameter as e:
        click.echo(f"error: {e.format_message()}", err=True)
        raise SystemExit(1) from e

    entries: list[dict[str, object]] = []
    any_failed = False
    error: str | None = None
    with client:
        for statement in statements:
            classified = classify(statement)
            t0 = time.monotonic()
            entry: dict[str, object] = {}
            try:
                entry, failed = _submit(client, mode, statement, props, earliest, latest)
            except (KsqlError, requests.RequestException) as e:
                error = str(e)
            finally:
                log_statement(
                    statement=statement,
                    server=client.config.name,
                    action=classified.action.value,
                    kind=classified.kind.value if classified.kind else None,
                    name=classified.name,
                    command_id=entry.get("command_id"),
                    final_status=entry.get("final_status"),
                    error=error,
                    duration_ms=(time.monotonic() - t0) * 1000,
                )
            if error is not None:
                break
            entries.append(entry)
            any_failed = any_failed or failed

    if output_format == "json":
        envelope: dict[str, object] = {"server": client.config.name, "results": entries}
        if error is not None:
            envelope["error"] = error
        click.echo(json.dumps(envelope, indent=2, default=str))
    else:
        for entry in entries:
            click.echo(render_text(entry))
        if error is not None:
            click.echo(f"error: {error}", err=True)

    if error is not None or any_failed:
        raise SystemExit(1)


@click.command("exec")
@statement_options
@click.option("--earliest", is_flag=True, help="Set auto.offset.reset=earliest.")
def exec_cmd(earliest: bool, **kwargs) -> None:
    """Send statements and print the raw server responses."""
    _run("exec", earliest=earliest, **kwargs)


@click.command("create")
@statement_options
@click.option("--earliest", is_flag=True, help="Set auto.offset.reset=earliest.")
@click.option("--latest", is_flag=True, help="Set auto.offset.reset=latest.")
def create(earliest: bool, latest: bool, **kwargs) -> None:
    """Create streams, tables or connectors and wait for each command to finish.

    \b
    Examples:
      ksqlrest create "CREATE STREAM clicks (id INT) WITH (kafka_topic='clicks', value_format='JSON')"
      ksqlrest create --file pipeline.sql --earliest --server prod
    """
    _run("create", earliest=earliest, latest=latest, **kwargs)


@click.command("drop")
@statement_options
def drop(**kwargs) -> None:
    """Drop streams, tables or connectors and wait for each command to finish.

    A TABLE that turns out to be a STREAM (or the reverse) is dropped under
    its actual kind.
    """
    _run("drop", **kwargs)
