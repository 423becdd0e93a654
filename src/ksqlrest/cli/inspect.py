"""Read-only commands: describe, queries, properties, topics, streams."""

from __future__ import annotations

import json

import click
import requests

from ksqlrest.cli._output import render_mapping
from ksqlrest.cli._shared import build_client, connection_options, format_option, handle_errors
from ksqlrest.client import KsqlError
from ksqlrest.statements import ObjectKind


def _connection_options(f):
    options = [connection_options, format_option]
    for option in reversed(options):
        f = option(f)
    return f


def _emit(output_format: str, data: object, text: str) -> None:
    if output_format == "json":
        click.echo(json.dumps(data, indent=2, default=str))
    else:
        click.echo(text)


def _names(items: list) -> str:
    return "\n".join(str(i.get("name", i)) if isinstance(i, dict) else str(i) for i in items)


@click.command("describe")
@click.argument("name")
@click.option("--type", "kind", type=click.Choice([k.value for k in ObjectKind]), default=None,
              help="Object kind; connector kinds use DESCRIBE CONNECTOR.")
@_connection_options
@handle_errors(KsqlError, requests.RequestException, click.BadParameter)
def describe(name: str, kind: str | None, server, username, password, output_format: str) -> None:
    """Describe a stream, table or connector."""
    with build_client(server, username, password) as client:
        description = client.source_description(name, kind)
    if description is None:
        raise KsqlError(f"no description returned for '{name}'")
    text = render_mapping(description) if isinstance(description, dict) else str(description)
    _emit(output_format, {"name": name, "description": description}, text)


@click.command("queries")
@click.argument("name")
@_connection_options
@handle_errors(KsqlError, requests.RequestException, click.BadParameter)
def queries(name: str, server, username, password, output_format: str) -> None:
    """List ids of the queries reading from or writing to a stream or table."""
    with build_client(server, username, password) as client:
        ids = client.query_ids(name)
    _emit(output_format, {"name": name, "query_ids": ids}, "\n".join(ids))


@click.command("properties")
@click.argument("property_name", required=False, default=None)
@_connection_options
@handle_errors(KsqlError, requests.RequestException, click.BadParameter)
def properties(property_name: str | None, server, username, password, output_format: str) -> None:
    """Show server properties, or a single property value."""
    with build_client(server, username, password) as client:
        props = client.properties()
    if property_name is None:
        _emit(output_format, {"properties": props}, render_mapping(props))
        return
    value = props.get(property_name)
    _emit(output_format, {"name": property_name, "value": value}, "" if value is None else str(value))


@click.command("topics")
@_connection_options
@handle_errors(KsqlError, requests.RequestException, click.BadParameter)
def topics(server, username, password, output_format: str) -> None:
    """List Kafka topics known to the server."""
    with build_client(server, username, password) as client:
        items = client.topics()
    _emit(output_format, {"topics": items}, _names(items))


@click.command("streams")
@_connection_options
@handle_errors(KsqlError, requests.RequestException, click.BadParameter)
def streams(server, username, password, output_format: str) -> None:
    """List streams defined on the server."""
    with build_client(server, username, password) as client:
        items = client.streams()
    _emit(output_format, {"streams": items}, _names(items))
