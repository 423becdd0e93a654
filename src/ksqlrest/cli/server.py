"""The `server` command group: manage named ksqlDB servers."""

from __future__ import annotations

import re

import click

from ksqlrest.servers import list_servers, remove_server, save_server

_PASSWORD_RE = re.compile(r"(://[^:/@]+:)[^@]+(@)")


def _mask_secrets(value: str) -> str:
    """Mask passwords embedded in URLs."""
    return _PASSWORD_RE.sub(r"\1****\2", value)


@click.group()
def server() -> None:
    """Manage named servers (~/.ksqlrest/servers.toml)."""


@server.command("add")
@click.argument("name")
@click.argument("url")
@click.option("--username", default=None, help="Basic-auth user (password: `ksqlrest auth login`).")
@click.option("--request-timeout", type=float, default=None, help="HTTP timeout in seconds.")
def server_add(name: str, url: str, username: str | None, request_timeout: float | None) -> None:
    """Add a named server.

    \b
    Examples:
      ksqlrest server add local http://localhost:8088
      ksqlrest server add prod https://ksql.example.com --username deploy
    """
    if "://" not in url:
        raise click.BadParameter(f"Expected a URL like http://host:8088, got '{url}'")
    params = {}
    if username:
        params["username"] = username
    if request_timeout is not None:
        params["request_timeout"] = str(request_timeout)
    path = save_server(name, url, **params)
    click.echo(f"Saved server '{name}' to {path}")


@server.command("list")
def server_list() -> None:
    """List all named servers."""
    servers = list_servers()
    if not servers:
        click.echo("No servers configured.")
        click.echo("Add one: ksqlrest server add <name> <url>")
        return

    for name, entry in servers.items():
        url = _mask_secrets(str(entry.get("url", "?")))
        extras = ", ".join(f"{k}={v}" for k, v in entry.items() if k != "url")
        click.echo(f"  {name}: {url}" + (f" ({extras})" if extras else ""))


@server.command("remove")
@click.argument("name")
def server_remove(name: str) -> None:
    """Remove a named server."""
    if not remove_server(name):
        click.echo(f"Server '{name}' not found.", err=True)
        raise SystemExit(1)
    click.echo(f"Removed server '{name}'.")
