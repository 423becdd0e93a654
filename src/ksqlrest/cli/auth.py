"""The `auth` command group: manage basic-auth credentials per server."""

from __future__ import annotations

import click

from ksqlrest.auth import load_credentials, remove_credentials, store_credentials


@click.group()
def auth() -> None:
    """Manage server credentials."""


@auth.command()
@click.argument("server")
@click.option("--username", prompt=True, help="Basic-auth user.")
@click.option("--password", prompt=True, hide_input=True, help="Basic-auth password.")
def login(server: str, username: str, password: str) -> None:
    """Store basic-auth credentials for a server."""
    path = store_credentials(server, {"username": username, "password": password})
    click.echo(f"Credentials saved to {path}")


@auth.command()
@click.argument("server")
def status(server: str) -> None:
    """Check if credentials are stored for a server."""
    creds = load_credentials(server)
    if creds is not None:
        click.echo(f"{server}: authenticated as {creds.get('username', '?')}")
    else:
        click.echo(f"{server}: no stored credentials")


@auth.command()
@click.argument("server")
def logout(server: str) -> None:
    """Remove stored credentials for a server."""
    if remove_credentials(server):
        click.echo(f"{server}: credentials removed")
    else:
        click.echo(f"{server}: no stored credentials to remove")
