"""CLI entry point."""

from __future__ import annotations

import logging

import click

from ksqlrest.cli.auth import auth
from ksqlrest.cli.inspect import describe, properties, queries, streams, topics
from ksqlrest.cli.server import server
from ksqlrest.cli.statements import create, drop, exec_cmd

_LEVELS = {0: logging.WARNING, 1: logging.INFO}


@click.group()
@click.version_option(package_name="ksqlrest")
@click.option("-v", "--verbose", count=True, help="More logging: -v info, -vv debug.")
def main(verbose: int) -> None:
    """ksqlrest: drive ksqlDB DDL through its REST API."""
    logging.basicConfig(
        level=_LEVELS.get(verbose, logging.DEBUG),
        format="%(levelname)s %(name)s: %(message)s",
    )


main.add_command(auth)
main.add_command(server)
main.add_command(exec_cmd)
main.add_command(create)
main.add_command(drop)
main.add_command(describe)
main.add_command(queries)
main.add_command(properties)
main.add_command(topics)
main.add_command(streams)
