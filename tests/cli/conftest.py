"""CLI fixtures: isolated config dirs and a client bound to the fake session."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from ksqlrest.client import KsqlClient


@pytest.fixture(autouse=True)
def isolated_home(tmp_path):
    with patch("ksqlrest.statementlog._LOG_ROOT", tmp_path / "logs"), patch(
        "ksqlrest.servers._SERVERS_FILE", tmp_path / "servers.toml"
    ), patch("ksqlrest.auth._CREDENTIALS_DIR", tmp_path / "credentials"):
        yield tmp_path


@pytest.fixture
def fake_server(session):
    """Route every client the CLI builds through the fake session."""

    def factory(config, **kwargs):
        return KsqlClient(config, session=session, sleep=lambda s: None, **kwargs)

    with patch("ksqlrest.cli._shared.KsqlClient", side_effect=factory):
        yield session
