"""Test credential management."""

import os
from unittest.mock import patch

from ksqlrest.auth import basic_auth, load_credentials, remove_credentials, store_credentials


def test_store_and_load(tmp_path):
    creds_dir = tmp_path / "credentials"
    with patch("ksqlrest.auth._CREDENTIALS_DIR", creds_dir):
        store_credentials("prod", {"username": "deploy", "password": "s3cret"})
        loaded = load_credentials("prod")

    assert loaded == {"username": "deploy", "password": "s3cret"}


def test_store_creates_file_mode_600(tmp_path):
    creds_dir = tmp_path / "credentials"
    with patch("ksqlrest.auth._CREDENTIALS_DIR", creds_dir):
        path = store_credentials("prod", {"password": "secret"})

    mode = os.stat(path).st_mode & 0o777
    assert mode == 0o600


def test_load_missing_returns_none(tmp_path):
    creds_dir = tmp_path / "credentials"
    with patch("ksqlrest.auth._CREDENTIALS_DIR", creds_dir):
        assert load_credentials("prod") is None
        assert basic_auth("prod") == (None, None)


def test_basic_auth_pair(tmp_path):
    creds_dir = tmp_path / "credentials"
    with patch("ksqlrest.auth._CREDENTIALS_DIR", creds_dir):
        store_credentials("prod", {"username": "deploy", "password": "x"})
        assert basic_auth("prod") == ("deploy", "x")


def test_remove_existing(tmp_path):
    creds_dir = tmp_path / "credentials"
    with patch("ksqlrest.auth._CREDENTIALS_DIR", creds_dir):
        store_credentials("prod", {"password": "x"})
        assert remove_credentials("prod") is True
        assert load_credentials("prod") is None


def test_remove_nonexistent(tmp_path):
    creds_dir = tmp_path / "credentials"
    with patch("ksqlrest.auth._CREDENTIALS_DIR", creds_dir):
        assert remove_credentials("prod") is False


def test_auth_login_status_logout_cli(tmp_path):
    from click.testing import CliRunner

    from ksqlrest.cli.auth import auth

    creds_dir = tmp_path / "credentials"
    runner = CliRunner()

    with patch("ksqlrest.auth._CREDENTIALS_DIR", creds_dir):
        result = runner.invoke(auth, ["status", "prod"])
        assert "no stored credentials" in result.output

        result = runner.invoke(auth, ["login", "prod", "--username", "deploy"], input="s3cret\n")
        assert result.exit_code == 0
        assert load_credentials("prod") == {"username": "deploy", "password": "s3cret"}

        result = runner.invoke(auth, ["status", "prod"])
        assert "authenticated as deploy" in result.output

        result = runner.invoke(auth, ["logout", "prod"])
        assert "credentials removed" in result.output
        assert load_credentials("prod") is None
