"""Credential storage: basic-auth passwords kept out of servers.toml."""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path

_CREDENTIALS_DIR = Path.home() / ".ksqlrest" / "credentials"


def _creds_path(server: str) -> Path:
    return _CREDENTIALS_DIR / f"{server}.json"


def store_credentials(server: str, creds_data: dict) -> Path:
    """Save credentials to ~/.ksqlrest/credentials/{server}.json (mode 600)."""
    path = _creds_path(server)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(creds_data, indent=2))
    os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
    return path


def load_credentials(server: str) -> dict | None:
    """Load stored credentials, or None if not found."""
    path = _creds_path(server)
    if not path.exists():
        return None
    return json.loads(path.read_text())


def remove_credentials(server: str) -> bool:
    """Remove stored credentials. Returns True if file existed."""
    path = _creds_path(server)
    if path.exists():
        path.unlink()
        return True
    return False


def basic_auth(server: str) -> tuple[str | None, str | None]:
    """(username, password) stored for a server; (None, None) when absent."""
    creds = load_credentials(server) or {}
    return creds.get("username"), creds.get("password")
