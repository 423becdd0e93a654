"""Named server management — ~/.ksqlrest/servers.toml."""

from __future__ import annotations

import os
import stat
import tomllib
from pathlib import Path

from ksqlrest.client._base import ServerConfig

_SERVERS_FILE = Path.home() / ".ksqlrest" / "servers.toml"

_FIELDS = ("url", "username", "request_timeout")


def _escape_toml_value(v: str) -> str:
    """Escape a string for safe inclusion in a TOML double-quoted value."""
    return v.replace("\\", "\\\\").replace('"', '\\"')


def _write_toml(data: dict[str, dict]) -> None:
    """Serialize servers dict to TOML and write with restricted permissions."""
    lines: list[str] = []
    for server_name, entry in data.items():
        lines.append(f"[{server_name}]")
        for k, v in entry.items():
            lines.append(f'{k} = "{_escape_toml_value(str(v))}"')
        lines.append("")

    _SERVERS_FILE.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
    _SERVERS_FILE.write_text("\n".join(lines))
    os.chmod(_SERVERS_FILE, stat.S_IRUSR | stat.S_IWUSR)  # 0600


def _load_file() -> dict:
    if not _SERVERS_FILE.exists():
        return {}
    return tomllib.loads(_SERVERS_FILE.read_text())


def list_servers() -> dict[str, dict]:
    """Return all named servers as {name: {url, ...}}."""
    return _load_file()


def get_server(name: str) -> ServerConfig | None:
    """Look up a named server. Returns None if not found or it has no url.

    Raises ValueError if the stored request_timeout is not a number.
    """
    data = _load_file()
    entry = data.get(name)
    if not entry or not entry.get("url"):
        return None

    config = ServerConfig(name=name, url=str(entry["url"]))
    if entry.get("username"):
        config.username = str(entry["username"])
    if entry.get("request_timeout"):
        try:
            config.request_timeout = float(entry["request_timeout"])
        except ValueError as e:
            raise ValueError(
                f"Server '{name}' has an invalid request_timeout: {entry['request_timeout']!r}"
            ) from e
    return config


def save_server(name: str, url: str, **params: str) -> Path:
    """Save a named server to the config file. Unknown keys are ignored."""
    data = _load_file()
    entry = {"url": url}
    entry.update({k: v for k, v in params.items() if k in _FIELDS and v})
    data[name] = entry
    _write_toml(data)
    return _SERVERS_FILE


def remove_server(name: str) -> bool:
    """Remove a named server. Returns True if removed, False if not found."""
    data = _load_file()
    if name not in data:
        return False
    del data[name]
    if not data:
        _SERVERS_FILE.unlink(missing_ok=True)
    else:
        _write_toml(data)
    return True
