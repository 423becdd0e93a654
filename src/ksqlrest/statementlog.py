"""Statement log: one JSONL file per day and project under ~/.ksqlrest/logs."""

from __future__ import annotations

import contextlib
import json
import os
from datetime import UTC, date, datetime, timedelta
from pathlib import Path

DEFAULT_RETENTION_DAYS = 30
_LOG_ROOT = Path.home() / ".ksqlrest" / "logs"


def _project_slug() -> str:
    """The working directory as a single path component."""
    return os.getcwd().replace("/", "-").lstrip("-")


def _project_dir() -> Path:
    return _LOG_ROOT / _project_slug()


def log_statement(
    *,
    statement: str,
    server: str | None = None,
    action: str | None = None,
    kind: str | None = None,
    name: str | None = None,
    command_id: str | None = None,
    final_status: str | None = None,
    error: str | None = None,
    duration_ms: float | None = None,
) -> None:
    """Append one submitted statement and its outcome to today's log file."""
    now = datetime.now(UTC)
    record = {
        "ts": now.isoformat(),
        "server": server,
        "statement": statement,
        "action": action,
        "kind": kind,
        "name": name,
        "command_id": command_id,
        "final_status": final_status,
        "error": error,
        "duration_ms": duration_ms,
    }
    path = _project_dir() / f"{now.date().isoformat()}.jsonl"
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a") as f:
        f.write(json.dumps(record, default=str) + "\n")


def cleanup_old_logs(*, retention_days: int = DEFAULT_RETENTION_DAYS) -> int:
    """Delete this project's day files older than `retention_days`. Returns how many."""
    project_dir = _project_dir()
    if not project_dir.is_dir():
        return 0

    oldest_kept = datetime.now(UTC).date() - timedelta(days=retention_days)
    deleted = 0
    for path in project_dir.glob("*.jsonl"):
        try:
            day = date.fromisoformat(path.stem)
        except ValueError:
            continue
        if day < oldest_kept:
            path.unlink()
            deleted += 1

    # Only succeeds once the directory is empty.
    with contextlib.suppress(OSError):
        project_dir.rmdir()
    return deleted
