"""Shared output formatting for CLI commands."""

from __future__ import annotations

import json

from ksqlrest.client import Envelope, StatementResult


def envelope_to_dict(statement: str, envelope: Envelope) -> dict[str, object]:
    return {
        "statement": statement,
        "status": envelope.status,
        "status_text": envelope.status_text,
        "body": envelope.body,
    }


def result_to_dict(statement: str, result: StatementResult) -> dict[str, object]:
    data: dict[str, object] = {
        "statement": statement,
        "status": result.status,
        "status_text": result.status_text,
        "command_id": result.command_id,
        "command_status": result.command_status,
        "final_status": result.final_status,
        "attempts": result.attempts,
    }
    if result.command_message:
        data["command_message"] = result.command_message
    if result.warnings:
        data["warnings"] = result.warnings
    return data


def render_text(entry: dict[str, object]) -> str:
    """One statement outcome as a short human-readable block."""
    lines = [str(entry["statement"])]
    if "final_status" in entry:
        status = entry.get("final_status") or entry.get("command_status") or entry["status"]
        lines.append(f"  status: {status}")
        if entry.get("command_id"):
            lines.append(f"  command: {entry['command_id']}")
        if entry.get("command_message"):
            lines.append(f"  message: {entry['command_message']}")
        for w in entry.get("warnings", []):
            lines.append(f"  warning: {w}")
    else:
        lines.append(f"  {entry['status']} {entry['status_text']}")
        lines.append("  " + json.dumps(entry.get("body"), default=str))
    return "\n".join(lines)


def render_mapping(data: dict[str, object]) -> str:
    return "\n".join(f"{k} = {v}" for k, v in sorted(data.items()))
