"""Composer - parse ``.0n`` files and compose them into a SWITCH file."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

DEFAULT_AUTHOR = "app.0nmcp.com"

# Checked in order; the first match wins.
TYPE_SIGNATURES: list[tuple[str, Callable[[dict[str, Any]], bool]]] = [
    ("connection", lambda d: bool(d.get("service")) and bool(d.get("auth"))),
    ("workflow", lambda d: bool(d.get("steps")) or bool(d.get("pipeline"))),
    ("run", lambda d: bool(d.get("commands")) or (bool(d.get("steps")) and bool(d.get("trigger")))),
    ("switch", lambda d: bool(d.get("connections")) or bool(d.get("network")) or bool(d.get("includes"))),
    ("config", lambda d: bool(d.get("settings")) or bool(d.get("preferences"))),
]


@dataclass
class ParsedFile:
    filename: str
    name: str
    type: str
    version: str
    services: list[str]
    data: dict[str, Any]
    description: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


class ComposerError(ValueError):
    """A .0n file could not be parsed."""


def detect_file_type(data: dict[str, Any]) -> str:
    for file_type, test in TYPE_SIGNATURES:
        if test(data):
            return file_type
    return "unknown"


def extract_services(data: dict[str, Any]) -> list[str]:
    """Collect service names referenced anywhere in a .0n document, in first-seen order."""
    services: dict[str, None] = {}

    if isinstance(data.get("service"), str):
        services[data["service"]] = None

    connections = data.get("connections")
    if isinstance(connections, list):
        for conn in connections:
            if isinstance(conn, str):
                services[conn] = None
            elif isinstance(conn, dict) and isinstance(conn.get("service"), str):
                services[conn["service"]] = None

    steps = data.get("steps")
    if isinstance(steps, list):
        for step in steps:
            if isinstance(step, dict) and isinstance(step.get("service"), str):
                services[step["service"]] = None

    network = data.get("network")
    if isinstance(network, dict):
        for key in network:
            services[key] = None

    return list(services)


def parse_on_file(filename: str, raw: str) -> ParsedFile:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ComposerError(f"{filename}: invalid JSON ({e.msg})") from e
    if not isinstance(data, dict):
        raise ComposerError(f"{filename}: expected a JSON object")

    meta = data.get("$0n") if isinstance(data.get("$0n"), dict) else {}
    default_name = filename[:-3] if filename.endswith(".0n") else filename
    return ParsedFile(
        filename=filename,
        name=meta.get("name") or data.get("name") or default_name,
        type=detect_file_type(data),
        version=meta.get("version") or data.get("version") or "1.0.0",
        services=extract_services(data),
        data=data,
        description=meta.get("description") or data.get("description") or "",
    )


def _service_of(f: ParsedFile) -> str:
    service = f.data.get("service")
    return service if service else f.name


def generate_switch_file(
    name: str, files: list[ParsedFile], author: str | None = None,
) -> dict[str, Any]:
    """Compose parsed files into one master SWITCH document."""
    by_type: dict[str, list[ParsedFile]] = {}
    for f in files:
        by_type.setdefault(f.type, []).append(f)
    connections = by_type.get("connection", [])
    workflows = by_type.get("workflow", [])
    runs = by_type.get("run", [])
    configs = by_type.get("config", [])
    switches = by_type.get("switch", [])

    all_services = list(dict.fromkeys(s for f in files for s in f.services))

    doc: dict[str, Any] = {
        "$0n": {
            "type": "switch",
            "name": name,
            "version": "1.0.0",
            "description": (
                f"Master SWITCH composing {len(files)} files across {len(all_services)} services"
            ),
            "author": author or DEFAULT_AUTHOR,
            "created": datetime.now(timezone.utc).isoformat(),
        },
        "connections": [_service_of(f) for f in connections],
        "services": all_services,
        "includes": [{"filename": f.filename, "type": f.type, "name": f.name} for f in files],
    }
    if workflows:
        doc["workflows"] = {f.name: f.data for f in workflows}
    if runs:
        doc["runs"] = {f.name: f.data for f in runs}
    if configs:
        doc["configs"] = {f.name: f.data for f in configs}
    if switches:
        doc["nested_switches"] = [{"name": f.name, "filename": f.filename} for f in switches]

    pipeline: list[dict[str, Any]] = [
        {"phase": "connect", "services": [_service_of(f) for f in connections]},
    ]
    if workflows:
        pipeline.append({"phase": "execute", "workflows": [f.name for f in workflows]})
    doc["pipeline"] = pipeline
    return doc
