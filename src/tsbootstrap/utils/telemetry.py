"""Bootstrap run events appended to a local JSON-lines log."""

from __future__ import annotations

import json
import os
import time
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

import jsonschema

from tsbootstrap.settings import RuntimeSettings

LOG_FILENAME = "telemetry.jsonl"
LEVELS = ("info", "warn", "error")
OPT_OUT_VARIABLE = "TSBOOTSTRAP_TELEMETRY"
_OPT_OUT_VALUES = frozenset({"0", "false", "no", "off"})


def telemetry_enabled(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get(OPT_OUT_VARIABLE, "1").strip().lower() not in _OPT_OUT_VALUES


def telemetry_log_path(settings: RuntimeSettings) -> Path:
    return settings.log_dir / LOG_FILENAME


def build_event(
    event: str,
    *,
    payload: dict[str, Any] | None = None,
    level: str = "info",
    status: str | None = None,
    component: str | None = None,
    duration_ms: float | None = None,
) -> dict[str, Any]:
    """Assemble one log record, rejecting values the log format cannot hold."""

    if not isinstance(event, str) or not event.strip():
        raise ValueError("Telemetry event name must be a non-empty string")
    if level not in LEVELS:
        raise ValueError(f"Telemetry level '{level}' is not one of {', '.join(LEVELS)}")
    record: dict[str, Any] = {"ts": time.time(), "event": event, "level": level, "payload": dict(payload or {})}
    if status:
        record["status"] = status
    if component:
        record["component"] = component
    if duration_ms is not None:
        if isinstance(duration_ms, bool) or not isinstance(duration_ms, (int, float)) or duration_ms < 0:
            raise ValueError("Telemetry duration must be a non-negative number of milliseconds")
        record["durationMs"] = float(duration_ms)
    return record


def record_structured_event(settings: RuntimeSettings, event: str, **fields: Any) -> None:
    """Validate an event against the packaged schema and append it to the log.

    Does nothing when telemetry is switched off through ``TSBOOTSTRAP_TELEMETRY``.
    """

    if not telemetry_enabled():
        return
    record = build_event(event, **fields)
    _schema_validator().validate(record)
    log_path = telemetry_log_path(settings)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, ensure_ascii=False) + "\n")


@lru_cache(maxsize=1)
def _schema_validator() -> jsonschema.Draft202012Validator:
    schema_text = (resources.files("tsbootstrap.resources") / "telemetry.schema.json").read_text(encoding="utf-8")
    return jsonschema.Draft202012Validator(json.loads(schema_text))
