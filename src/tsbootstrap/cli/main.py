#!/usr/bin/env python3
"""Entry point for the tsbootstrap CLI."""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from tsbootstrap import __version__
from tsbootstrap.adapters.fs_template_repo import build_template_repository
from tsbootstrap.adapters.registry import build_registry
from tsbootstrap.app.bootstrap_service import BootstrapReport, BootstrapService
from tsbootstrap.domain.project import BootstrapEnvironment, InvalidProjectNameError
from tsbootstrap.settings import REGISTRY_BACKENDS, RuntimeSettings, SettingsError, load_settings
from tsbootstrap.utils.telemetry import record_structured_event


def _current_environment() -> BootstrapEnvironment:
    return BootstrapEnvironment(cwd=Path(os.getcwd()))


def _settings_for(args: argparse.Namespace) -> RuntimeSettings:
    return load_settings().with_overrides(
        registry_backend=args.registry,
        registry_url=args.registry_url.rstrip("/") if args.registry_url else None,
    )


def _build_service(settings: RuntimeSettings) -> BootstrapService:
    template_repo = build_template_repository(settings.template_dir)
    registry = build_registry(settings)
    return BootstrapService(template_repo, registry, settings)


def _print_summary(report: BootstrapReport) -> None:
    print(f"Project initialised at {report.target.root}")
    for package, version in report.versions.versions.items():
        print(f"  {package} {version}")


def _record_bootstrap(settings: RuntimeSettings, started: float, **fields: Any) -> None:
    duration = (time.perf_counter() - started) * 1000
    try:
        record_structured_event(settings, "bootstrap", component="bootstrap", duration_ms=duration, **fields)
    except (OSError, ValueError, ValidationError) as exc:
        print(f"Warning: telemetry not recorded: {exc}", file=sys.stderr)


def _bootstrap_cmd(args: argparse.Namespace, environment: BootstrapEnvironment) -> int:
    try:
        settings = _settings_for(args)
    except SettingsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    service = _build_service(settings)
    try:
        target = service.target_for(args.name, environment)
    except InvalidProjectNameError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    start = time.perf_counter()
    try:
        report = service.run(target)
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        _record_bootstrap(
            settings,
            start,
            status="error",
            level="error",
            payload={"path": str(target.root), "error": str(exc), "error_type": type(exc).__name__},
        )
        return 1

    _record_bootstrap(
        settings,
        start,
        status="success",
        payload={
            "path": str(target.root),
            "registry": settings.registry_backend,
            "versions": dict(report.versions.versions),
        },
    )
    if args.json:
        print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_summary(report)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsbootstrap",
        description="Bootstrap node.js typescript project",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("name", nargs="?", help="directory name (default: current directory)")
    parser.add_argument(
        "--registry",
        choices=REGISTRY_BACKENDS,
        help=f"Registry backend used to look up versions (default: {RuntimeSettings.registry_backend}, or config.yaml)",
    )
    parser.add_argument("--registry-url", help="Registry base URL for the http backend")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON summary")
    return parser


def main(argv: list[str] | None = None, environment: BootstrapEnvironment | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return _bootstrap_cmd(args, environment or _current_environment())


if __name__ == "__main__":
    sys.exit(main())
