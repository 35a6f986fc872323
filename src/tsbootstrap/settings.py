"""Runtime settings for the tsbootstrap CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from tsbootstrap import __version__

REGISTRY_BACKENDS = ("npm", "http")
DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"
CONFIG_FILENAME = "config.yaml"


class SettingsError(RuntimeError):
    """Raised when configuration values cannot be used."""


@dataclass(frozen=True)
class RuntimeSettings:
    home_dir: Path
    log_dir: Path
    registry_backend: str = "npm"
    registry_url: str = DEFAULT_REGISTRY_URL
    npm_executable: str = "npm"
    git_executable: str = "git"
    request_timeout: float = 30.0
    template_dir: Path | None = None
    cli_version: str = __version__

    def __post_init__(self) -> None:
        if self.registry_backend not in REGISTRY_BACKENDS:
            raise SettingsError(
                f"Unknown registry backend '{self.registry_backend}'. "
                f"Expected one of: {', '.join(REGISTRY_BACKENDS)}"
            )
        if self.request_timeout <= 0:
            raise SettingsError("request_timeout must be a positive number")

    def with_overrides(self, **overrides: Any) -> "RuntimeSettings":
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


def _default_home_dir(environ: Mapping[str, str]) -> Path:
    override = environ.get("TSBOOTSTRAP_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".tsbootstrap"


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid configuration file {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise SettingsError(f"Configuration file {path} must contain a mapping")
    return payload


def _file_values(payload: Mapping[str, Any]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    registry = payload.get("registry") or {}
    if not isinstance(registry, dict):
        raise SettingsError("'registry' section must be a mapping")
    if "backend" in registry:
        values["registry_backend"] = str(registry["backend"]).strip().lower()
    if "url" in registry:
        values["registry_url"] = str(registry["url"]).rstrip("/")
    if "timeout" in registry:
        try:
            values["request_timeout"] = float(registry["timeout"])
        except (TypeError, ValueError) as exc:
            raise SettingsError("registry.timeout must be a number") from exc
    tools = payload.get("tools") or {}
    if not isinstance(tools, dict):
        raise SettingsError("'tools' section must be a mapping")
    if "npm" in tools:
        values["npm_executable"] = str(tools["npm"])
    if "git" in tools:
        values["git_executable"] = str(tools["git"])
    if payload.get("template_dir"):
        values["template_dir"] = Path(str(payload["template_dir"])).expanduser()
    return values


def _env_values(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    if backend := environ.get("TSBOOTSTRAP_REGISTRY"):
        values["registry_backend"] = backend.strip().lower()
    if url := environ.get("TSBOOTSTRAP_REGISTRY_URL"):
        values["registry_url"] = url.strip().rstrip("/")
    if npm := environ.get("TSBOOTSTRAP_NPM"):
        values["npm_executable"] = npm.strip()
    if git := environ.get("TSBOOTSTRAP_GIT"):
        values["git_executable"] = git.strip()
    if template_dir := environ.get("TSBOOTSTRAP_TEMPLATE_DIR"):
        values["template_dir"] = Path(template_dir).expanduser()
    return values


def load_settings(environ: Mapping[str, str] | None = None) -> RuntimeSettings:
    env = os.environ if environ is None else environ
    base = _default_home_dir(env)
    values: dict[str, Any] = {}
    values.update(_file_values(_read_config_file(base / CONFIG_FILENAME)))
    values.update(_env_values(env))
    return RuntimeSettings(home_dir=base, log_dir=base / "logs", **values)

