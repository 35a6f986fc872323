from __future__ import annotations

import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Mapping

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
SANDBOX_HOME = Path(os.environ.get("PYTEST_DEBUG_TEMPROOT", "/tmp/tsbootstrap-pytest")).resolve() / "home"
os.environ["TSBOOTSTRAP_HOME"] = str(SANDBOX_HOME)
for _var in ("TSBOOTSTRAP_TELEMETRY", "TSBOOTSTRAP_REGISTRY", "TSBOOTSTRAP_REGISTRY_URL", "TSBOOTSTRAP_NPM", "TSBOOTSTRAP_GIT", "TSBOOTSTRAP_TEMPLATE_DIR"):
    os.environ.pop(_var, None)
SANDBOX_HOME.mkdir(parents=True, exist_ok=True)
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tsbootstrap.app.repository_initializer import RepositoryInitializer, RepositoryInitError  # noqa: E402
from tsbootstrap.domain.project import ProjectTarget  # noqa: E402
from tsbootstrap.ports.registry import PackageRegistry, RegistryError  # noqa: E402
from tsbootstrap.settings import RuntimeSettings  # noqa: E402
from tsbootstrap.utils.telemetry import telemetry_log_path  # noqa: E402

DEFAULT_VERSIONS = {"typescript": "5.4.5", "@types/node": "20.12.7"}


class FakeRegistry(PackageRegistry):
    def __init__(
        self,
        versions: Mapping[str, str] | None = None,
        *,
        failures: Mapping[str, str] | None = None,
        delays: Mapping[str, float] | None = None,
    ) -> None:
        self.versions = dict(DEFAULT_VERSIONS if versions is None else versions)
        self.failures = dict(failures or {})
        self.delays = dict(delays or {})
        self.started: list[str] = []
        self.finished: list[str] = []
        self.events: list[tuple[str, str]] = []

    async def latest_version(self, package: str) -> str:
        self.started.append(package)
        self.events.append(("start", package))
        await asyncio.sleep(self.delays.get(package, 0))
        self.finished.append(package)
        self.events.append(("end", package))
        if package in self.failures:
            raise RegistryError(self.failures[package])
        return self.versions[package]


class FakeRepositoryInitializer(RepositoryInitializer):
    """Creates the ``.git`` directory instead of running git."""

    def __init__(self, *, fail_with: str | None = None) -> None:
        super().__init__(git_executable="git")
        self.fail_with = fail_with
        self.initialised: list[Path] = []

    async def _git_init(self, target: ProjectTarget) -> None:
        if self.fail_with is not None:
            raise RepositoryInitError(self.fail_with)
        (target.root / ".git").mkdir(exist_ok=True)
        self.initialised.append(target.root)


@pytest.fixture()
def runtime_settings(tmp_path: Path) -> RuntimeSettings:
    home = tmp_path / "runtime" / "home"
    home.mkdir(parents=True, exist_ok=True)
    return RuntimeSettings(home_dir=home, log_dir=home / "logs")


@pytest.fixture()
def make_registry() -> Callable[..., FakeRegistry]:
    return FakeRegistry


@pytest.fixture()
def fake_git() -> FakeRepositoryInitializer:
    return FakeRepositoryInitializer()


@pytest.fixture()
def make_git() -> Callable[..., FakeRepositoryInitializer]:
    return FakeRepositoryInitializer


def _read_events(settings: RuntimeSettings) -> list[dict[str, Any]]:
    log_path = telemetry_log_path(settings)
    if not log_path.exists():
        return []
    return [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines() if line.strip()]


@pytest.fixture()
def read_events() -> Callable[[RuntimeSettings], list[dict[str, Any]]]:
    return _read_events
