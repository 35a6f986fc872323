"""Package registry adapters."""

from __future__ import annotations

from tsbootstrap.ports.registry import PackageRegistry
from tsbootstrap.settings import RuntimeSettings

from .http import HttpRegistry
from .npm_cli import NpmCliRegistry

__all__ = ["HttpRegistry", "NpmCliRegistry", "build_registry"]


def build_registry(settings: RuntimeSettings) -> PackageRegistry:
    if settings.registry_backend == "http":
        return HttpRegistry(settings.registry_url, timeout=settings.request_timeout)
    return NpmCliRegistry(settings.npm_executable)
