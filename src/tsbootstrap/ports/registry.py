"""Port definitions for package registry lookups."""

from __future__ import annotations

from abc import ABC, abstractmethod

from tsbootstrap.domain.project import BootstrapError


class RegistryError(BootstrapError):
    """Raised by registry adapters when a lookup cannot produce a version."""


class PackageRegistry(ABC):
    @abstractmethod
    async def latest_version(self, package: str) -> str:
        """Return the latest published version of ``package``."""
