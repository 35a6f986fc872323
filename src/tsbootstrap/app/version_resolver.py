"""Resolve the latest published versions of the packages a skeleton depends on."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Iterable, Mapping

from tsbootstrap.domain.project import BootstrapError
from tsbootstrap.ports.registry import PackageRegistry

TYPESCRIPT_PACKAGE = "typescript"
NODE_TYPES_PACKAGE = "@types/node"


class VersionResolutionError(BootstrapError):
    """Raised when the registry cannot report a version for a package."""

    def __init__(self, package: str, cause: str) -> None:
        super().__init__(f"Error getting package version for {package}: {cause}")
        self.package = package
        self.cause = cause


@dataclass(frozen=True)
class ResolvedVersions:
    versions: Mapping[str, str]

    def __getitem__(self, package: str) -> str:
        return self.versions[package]

    @property
    def typescript(self) -> str:
        return self.versions[TYPESCRIPT_PACKAGE]

    @property
    def node_types(self) -> str:
        return self.versions[NODE_TYPES_PACKAGE]


async def resolve_version(registry: PackageRegistry, package: str) -> str:
    try:
        return await registry.latest_version(package)
    except Exception as exc:
        raise VersionResolutionError(package, str(exc)) from exc


async def resolve_versions(
    registry: PackageRegistry,
    packages: Iterable[str] = (TYPESCRIPT_PACKAGE, NODE_TYPES_PACKAGE),
) -> ResolvedVersions:
    """Look up every package concurrently and wait for all lookups to settle.

    If any lookup fails, the first failure (in ``packages`` order) is raised
    once all lookups have finished.
    """

    names = list(packages)
    results = await asyncio.gather(
        *(resolve_version(registry, name) for name in names),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return ResolvedVersions(versions=dict(zip(names, results)))
