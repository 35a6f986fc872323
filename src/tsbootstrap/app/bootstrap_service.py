"""Application service sequencing the project bootstrap."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from tsbootstrap.app.config_materializer import ConfigMaterializer
from tsbootstrap.app.repository_initializer import RepositoryInitializer
from tsbootstrap.app.version_resolver import ResolvedVersions, resolve_versions
from tsbootstrap.domain.project import BootstrapEnvironment, ProjectTarget
from tsbootstrap.ports.registry import PackageRegistry
from tsbootstrap.ports.template_repo import TemplateRepository
from tsbootstrap.settings import RuntimeSettings


@dataclass
class BootstrapReport:
    target: ProjectTarget
    versions: ResolvedVersions
    written: list[Path] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.target.root),
            "project_name": self.target.project_name,
            "versions": dict(self.versions.versions),
            "written": [str(path) for path in self.written],
        }


class BootstrapService:
    def __init__(
        self,
        template_repo: TemplateRepository,
        registry: PackageRegistry,
        settings: RuntimeSettings,
        *,
        repository_initializer: RepositoryInitializer | None = None,
    ) -> None:
        self._materializer = ConfigMaterializer(template_repo)
        self._registry = registry
        self._settings = settings
        self._repository = repository_initializer or RepositoryInitializer(settings.git_executable)

    def target_for(self, name: str | None, environment: BootstrapEnvironment) -> ProjectTarget:
        return ProjectTarget.from_argument(name, environment)

    async def bootstrap(self, target: ProjectTarget) -> BootstrapReport:
        target.ensure_exists()
        versions = await resolve_versions(self._registry)
        written = self._materializer.materialize(target, versions)
        await self._repository.initialize(target)
        written.append(target.gitignore_path)
        target.ensure_entry_point()
        written.append(target.entry_point_path)
        return BootstrapReport(target=target, versions=versions, written=written)

    def run(self, target: ProjectTarget) -> BootstrapReport:
        return asyncio.run(self.bootstrap(target))
