"""Render the JSON configuration templates into a project directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tsbootstrap.app.version_resolver import ResolvedVersions
from tsbootstrap.domain.project import ProjectTarget
from tsbootstrap.domain.template import (
    APP_NAME_TOKEN,
    NODE_TYPES_VERSION_TOKEN,
    PACKAGE_TEMPLATE,
    TSCONFIG_TEMPLATE,
    TYPESCRIPT_VERSION_TOKEN,
)
from tsbootstrap.ports.template_repo import TemplateRepository


@dataclass
class ConfigMaterializer:
    template_repo: TemplateRepository

    def materialize(self, target: ProjectTarget, versions: ResolvedVersions) -> list[Path]:
        # both templates are read before anything is written
        tsconfig = self.template_repo.load(TSCONFIG_TEMPLATE)
        package = self.template_repo.load(PACKAGE_TEMPLATE)
        values = {
            APP_NAME_TOKEN: target.project_name,
            NODE_TYPES_VERSION_TOKEN: versions.node_types,
            TYPESCRIPT_VERSION_TOKEN: versions.typescript,
        }
        outputs = [
            (target.tsconfig_path, tsconfig.render_for(values)),
            (target.package_path, package.render_for(values)),
        ]
        for path, content in outputs:
            path.write_text(content, encoding="utf-8")
        return [path for path, _ in outputs]
