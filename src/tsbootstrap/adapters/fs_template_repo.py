"""Template repositories backed by a directory or by package data."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

from tsbootstrap.domain.template import TemplateDescriptor
from tsbootstrap.ports.template_repo import TemplateNotFoundError, TemplateRepository

PACKAGED_TEMPLATES = "tsbootstrap.resources"


class FSTemplateRepository(TemplateRepository):
    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir

    def load(self, name: str) -> TemplateDescriptor:
        path = self._base_dir / name
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise TemplateNotFoundError(f"Template {name} not found under {self._base_dir}") from exc
        return TemplateDescriptor(name=name, text=text, source=str(path))


class PackagedTemplateRepository(TemplateRepository):
    """Templates shipped inside the ``tsbootstrap.resources`` package."""

    def __init__(self, package: str = PACKAGED_TEMPLATES) -> None:
        self._root = resources.files(package) / "templates"

    def load(self, name: str) -> TemplateDescriptor:
        entry = self._root / name
        if not entry.is_file():
            raise TemplateNotFoundError(f"Packaged template {name} is missing")
        return TemplateDescriptor(name=name, text=entry.read_text("utf-8"), source=f"{PACKAGED_TEMPLATES}/templates/{name}")


def build_template_repository(template_dir: Path | None) -> TemplateRepository:
    if template_dir is not None:
        return FSTemplateRepository(template_dir)
    return PackagedTemplateRepository()
