"""Domain model for the project skeleton being bootstrapped."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

PROJECT_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
DEFAULT_PROJECT_NAME = "myapp"
CURRENT_DIRECTORY = "."

TSCONFIG_FILE = "tsconfig.json"
PACKAGE_FILE = "package.json"
GITIGNORE_FILE = ".gitignore"
SOURCE_DIR = "src"
ENTRY_POINT_FILE = "index.ts"

INVALID_NAME_MESSAGE = (
    "Invalid directory name. Directory names can only contain letters, numbers, "
    "underscores, and hyphens."
)


class BootstrapError(RuntimeError):
    """Base class for failures reported by the bootstrap workflow."""


class InvalidProjectNameError(BootstrapError):
    """Raised when the requested directory name is not allowed."""

    def __init__(self, name: str) -> None:
        super().__init__(INVALID_NAME_MESSAGE)
        self.name = name


def is_valid_project_name(name: str) -> bool:
    return PROJECT_NAME_PATTERN.fullmatch(name) is not None


@dataclass(frozen=True)
class BootstrapEnvironment:
    """Process state the bootstrap depends on, passed in explicitly."""

    cwd: Path


@dataclass(frozen=True)
class ProjectTarget:
    """Directory the skeleton is written into (its absolute path)."""

    root: Path

    @classmethod
    def from_argument(cls, name: str | None, environment: BootstrapEnvironment) -> "ProjectTarget":
        """Resolve the CLI ``name`` argument against the working directory.

        ``None`` and ``"."`` select the working directory itself; any other value
        must be a plain directory name and is created under the working directory.
        """

        if not name or name == CURRENT_DIRECTORY:
            return cls(root=environment.cwd.absolute())
        if not is_valid_project_name(name):
            raise InvalidProjectNameError(name)
        return cls(root=(environment.cwd / name).absolute())

    @property
    def project_name(self) -> str:
        return self.root.name or DEFAULT_PROJECT_NAME

    @property
    def tsconfig_path(self) -> Path:
        return self.root / TSCONFIG_FILE

    @property
    def package_path(self) -> Path:
        return self.root / PACKAGE_FILE

    @property
    def gitignore_path(self) -> Path:
        return self.root / GITIGNORE_FILE

    @property
    def source_dir(self) -> Path:
        return self.root / SOURCE_DIR

    @property
    def entry_point_path(self) -> Path:
        return self.source_dir / ENTRY_POINT_FILE

    def ensure_exists(self) -> None:
        if not self.root.exists():
            self.root.mkdir()

    def ensure_entry_point(self) -> None:
        if not self.source_dir.exists():
            self.source_dir.mkdir()
        if not self.entry_point_path.exists():
            self.entry_point_path.write_text("", encoding="utf-8")
