"""Initialise version control for a freshly bootstrapped project."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from tsbootstrap.domain.project import BootstrapError, ProjectTarget

GITIGNORE_CONTENT = "node_modules\ndist"


class RepositoryInitError(BootstrapError):
    """Raised when ``git init`` fails or cannot be started."""


@dataclass
class RepositoryInitializer:
    git_executable: str = "git"

    async def initialize(self, target: ProjectTarget) -> None:
        await self._git_init(target)
        target.gitignore_path.write_text(GITIGNORE_CONTENT, encoding="utf-8")

    async def _git_init(self, target: ProjectTarget) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                self.git_executable, "init",
                cwd=str(target.root),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise RepositoryInitError(f"cannot run {self.git_executable}: {exc}") from exc
        stdout, stderr = await proc.communicate()

        if proc.returncode != 0:
            error_msg = stderr.decode().strip() or stdout.decode().strip()
            raise RepositoryInitError(
                f"{self.git_executable} init failed with status {proc.returncode}: {error_msg}"
            )
