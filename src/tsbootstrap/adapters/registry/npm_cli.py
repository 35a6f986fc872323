"""Registry lookups through the ``npm view`` command."""

from __future__ import annotations

import asyncio
import json

from tsbootstrap.ports.registry import PackageRegistry, RegistryError


class NpmCliRegistry(PackageRegistry):
    def __init__(self, executable: str = "npm") -> None:
        self._executable = executable

    async def latest_version(self, package: str) -> str:
        try:
            proc = await asyncio.create_subprocess_exec(
                self._executable, "view", package, "version", "--json",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise RegistryError(f"cannot run {self._executable}: {exc}") from exc
        stdout, stderr = await proc.communicate()

        if proc.returncode != 0:
            error_msg = stderr.decode().strip() or stdout.decode().strip()
            raise RegistryError(error_msg or f"{self._executable} exited with status {proc.returncode}")
        return parse_version_payload(stdout.decode())


def parse_version_payload(raw: str) -> str:
    """Unwrap the JSON printed by ``npm view <pkg> version --json``."""

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise RegistryError(f"malformed registry response: {exc}") from exc
    # npm prints an array when a range matches several versions
    if isinstance(payload, list) and payload:
        payload = payload[-1]
    if not isinstance(payload, str) or not payload.strip():
        raise RegistryError(f"malformed registry response: {raw.strip()!r}")
    return payload
