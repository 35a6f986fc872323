"""Registry lookups against the npm registry HTTP API."""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import quote

import requests

from tsbootstrap.ports.registry import PackageRegistry, RegistryError

ABBREVIATED_METADATA = "application/vnd.npm.install-v1+json"


class HttpRegistry(PackageRegistry):
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def package_url(self, package: str) -> str:
        # scoped names keep their "@" but the "/" must be escaped
        return f"{self._base_url}/{quote(package, safe='@')}"

    async def latest_version(self, package: str) -> str:
        return await asyncio.to_thread(self._fetch_latest, package)

    def _fetch_latest(self, package: str) -> str:
        try:
            response = self._session.get(
                self.package_url(package),
                headers={"Accept": ABBREVIATED_METADATA},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise RegistryError(f"registry request failed: {exc}") from exc
        if response.status_code != 200:
            raise RegistryError(f"registry returned HTTP {response.status_code}")
        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise RegistryError(f"malformed registry response: {exc}") from exc
        dist_tags = payload.get("dist-tags") if isinstance(payload, dict) else None
        latest = dist_tags.get("latest") if isinstance(dist_tags, dict) else None
        if not isinstance(latest, str) or not latest.strip():
            raise RegistryError("malformed registry response: no 'latest' dist-tag")
        return latest
