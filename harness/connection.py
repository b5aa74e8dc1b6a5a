"""
The connection handle every SDK call goes through.

A connection is a host, a header set and an ``httpx.AsyncClient``. Forks share
the client (and its pool) but carry their own headers, so two scenarios
never see each other's credentials.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import httpx

from harness.config import HarnessSettings

AUTHORIZATION = "Authorization"


@dataclass
class Connection:
    host: str
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float = 30.0
    client: Optional[httpx.AsyncClient] = None
    _owns_client: bool = field(default=False, repr=False)

    @classmethod
    def from_settings(cls, settings: HarnessSettings) -> "Connection":
        return cls(host=settings.host, headers=dict(settings.headers), timeout=settings.timeout)

    @property
    def http(self) -> httpx.AsyncClient:
        if self.client is None:
            self.client = httpx.AsyncClient(base_url=self.host, timeout=self.timeout)
            self._owns_client = True
        return self.client

    @property
    def authorization(self) -> Optional[str]:
        return self.headers.get(AUTHORIZATION)

    def authorize(self, access_token: str) -> None:
        self.headers[AUTHORIZATION] = f"Bearer {access_token}"

    def unauthorize(self) -> None:
        self.headers.pop(AUTHORIZATION, None)

    def fork(self) -> "Connection":
        """Same host and client, fresh headers without any credential."""
        headers = {k: v for k, v in self.headers.items() if k != AUTHORIZATION}
        return Connection(host=self.host, headers=headers, timeout=self.timeout, client=self.http)

    async def aclose(self) -> None:
        if self.client is not None and self._owns_client:
            await self.client.aclose()
            self.client = None
            self._owns_client = False

    async def __aenter__(self) -> "Connection":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
