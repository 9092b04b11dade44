from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
import httpx

from gitgrab.core.config import settings


class GitHubAPIError(Exception):
    pass


class GitHubNotFoundError(GitHubAPIError):
    pass


@dataclass
class GitHubRateLimit:
    remaining: Optional[int]
    reset_epoch: Optional[int]


class GitHubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        base: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base = (base or settings.GITHUB_API_BASE).rstrip("/")
        self.token = token or settings.GITHUB_TOKEN
        self.timeout = timeout or settings.VALIDATION_TIMEOUT_SECONDS
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "gitgrab/0.1",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _rate_limit(self, resp: httpx.Response) -> GitHubRateLimit:
        def _to_int(v: Optional[str]) -> Optional[int]:
            try:
                return int(v) if v is not None else None
            except ValueError:
                return None

        remaining = _to_int(resp.headers.get("x-ratelimit-remaining"))
        reset = _to_int(resp.headers.get("x-ratelimit-reset"))
        return GitHubRateLimit(remaining=remaining, reset_epoch=reset)

    async def _get(self, path: str) -> Dict[str, Any]:
        url = f"{self.base}{path}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.get(url, headers=self._headers())

        if resp.status_code == 404:
            raise GitHubNotFoundError(f"GitHub resource not found: {path}")

        if resp.status_code in (403, 429):
            rl = self._rate_limit(resp)
            # remaining == 0 means wait for reset, not retry
            raise GitHubAPIError(
                f"GitHub rate limit or forbidden. status={resp.status_code} "
                f"remaining={rl.remaining} reset={rl.reset_epoch} body={resp.text[:200]}"
            )

        if resp.status_code >= 400:
            raise GitHubAPIError(f"GitHub API error status={resp.status_code} body={resp.text[:300]}")

        return resp.json()

    async def get_repo(self, owner: str, repo: str) -> Dict[str, Any]:
        return await self._get(f"/repos/{owner}/{repo}")

    async def ping(self) -> bool:
        async with httpx.AsyncClient(timeout=2, transport=self.transport) as client:
            r = await client.get(f"{self.base}/zen", headers=self._headers())
        return r.status_code == 200
