import time
from typing import Optional

from fastapi import APIRouter
from loguru import logger

from gitgrab.core.config import settings
from gitgrab.services.validation.github_client import GitHubClient
from gitgrab.services.validation.validator import resolve_provider

# (checked_at, ok); unauthenticated /zen calls share the validator's rate limit
_github_cache: Optional[tuple] = None


async def github_ok() -> bool:
    try:
        return await GitHubClient().ping()
    except Exception as e:
        logger.warning("github_ok failed: {!r}", e)
        return False


async def cached_github_ok() -> bool:
    global _github_cache
    now = time.monotonic()
    if _github_cache is not None and now - _github_cache[0] < settings.HEALTH_GITHUB_CACHE_SECONDS:
        return _github_cache[1]
    ok = await github_ok()
    _github_cache = (now, ok)
    return ok


def reset_github_cache() -> None:
    global _github_cache
    _github_cache = None

router = APIRouter(tags=["health"])

@router.get("/health")
async def health():
    provider = resolve_provider()
    return {
        "status": "ok",
        "validator": provider,
        # only providers that may call the GitHub API spend a request on it
        "github": await cached_github_ok() if provider in ("github", "auto") else None,
    }
