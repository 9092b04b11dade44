from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

from loguru import logger

from gitgrab.core.config import settings
from gitgrab.schemas.form import ValidateRepoUrlInput, ValidationResult
from gitgrab.services.llm.gemini_chat import GeminiChatLLM
from gitgrab.services.llm.ollama_llm import OllamaLLM
from gitgrab.services.validation.github_client import GitHubClient, GitHubNotFoundError
from gitgrab.utils.repo_url import (
    canonicalize_repo_url,
    is_github_url,
    parse_github_owner_repo,
    repo_path_segments,
)

PROVIDERS = ("auto", "github", "gemini", "ollama")

NOT_GITHUB_REASON = "Only GitHub repository URLs are supported."
MISSING_PATH_REASON = "The URL must point to a repository (https://github.com/<owner>/<repo>)."
NOT_REPO_ROOT_REASON = "The URL must point to the repository itself, not a page inside it."
NOT_FOUND_REASON = "Repository not found or not public."
PRIVATE_REASON = "This repository is private."


def build_prompt(repo_url: str) -> str:
    return f"""You are a validator for a repository cloning tool.

Decide whether the URL below points to a usable, public GitHub repository
(https://github.com/<owner>/<repo>). Reject URLs for other hosts, user or
organization pages, gists, issues, pull requests, or anything that is not a
repository root. A trailing ".git" or "/" is fine.

Return only a JSON object, without markdown or code fences:
{{"isValid": true or false, "reason": "short explanation when invalid"}}

URL: {repo_url}
"""


def parse_verdict(raw: str) -> ValidationResult:
    """Parse the model's JSON verdict; raises ValueError on anything else."""
    text = raw.strip().strip("`").strip()
    if text.lower().startswith("json"):
        text = text[4:].strip()

    try:
        data: Dict[str, Any] = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Validator returned non-JSON output: {raw[:200]!r}") from e

    if not isinstance(data, dict) or not isinstance(data.get("isValid"), bool):
        raise ValueError(f"Validator output is missing a boolean isValid: {raw[:200]!r}")

    reason = data.get("reason")
    if data["isValid"] or not isinstance(reason, str):
        reason = None
    return ValidationResult(is_valid=data["isValid"], reason=reason or None)


async def check_with_github(repo_url: str, client: Optional[GitHubClient] = None) -> ValidationResult:
    canonical = canonicalize_repo_url(repo_url)
    if not is_github_url(canonical):
        return ValidationResult(is_valid=False, reason=NOT_GITHUB_REASON)

    try:
        owner, repo = parse_github_owner_repo(canonical)
    except ValueError:
        return ValidationResult(is_valid=False, reason=MISSING_PATH_REASON)

    # issues, pull requests, tree/blob pages and the like
    if len(repo_path_segments(repo_url)) > 2:
        return ValidationResult(is_valid=False, reason=NOT_REPO_ROOT_REASON)

    gh = client or GitHubClient()
    try:
        info = await gh.get_repo(owner, repo)
    except GitHubNotFoundError:
        return ValidationResult(is_valid=False, reason=NOT_FOUND_REASON)

    if info.get("private"):
        return ValidationResult(is_valid=False, reason=PRIVATE_REASON)
    return ValidationResult(is_valid=True)


async def _generate(llm, repo_url: str) -> str:
    # raises TimeoutError; the worker thread is abandoned, not interrupted
    return await asyncio.wait_for(
        asyncio.to_thread(llm.generate, build_prompt(repo_url)),
        timeout=settings.VALIDATION_TIMEOUT_SECONDS,
    )


async def _ask_gemini(repo_url: str) -> ValidationResult:
    return parse_verdict(await _generate(GeminiChatLLM(), repo_url))


async def _ask_ollama(repo_url: str) -> ValidationResult:
    return parse_verdict(await _generate(OllamaLLM(), repo_url))


def resolve_provider() -> str:
    provider = (settings.VALIDATOR_PROVIDER or "auto").lower()
    if provider not in PROVIDERS:
        logger.warning("Unknown VALIDATOR_PROVIDER={!r}, using auto", provider)
        provider = "auto"
    return provider


async def validate_repo_url(payload: ValidateRepoUrlInput) -> ValidationResult:
    repo_url = payload.repo_url
    provider = resolve_provider()

    if provider == "github":
        return await check_with_github(repo_url)
    if provider == "ollama":
        return await _ask_ollama(repo_url)
    if provider == "gemini":
        return await _ask_gemini(repo_url)

    # auto: gemini when configured, the GitHub API otherwise or when gemini fails
    if settings.GEMINI_API_KEY:
        try:
            return await _ask_gemini(repo_url)
        except Exception as e:
            logger.warning("Gemini validation failed ({}), falling back to GitHub API", e)
    return await check_with_github(repo_url)


def get_validator():
    return validate_repo_url
