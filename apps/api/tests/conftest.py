"""Shared fixtures: a recording fake validator, a fresh form store and an in-process API client."""
from __future__ import annotations

from typing import List, Optional

import httpx
import pytest
import pytest_asyncio

from gitgrab.core.config import settings
from gitgrab.main import create_app
from gitgrab.schemas.form import ValidateRepoUrlInput, ValidationResult
from gitgrab.services.form.store import FormSessionStore, get_store
from gitgrab.services.validation.validator import get_validator


async def _no_sleep(_seconds: float) -> None:
    return None


class FakeValidator:
    """Stands in for the external validator and records every call."""

    def __init__(self, result: Optional[ValidationResult] = None, error: Optional[Exception] = None):
        self.result = result or ValidationResult(is_valid=True)
        self.error = error
        self.calls: List[str] = []

    async def __call__(self, payload: ValidateRepoUrlInput) -> ValidationResult:
        self.calls.append(payload.repo_url)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def no_sleep():
    return _no_sleep


@pytest.fixture
def validator() -> FakeValidator:
    return FakeValidator()


@pytest.fixture
def store(monkeypatch) -> FormSessionStore:
    monkeypatch.setattr(settings, "CLONE_SIMULATION_SECONDS", 0.0)
    return FormSessionStore(max_sessions=10)


@pytest.fixture
def app(store: FormSessionStore, validator: FakeValidator):
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_validator] = lambda: validator
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
