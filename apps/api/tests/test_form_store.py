import asyncio

import pytest

from gitgrab.core.config import settings
from gitgrab.schemas.form import ValidationResult
from gitgrab.schemas.status import Status
from gitgrab.services.form.store import FormNotFoundError, FormSessionStore


def test_create_and_get(validator):
    store = FormSessionStore(max_sessions=3)
    form = store.create(validator)
    assert store.get(form.form_id) is form
    assert len(store) == 1


def test_ids_are_unique(validator):
    store = FormSessionStore(max_sessions=3)
    assert store.create(validator).form_id != store.create(validator).form_id


def test_unknown_id_raises(validator):
    with pytest.raises(FormNotFoundError):
        FormSessionStore().get("missing")


def test_discard_is_idempotent(validator):
    store = FormSessionStore(max_sessions=3)
    form = store.create(validator)
    store.discard(form.form_id)
    store.discard(form.form_id)
    with pytest.raises(FormNotFoundError):
        store.get(form.form_id)


def test_oldest_form_evicted_when_full(validator):
    store = FormSessionStore(max_sessions=2)
    first = store.create(validator)
    second = store.create(validator)
    third = store.create(validator)

    assert len(store) == 2
    with pytest.raises(FormNotFoundError):
        store.get(first.form_id)
    assert store.get(second.form_id) is second
    assert store.get(third.form_id) is third


def test_default_capacity_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "MAX_FORM_SESSIONS", 7)
    assert FormSessionStore().max_sessions == 7


def _gated(gate: asyncio.Event):
    async def validator(payload):
        await gate.wait()
        return ValidationResult(is_valid=True)
    return validator


@pytest.mark.asyncio
async def test_form_mid_round_survives_eviction(monkeypatch):
    monkeypatch.setattr(settings, "CLONE_SIMULATION_SECONDS", 0.0)
    gate = asyncio.Event()
    store = FormSessionStore(max_sessions=2)

    busy = store.create(_gated(gate))
    busy.submit_nowait("https://github.com/octocat/Hello-World")
    store.get(busy.form_id)
    idle = store.create(_gated(gate))
    newer = store.create(_gated(gate))

    assert store.get(busy.form_id).status == Status.VALIDATING
    assert store.get(newer.form_id) is newer
    with pytest.raises(FormNotFoundError):
        store.get(idle.form_id)

    gate.set()
    await busy.wait()


def test_get_refreshes_recency(validator):
    store = FormSessionStore(max_sessions=2)
    first = store.create(validator)
    second = store.create(validator)

    store.get(first.form_id)
    store.create(validator)

    assert store.get(first.form_id) is first
    with pytest.raises(FormNotFoundError):
        store.get(second.form_id)


@pytest.mark.asyncio
async def test_all_loading_evicts_least_recently_used(monkeypatch):
    monkeypatch.setattr(settings, "CLONE_SIMULATION_SECONDS", 0.0)
    gate = asyncio.Event()
    store = FormSessionStore(max_sessions=2)

    first = store.create(_gated(gate))
    second = store.create(_gated(gate))
    first.submit_nowait("https://github.com/a/b")
    second.submit_nowait("https://github.com/a/c")
    store.create(_gated(gate))

    with pytest.raises(FormNotFoundError):
        store.get(first.form_id)
    assert store.get(second.form_id) is second

    gate.set()
    await second.wait()
