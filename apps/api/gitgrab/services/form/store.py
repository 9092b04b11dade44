from __future__ import annotations

from collections import OrderedDict
from typing import Optional

from loguru import logger

from gitgrab.core.config import settings
from gitgrab.services.form.controller import RepoFormController, Validator


class FormNotFoundError(KeyError):
    pass


class FormSessionStore:
    """In-memory form sessions, one per page view; least recently used idle form evicted when full."""

    def __init__(self, max_sessions: Optional[int] = None) -> None:
        self.max_sessions = max_sessions or settings.MAX_FORM_SESSIONS
        self._forms: "OrderedDict[str, RepoFormController]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._forms)

    def _evict_one(self) -> None:
        # least recently used form that is not mid-round, else the least recently used one
        victim = next((fid for fid, f in self._forms.items() if not f.is_loading), None)
        if victim is None:
            victim = next(iter(self._forms))
        old = self._forms.pop(victim)
        old.cancel()
        logger.debug("Evicted form {} ({})", victim, old.status.value)

    def create(self, validator: Validator) -> RepoFormController:
        while len(self._forms) >= self.max_sessions:
            self._evict_one()

        form = RepoFormController(validator=validator)
        self._forms[form.form_id] = form
        return form

    def get(self, form_id: str) -> RepoFormController:
        form = self._forms.get(form_id)
        if form is None:
            raise FormNotFoundError(form_id)
        self._forms.move_to_end(form_id)
        return form

    def discard(self, form_id: str) -> None:
        form = self._forms.pop(form_id, None)
        if form is not None:
            form.cancel()

    def clear(self) -> None:
        for form in self._forms.values():
            form.cancel()
        self._forms.clear()


store = FormSessionStore()

def get_store() -> FormSessionStore:
    return store
