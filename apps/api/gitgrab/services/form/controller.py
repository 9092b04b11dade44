from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Dict, List, Optional, Set
from uuid import uuid4

from loguru import logger
from pydantic import ValidationError

from gitgrab.core.config import settings
from gitgrab.schemas.form import (
    REPO_URL_MESSAGE,
    RepoFormValues,
    ValidateRepoUrlInput,
    ValidationResult,
)
from gitgrab.schemas.status import FormState, Status
from gitgrab.services.form.presenter import is_loading, present_button, present_status

Validator = Callable[[ValidateRepoUrlInput], Awaitable[ValidationResult]]
Sleep = Callable[[float], Awaitable[None]]

SUCCESS_MESSAGE = "Repository clone initiated!"
INVALID_REPO_MESSAGE = "This does not appear to be a valid, public repository."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during validation."

# idle -> validating -> (cloning -> success) | error; success/error may start a new round
_TRANSITIONS: Dict[Status, Set[Status]] = {
    Status.IDLE: {Status.VALIDATING},
    Status.VALIDATING: {Status.CLONING, Status.ERROR},
    Status.CLONING: {Status.SUCCESS},
    Status.SUCCESS: {Status.VALIDATING},
    Status.ERROR: {Status.VALIDATING},
}


class FormFieldError(Exception):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class SubmissionInProgressError(Exception):
    pass


class InvalidTransitionError(Exception):
    pass


class RepoFormController:
    """
    State of one page view's repository form.

    A round checks the URL locally, asks the validator, and on a positive verdict
    moves to cloning, waits out the simulated clone delay and ends in success.
    A validator failure or a negative verdict ends the round in error.
    """

    def __init__(
        self,
        validator: Validator,
        clone_delay: Optional[float] = None,
        sleep: Sleep = asyncio.sleep,
        form_id: Optional[str] = None,
    ) -> None:
        self.form_id = form_id or uuid4().hex
        self.validator = validator
        self.clone_delay = settings.CLONE_SIMULATION_SECONDS if clone_delay is None else clone_delay
        self._sleep = sleep

        self.status = Status.IDLE
        self.message = ""
        self.field_error: Optional[str] = None
        self.repo_url: Optional[str] = None
        self.history: List[Status] = [Status.IDLE]
        self._task: Optional[asyncio.Task] = None

    @property
    def is_loading(self) -> bool:
        return is_loading(self.status)

    def _set_status(self, status: Status, message: Optional[str] = None) -> None:
        if status not in _TRANSITIONS[self.status]:
            raise InvalidTransitionError(f"{self.status.value} -> {status.value}")
        logger.debug("form {} {} -> {}", self.form_id, self.status.value, status.value)
        self.status = status
        if message is not None:
            self.message = message
        self.history.append(status)

    def check_field(self, raw_url: str) -> RepoFormValues:
        try:
            values = RepoFormValues(repo_url=raw_url)
        except ValidationError:
            self.field_error = REPO_URL_MESSAGE
            raise FormFieldError("repo_url", REPO_URL_MESSAGE)
        self.field_error = None
        return values

    def begin(self, raw_url: str) -> RepoFormValues:
        """Accept a submission: local checks, then validating."""
        if self.is_loading:
            raise SubmissionInProgressError(f"Form {self.form_id} is already {self.status.value}")

        # raises FormFieldError before the validator is ever reached
        values = self.check_field(raw_url)
        self.repo_url = raw_url
        self._set_status(Status.VALIDATING, message="")
        return values

    async def submit(self, raw_url: str) -> None:
        """Run a whole round, including the simulated clone delay."""
        self.begin(raw_url)
        await self._run(raw_url)

    def submit_nowait(self, raw_url: str) -> asyncio.Task:
        """Like submit(), but the round after validating runs as a task on the current loop."""
        self.begin(raw_url)
        self._task = asyncio.create_task(self._run(raw_url))
        return self._task

    async def _run(self, raw_url: str) -> None:
        logger.info("Validating {} (form {})", raw_url, self.form_id)
        try:
            result = await self.validator(ValidateRepoUrlInput(repo_url=raw_url))
        except Exception:
            logger.exception("Validation failed for {}", raw_url)
            self._set_status(Status.ERROR, message=UNEXPECTED_ERROR_MESSAGE)
            return

        if not result.is_valid:
            logger.info("Rejected {}: {}", raw_url, result.reason)
            self._set_status(Status.ERROR, message=result.reason or INVALID_REPO_MESSAGE)
            return

        self._set_status(Status.CLONING)
        await self._sleep(self.clone_delay)
        self._set_status(Status.SUCCESS, message=SUCCESS_MESSAGE)
        logger.info("Clone initiated for {} (form {})", raw_url, self.form_id)

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def snapshot(self) -> FormState:
        return FormState(
            form_id=self.form_id,
            status=self.status,
            message=self.message,
            field_error=self.field_error,
            is_loading=self.is_loading,
            history=list(self.history),
            view=present_status(self.status, self.message),
            button=present_button(self.status),
        )
