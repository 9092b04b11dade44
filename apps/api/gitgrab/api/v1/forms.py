from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse

from gitgrab.schemas.form import SubmitRequest
from gitgrab.schemas.status import FieldErrorOut, FormState
from gitgrab.services.form.controller import (
    FormFieldError,
    RepoFormController,
    SubmissionInProgressError,
    Validator,
)
from gitgrab.services.form.store import FormNotFoundError, FormSessionStore, get_store
from gitgrab.services.validation.validator import get_validator

router = APIRouter(tags=["forms"])

def _get_form(form_id: str, store: FormSessionStore) -> RepoFormController:
    try:
        return store.get(form_id)
    except FormNotFoundError:
        raise HTTPException(status_code=404, detail="Form not found. Reload the page.")

@router.post("/forms", response_model=FormState, status_code=201)
async def create_form(
    store: FormSessionStore = Depends(get_store),
    validator: Validator = Depends(get_validator),
):
    form = store.create(validator)
    return form.snapshot()

@router.get("/forms/{form_id}", response_model=FormState)
async def get_form(form_id: str, store: FormSessionStore = Depends(get_store)):
    return _get_form(form_id, store).snapshot()

@router.post(
    "/forms/{form_id}/submit",
    response_model=FormState,
    responses={422: {"model": FieldErrorOut}},
)
async def submit_form(form_id: str, payload: SubmitRequest, store: FormSessionStore = Depends(get_store)):
    form = _get_form(form_id, store)
    try:
        form.submit_nowait(payload.repo_url)
    except FormFieldError as e:
        return JSONResponse(
            status_code=422,
            content=FieldErrorOut(detail=e.message, field_errors={e.field: e.message}).model_dump(),
        )
    except SubmissionInProgressError:
        raise HTTPException(status_code=409, detail="A submission is already in progress")
    return form.snapshot()

@router.delete("/forms/{form_id}", status_code=204)
async def discard_form(form_id: str, store: FormSessionStore = Depends(get_store)):
    store.discard(form_id)
    return Response(status_code=204)
