import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from sqlmodel import select

import wizard
from content import AILMENT_OPTIONS, GENDER_OPTIONS
from db import SessionDep
from filters import ailment_types, filter_requests, request_counts
from models import REQUEST_PRIORITIES, REQUEST_STATUSES, HelpDocument, HelpRequest
from schemas import HelpDocumentRead, HelpRequestRead, HelpRequestUpdate
from templating import FLASH_ERROR, flash, templates
from .auth import AdminDep, OptionalAdminDep, login_redirect

logger = logging.getLogger(__name__)

router = APIRouter(tags=["requests"])

SUBMIT_FAILED = "Failed to submit request. Please try again."


def _documents_from_form(form) -> list:
    files = form.getlist("documents") + form.getlist("documents[]")
    return wizard.usable_documents(files)


def _render_wizard(
    request: Request,
    step: int,
    form_data: dict,
    errors: Optional[List[str]] = None,
    flash_message: Optional[dict] = None,
    status_code: int = status.HTTP_200_OK,
):
    # htmx swaps only the wizard card; plain browsers get the whole page.
    template = (
        "fragments/request_help_step.html"
        if request.headers.get("HX-Request")
        else "request_help.html"
    )
    return templates.TemplateResponse(
        request,
        template,
        {
            "step": step,
            "step_title": wizard.STEP_TITLES[step],
            "step_titles": wizard.STEP_TITLES,
            "progress": wizard.progress_percent(step),
            "last_step": wizard.LAST_STEP,
            "form_data": form_data,
            "hidden_fields": [f for f in wizard.ALL_FIELDS if f not in wizard.STEP_FIELDS[step]],
            "errors": errors or [],
            "flash_message": flash_message,
            "gender_options": GENDER_OPTIONS,
            "ailment_options": AILMENT_OPTIONS,
            "accept": ",".join(wizard.ALLOWED_DOCUMENT_EXTENSIONS),
        },
        status_code=status_code,
    )


async def create_help_request(session: SessionDep, form_data: dict, documents: list) -> HelpRequest:
    """
    Validate every wizard step and store the request with its documents.
    Raises 400 with the first problem found; nothing is stored in that case.
    """
    for step in range(wizard.FIRST_STEP, wizard.LAST_STEP + 1):
        errors = wizard.step_errors(step, form_data, documents)
        if errors:
            raise HTTPException(status_code=400, detail=errors[0])

    help_request = HelpRequest(**form_data, status="pending", priority="medium")
    session.add(help_request)
    session.flush()

    for document in documents:
        content = await document.read()
        session.add(
            HelpDocument(
                request_id=help_request.id,
                filename=document.filename,
                content_type=document.content_type or "application/octet-stream",
                size=len(content),
            )
        )

    session.commit()
    session.refresh(help_request)
    logger.info(
        "Help request %s received from %s with %d document(s)",
        help_request.id,
        help_request.email,
        len(documents),
    )
    return help_request


@router.get("/request-help", response_class=HTMLResponse)
def request_help_page(request: Request):
    return _render_wizard(request, wizard.FIRST_STEP, {f: "" for f in wizard.ALL_FIELDS})


@router.post("/request-help/step", response_class=HTMLResponse)
async def request_help_step(request: Request):
    """
    Move the wizard one step. "back" always goes back; "next" only when the
    current step's required fields are filled in.
    """
    form = await request.form()
    form_data = wizard.collect_fields(form)

    try:
        step = wizard.clamp_step(int(form.get("step") or wizard.FIRST_STEP))
    except ValueError:
        step = wizard.FIRST_STEP

    if form.get("action") == "back":
        return _render_wizard(request, wizard.previous_step(step), form_data)

    new_step, errors = wizard.next_step(step, form_data)
    if errors:
        return _render_wizard(
            request, new_step, form_data, errors, status_code=status.HTTP_400_BAD_REQUEST
        )
    return _render_wizard(request, new_step, form_data)


@router.post("/request-help", response_class=HTMLResponse)
async def submit_help_request(request: Request, session: SessionDep):
    form = await request.form()
    form_data = wizard.collect_fields(form)
    documents = _documents_from_form(form)

    incomplete = wizard.first_incomplete_step(form_data)
    if incomplete is not None:
        return _render_wizard(
            request,
            incomplete,
            form_data,
            wizard.step_errors(incomplete, form_data),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        await create_help_request(session, form_data, documents)
    except HTTPException as exc:
        session.rollback()
        return _render_wizard(
            request,
            wizard.LAST_STEP,
            form_data,
            wizard.document_errors(documents),
            flash(FLASH_ERROR, SUBMIT_FAILED),
            status_code=exc.status_code,
        )

    return RedirectResponse(url="/thank-you?kind=request", status_code=303)


@router.post("/api/request-help")
async def api_submit_help_request(request: Request, session: SessionDep):
    form = await request.form()
    form_data = wizard.collect_fields(form)
    documents = _documents_from_form(form)

    try:
        help_request = await create_help_request(session, form_data, documents)
    except HTTPException as exc:
        session.rollback()
        return JSONResponse({"ok": False, "detail": exc.detail}, status_code=exc.status_code)

    return {"ok": True, "id": help_request.id}


def get_help_request_or_404(session: SessionDep, request_id: int) -> HelpRequest:
    help_request = session.get(HelpRequest, request_id)
    if help_request is None:
        raise HTTPException(status_code=404, detail="Request not found")
    return help_request


def load_documents(session: SessionDep, request_id: int) -> List[HelpDocument]:
    stmt = select(HelpDocument).where(HelpDocument.request_id == request_id)
    return list(session.exec(stmt).all())


def apply_request_update(
    session: SessionDep,
    help_request: HelpRequest,
    update: HelpRequestUpdate,
    admin_email: str,
) -> HelpRequest:
    """Change only the fields present in the update, on this one request."""
    changes = update.model_dump(exclude_unset=True)
    for field, value in list(changes.items()):
        if value is None and field in ("status", "priority"):
            del changes[field]
            continue
        if field in ("assigned_to", "notes") and isinstance(value, str):
            value = value.strip() or None
        setattr(help_request, field, value)

    session.add(help_request)
    session.commit()
    session.refresh(help_request)
    logger.info(
        "Admin %s updated request %s: %s",
        admin_email,
        help_request.id,
        ", ".join(f"{k}={v!r}" for k, v in changes.items()) or "no changes",
    )
    return help_request


@router.get("/admin/requests", response_class=HTMLResponse)
def admin_requests_page(
    request: Request,
    session: SessionDep,
    admin: OptionalAdminDep,
    search: str = "",
    status: str = "all",
    priority: str = "all",
    ailment_type: str = "all",
):
    if admin is None:
        return login_redirect()

    requests = filter_requests(session, search, status, priority, ailment_type)
    return templates.TemplateResponse(
        request,
        "admin/requests.html",
        {
            "current_admin": admin,
            "requests": requests,
            "counts": request_counts(requests),
            "statuses": REQUEST_STATUSES,
            "priorities": REQUEST_PRIORITIES,
            "ailment_types": ailment_types(session),
            "filters": {
                "search": search,
                "status": status,
                "priority": priority,
                "ailment_type": ailment_type,
            },
        },
    )


@router.get("/api/admin/requests", response_model=List[HelpRequestRead])
def list_requests(
    session: SessionDep,
    admin: AdminDep,
    search: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    ailment_type: Optional[str] = None,
):
    if status is not None and status != "all" and status not in REQUEST_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status value")
    if priority is not None and priority != "all" and priority not in REQUEST_PRIORITIES:
        raise HTTPException(status_code=400, detail="Invalid priority value")
    return filter_requests(session, search, status, priority, ailment_type)


@router.get("/api/admin/requests/{request_id}")
def get_request(request_id: int, session: SessionDep, admin: AdminDep):
    help_request = get_help_request_or_404(session, request_id)
    documents = load_documents(session, request_id)
    return {
        "request": HelpRequestRead.model_validate(help_request),
        "documents": [HelpDocumentRead.model_validate(d) for d in documents],
    }


@router.patch("/api/admin/requests/{request_id}", response_model=HelpRequestRead)
def update_request(
    request_id: int,
    update: HelpRequestUpdate,
    session: SessionDep,
    admin: AdminDep,
):
    help_request = get_help_request_or_404(session, request_id)
    return apply_request_update(session, help_request, update, admin.email)
