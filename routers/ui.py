import json
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from db import SessionDep
from models import REQUEST_PRIORITIES, REQUEST_STATUSES, HelpRequest
from schemas import HelpRequestUpdate
from templating import FLASH_ERROR, FLASH_SUCCESS, flash, templates
from .auth import AdminDep
from .requests import apply_request_update, load_documents

router = APIRouter(prefix="/ui", tags=["ui"])


def _render_request_detail(
    request: Request,
    session: SessionDep,
    help_request: Optional[HelpRequest],
    modal_message: Optional[dict] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    documents = load_documents(session, help_request.id) if help_request else []
    response = templates.TemplateResponse(
        request,
        "fragments/request_detail.html",
        {
            "item": help_request,
            "documents": documents,
            "statuses": REQUEST_STATUSES,
            "priorities": REQUEST_PRIORITIES,
            "modal_message": modal_message,
        },
    )
    response.status_code = status_code
    return response


def _not_found(request: Request, session: SessionDep) -> HTMLResponse:
    return _render_request_detail(
        request,
        session,
        None,
        flash(FLASH_ERROR, "Request not found."),
        status_code=status.HTTP_404_NOT_FOUND,
    )


@router.get("/admin/requests/{request_id}", response_class=HTMLResponse)
def admin_request_detail(
    request_id: int,
    request: Request,
    session: SessionDep,
    admin: AdminDep,
):
    help_request = session.get(HelpRequest, request_id)
    if help_request is None:
        return _not_found(request, session)
    return _render_request_detail(request, session, help_request)


@router.post("/admin/requests/{request_id}/status", response_class=HTMLResponse)
async def admin_update_request_status(
    request_id: int,
    http_request: Request,
    session: SessionDep,
    admin: AdminDep,
):
    form = await http_request.form()
    new_status = (form.get("status") or "").strip()

    help_request = session.get(HelpRequest, request_id)
    if help_request is None:
        return _not_found(http_request, session)

    try:
        if new_status not in REQUEST_STATUSES:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid status value.")
        apply_request_update(session, help_request, HelpRequestUpdate(status=new_status), admin.email)
    except HTTPException as exc:
        session.rollback()
        return _render_request_detail(
            http_request,
            session,
            help_request,
            flash(FLASH_ERROR, exc.detail),
            status_code=exc.status_code,
        )

    response = _render_request_detail(
        http_request,
        session,
        help_request,
        flash(FLASH_SUCCESS, f"Request status has been updated to {new_status}."),
    )
    response.headers["HX-Trigger"] = json.dumps({"requests-refresh": True})
    return response


@router.post("/admin/requests/{request_id}/assign", response_class=HTMLResponse)
async def admin_assign_request(
    request_id: int,
    http_request: Request,
    session: SessionDep,
    admin: AdminDep,
):
    form = await http_request.form()

    help_request = session.get(HelpRequest, request_id)
    if help_request is None:
        return _not_found(http_request, session)

    changes = {
        "assigned_to": (form.get("assigned_to") or "").strip(),
        "notes": (form.get("notes") or "").strip(),
    }
    priority = (form.get("priority") or "").strip()
    if priority:
        changes["priority"] = priority

    try:
        update = HelpRequestUpdate(**changes)
    except ValidationError:
        return _render_request_detail(
            http_request,
            session,
            help_request,
            flash(FLASH_ERROR, "Invalid priority value."),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    apply_request_update(session, help_request, update, admin.email)

    text = (
        f"Request has been assigned to {help_request.assigned_to}."
        if help_request.assigned_to
        else "Request details saved."
    )
    response = _render_request_detail(http_request, session, help_request, flash(FLASH_SUCCESS, text))
    response.headers["HX-Trigger"] = json.dumps({"requests-refresh": True})
    return response
