import base64
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from content import STORY_CATEGORY_LABELS
from db import SessionDep
from filters import filter_stories
from models import STORY_CATEGORIES, STORY_STATUSES, Story
from schemas import StoryCreate, StoryRead, StoryUpdate
from templating import FLASH_ERROR, FLASH_SUCCESS, flash, templates
from .auth import AdminDep, OptionalAdminDep, login_redirect

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stories"])

STORY_FIELDS = ("name", "story", "before_image", "after_image", "category", "status")
IMAGE_SLOTS = ("before_image", "after_image")


async def image_data_url(upload) -> str:
    """Turn an uploaded picture into a data: URL the templates can show as-is."""
    content_type = upload.content_type or ""
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Please upload an image file.")
    content = await upload.read()
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def get_story_or_404(session: SessionDep, story_id: int) -> Story:
    story = session.get(Story, story_id)
    if story is None:
        raise HTTPException(status_code=404, detail="Story not found")
    return story


def _validation_messages(exc: ValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        field = error["loc"][-1] if error["loc"] else "form"
        messages.append(f"{str(field).replace('_', ' ').capitalize()}: {error['msg']}")
    return messages


async def _story_form_data(form) -> dict:
    """Read the text fields and swap in uploaded images where given."""
    form_data = {}
    for field in STORY_FIELDS:
        raw = form.get(field)
        form_data[field] = raw.strip() if isinstance(raw, str) else ""
    for slot in IMAGE_SLOTS:
        upload = form.get(f"{slot}_file")
        if getattr(upload, "filename", None):
            form_data[slot] = await image_data_url(upload)
    return form_data


def _render_story_list(
    request: Request,
    session: SessionDep,
    admin,
    filters: dict,
    flash_message: Optional[dict] = None,
) -> HTMLResponse:
    stories = filter_stories(session, filters["search"], filters["category"], filters["status"])
    return templates.TemplateResponse(
        request,
        "admin/stories.html",
        {
            "current_admin": admin,
            "stories": stories,
            "categories": STORY_CATEGORY_LABELS,
            "statuses": STORY_STATUSES,
            "filters": filters,
            "flash_message": flash_message,
        },
    )


def _render_story_form(
    request: Request,
    admin,
    story_id: Optional[int],
    form_data: dict,
    errors: Optional[List[str]] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "admin/story_form.html",
        {
            "current_admin": admin,
            "story_id": story_id,
            "form_data": form_data,
            "categories": STORY_CATEGORY_LABELS,
            "statuses": STORY_STATUSES,
            "errors": errors or [],
        },
        status_code=status_code,
    )


def _all_filters() -> dict:
    return {"search": "", "category": "all", "status": "all"}


@router.get("/admin/stories", response_class=HTMLResponse)
def admin_stories_page(
    request: Request,
    session: SessionDep,
    admin: OptionalAdminDep,
    search: str = "",
    category: str = "all",
    status: str = "all",
):
    if admin is None:
        return login_redirect()
    filters = {"search": search, "category": category, "status": status}
    return _render_story_list(request, session, admin, filters)


@router.get("/admin/stories/new", response_class=HTMLResponse)
def new_story_page(request: Request, admin: OptionalAdminDep):
    if admin is None:
        return login_redirect()
    defaults = {field: "" for field in STORY_FIELDS}
    defaults.update(category="surgery", status="draft")
    return _render_story_form(request, admin, None, defaults)


@router.get("/admin/stories/{story_id}/edit", response_class=HTMLResponse)
def edit_story_page(story_id: int, request: Request, session: SessionDep, admin: OptionalAdminDep):
    if admin is None:
        return login_redirect()
    story = get_story_or_404(session, story_id)
    form_data = {field: getattr(story, field) for field in STORY_FIELDS}
    return _render_story_form(request, admin, story_id, form_data)


@router.post("/admin/stories", response_class=HTMLResponse)
async def create_story_from_form(request: Request, session: SessionDep, admin: OptionalAdminDep):
    if admin is None:
        return login_redirect()

    form = await request.form()
    try:
        form_data = await _story_form_data(form)
        story_in = StoryCreate(**form_data)
    except HTTPException as exc:
        return _render_story_form(
            request, admin, None, _text_fields(form), [exc.detail], status_code=exc.status_code
        )
    except ValidationError as exc:
        return _render_story_form(
            request,
            admin,
            None,
            form_data,
            _validation_messages(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    create_story(story_in, session, admin)
    return _render_story_list(
        request,
        session,
        admin,
        _all_filters(),
        flash(FLASH_SUCCESS, "The new story has been successfully created."),
    )


@router.post("/admin/stories/{story_id}", response_class=HTMLResponse)
async def update_story_from_form(
    story_id: int,
    request: Request,
    session: SessionDep,
    admin: OptionalAdminDep,
):
    if admin is None:
        return login_redirect()

    story = get_story_or_404(session, story_id)
    form = await request.form()
    try:
        form_data = await _story_form_data(form)
        story_in = StoryUpdate(**form_data)
    except HTTPException as exc:
        return _render_story_form(
            request, admin, story_id, _text_fields(form), [exc.detail], status_code=exc.status_code
        )
    except ValidationError as exc:
        return _render_story_form(
            request,
            admin,
            story_id,
            form_data,
            _validation_messages(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    _apply_story_update(session, story, story_in, admin)
    return _render_story_list(
        request,
        session,
        admin,
        _all_filters(),
        flash(FLASH_SUCCESS, "The story has been successfully updated."),
    )


@router.post("/admin/stories/{story_id}/delete", response_class=HTMLResponse)
def delete_story_from_form(
    story_id: int,
    request: Request,
    session: SessionDep,
    admin: OptionalAdminDep,
):
    if admin is None:
        return login_redirect()

    story = session.get(Story, story_id)
    if story is None:
        return _render_story_list(
            request, session, admin, _all_filters(), flash(FLASH_ERROR, "Story not found.")
        )

    _delete_story(session, story, admin)
    return _render_story_list(
        request,
        session,
        admin,
        _all_filters(),
        flash(FLASH_SUCCESS, "The story has been successfully deleted."),
    )


def _text_fields(form) -> dict:
    return {
        field: (form.get(field).strip() if isinstance(form.get(field), str) else "")
        for field in STORY_FIELDS
    }


def _apply_story_update(session: SessionDep, story: Story, story_in: StoryUpdate, admin) -> Story:
    for field, value in story_in.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(story, field, value)
    session.add(story)
    session.commit()
    session.refresh(story)
    logger.info("Admin %s updated story %s", admin.email, story.id)
    return story


def _delete_story(session: SessionDep, story: Story, admin) -> None:
    story_id = story.id
    session.delete(story)
    session.commit()
    logger.info("Admin %s deleted story %s", admin.email, story_id)


@router.get("/api/admin/stories", response_model=List[StoryRead])
def list_stories(
    session: SessionDep,
    admin: AdminDep,
    search: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
):
    if category is not None and category != "all" and category not in STORY_CATEGORIES:
        raise HTTPException(status_code=400, detail="Invalid category value")
    if status is not None and status != "all" and status not in STORY_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status value")
    return filter_stories(session, search, category, status)


@router.post("/api/admin/stories", response_model=StoryRead, status_code=201)
def create_story(story_in: StoryCreate, session: SessionDep, admin: AdminDep):
    story = Story(**story_in.model_dump())
    session.add(story)
    session.commit()
    session.refresh(story)
    logger.info("Admin %s created story %s", admin.email, story.id)
    return story


@router.put("/api/admin/stories/{story_id}", response_model=StoryRead)
def update_story(story_id: int, story_in: StoryUpdate, session: SessionDep, admin: AdminDep):
    story = get_story_or_404(session, story_id)
    return _apply_story_update(session, story, story_in, admin)


@router.delete("/api/admin/stories/{story_id}", status_code=204)
def delete_story(story_id: int, session: SessionDep, admin: AdminDep):
    story = get_story_or_404(session, story_id)
    _delete_story(session, story, admin)
    return Response(status_code=204)
