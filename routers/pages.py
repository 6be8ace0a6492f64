# routers/pages.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlmodel import col, func, select

from content import (
    HOME_STATS,
    STORY_CATEGORY_LABELS,
    TESTIMONIALS,
    VALUES,
    naira,
)
from db import SessionDep
from models import Donation, HelpRequest, Story
from templating import templates
from .auth import OptionalAdminDep, login_redirect

router = APIRouter(tags=["pages"])

QUICK_ACTIONS = [
    {"title": "Add New Story", "description": "Create a new transformation story", "href": "/admin/stories/new"},
    {"title": "View Requests", "description": "Review help requests", "href": "/admin/requests"},
    {"title": "Manage Donations", "description": "View donation history", "href": "/admin/donations"},
    {"title": "Manage Stories", "description": "Edit or publish gallery stories", "href": "/admin/stories"},
]

THANK_YOU_MESSAGES = {
    "donation": "Your donation has been processed successfully.",
    "request": "We'll review your request and contact you soon.",
}


def gallery_categories(stories: List[Story]) -> List[dict]:
    categories = [{"id": "all", "name": "All Stories", "count": len(stories)}]
    for category_id, name in STORY_CATEGORY_LABELS.items():
        count = sum(1 for s in stories if s.category == category_id)
        categories.append({"id": category_id, "name": name, "count": count})
    return categories


def lightbox(items: list, index: Optional[int]) -> Optional[dict]:
    """
    The open lightbox for position `index` of the filtered list, clamped
    to its bounds. None when nothing is open or the list is empty.
    """
    if index is None or not items:
        return None
    index = max(0, min(index, len(items) - 1))
    return {
        "index": index,
        "item": items[index],
        "prev": index - 1 if index > 0 else None,
        "next": index + 1 if index < len(items) - 1 else None,
    }


@router.get("/", response_class=HTMLResponse)
def home_page(request: Request):
    return templates.TemplateResponse(
        request,
        "index.html",
        {"stats": HOME_STATS, "values": VALUES, "testimonials": TESTIMONIALS},
    )


@router.get("/gallery", response_class=HTMLResponse)
def gallery_page(
    request: Request,
    session: SessionDep,
    category: str = "all",
    photo: Optional[int] = None,
):
    """
    Published stories, filtered by category, with an optional lightbox.
    """
    published = list(
        session.exec(
            select(Story)
            .where(Story.status == "published")
            .order_by(col(Story.created_at).desc(), col(Story.id).desc())
        ).all()
    )
    if category == "all" or category not in STORY_CATEGORY_LABELS:
        category = "all"
        shown = published
    else:
        shown = [s for s in published if s.category == category]

    return templates.TemplateResponse(
        request,
        "gallery.html",
        {
            "stories": shown,
            "categories": gallery_categories(published),
            "category_labels": STORY_CATEGORY_LABELS,
            "selected_category": category,
            "lightbox": lightbox(shown, photo),
        },
    )


@router.get("/thank-you", response_class=HTMLResponse)
def thank_you_page(request: Request, kind: str = ""):
    return templates.TemplateResponse(
        request,
        "thank_you.html",
        {"kind": kind, "message": THANK_YOU_MESSAGES.get(kind)},
    )


def dashboard_stats(session: SessionDep, today: Optional[date] = None) -> dict:
    today = today or date.today()
    month_start = today.replace(day=1)

    def count(model, *where) -> int:
        stmt = select(func.count()).select_from(model)
        if where:
            stmt = stmt.where(*where)
        return session.exec(stmt).one()

    def total(*where) -> float:
        return session.exec(select(func.coalesce(func.sum(Donation.amount), 0)).where(*where)).one()

    return {
        "total_stories": count(Story),
        "total_donations": count(Donation),
        "total_requests": count(HelpRequest),
        "pending_requests": count(HelpRequest, HelpRequest.status == "pending"),
        "total_funds": total(Donation.status == "completed"),
        "monthly_donations": total(Donation.status == "completed", Donation.created_at >= month_start),
    }


def recent_activity(session: SessionDep, limit: int = 5) -> List[dict]:
    """Newest donations, requests and stories merged into one feed."""
    activity = []
    donations = select(Donation).order_by(col(Donation.created_at).desc(), col(Donation.id).desc())
    requests = select(HelpRequest).order_by(col(HelpRequest.created_at).desc(), col(HelpRequest.id).desc())
    stories = select(Story).order_by(col(Story.created_at).desc(), col(Story.id).desc())

    for d in session.exec(donations.limit(limit)).all():
        activity.append(
            {
                "type": "donation",
                "message": f"Donation of {naira(d.amount)} from {d.donor_name}",
                "date": d.created_at,
                "status": "success" if d.status == "completed" else d.status,
            }
        )
    for r in session.exec(requests.limit(limit)).all():
        activity.append(
            {
                "type": "request",
                "message": f"Help request from {r.full_name}",
                "date": r.created_at,
                "status": r.status,
            }
        )
    for s in session.exec(stories.limit(limit)).all():
        activity.append(
            {
                "type": "story",
                "message": f"Story: {s.name}",
                "date": s.created_at,
                "status": "info",
            }
        )
    activity.sort(key=lambda entry: entry["date"], reverse=True)
    return activity[:limit]


@router.get("/admin", include_in_schema=False)
def admin_root():
    return RedirectResponse(url="/admin/dashboard", status_code=303)


@router.get("/admin/dashboard", response_class=HTMLResponse)
def admin_dashboard(request: Request, session: SessionDep, admin: OptionalAdminDep):
    """Admin dashboard page"""
    if admin is None:
        return login_redirect()

    return templates.TemplateResponse(
        request,
        "admin/dashboard.html",
        {
            "current_admin": admin,
            "stats": dashboard_stats(session),
            "activity": recent_activity(session),
            "quick_actions": QUICK_ACTIONS,
        },
    )
