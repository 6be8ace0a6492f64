import logging
import math
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from content import DONATION_IMPACT, PRESET_AMOUNTS
from db import SessionDep
from exports import donations_to_csv, export_filename
from filters import donation_summary, filter_donations, payment_methods
from models import DONATION_STATUSES, Donation
from schemas import DonationCreate, DonationList, DonationRead
from templating import FLASH_ERROR, flash, templates
from .auth import AdminDep, OptionalAdminDep, login_redirect

logger = logging.getLogger(__name__)

router = APIRouter(tags=["donations"])

INVALID_AMOUNT = "Please select or enter a valid donation amount."
MISSING_DONOR = "Please provide your name and email address."
ONLINE_PAYMENT = "Online"


def resolve_amount(preset: Optional[str], custom: Optional[str]) -> Optional[float]:
    """
    A typed custom amount wins over the preset button.
    Returns None when neither holds a positive number.
    """
    raw = (custom or "").strip() or (preset or "").strip()
    if not raw:
        return None
    try:
        amount = float(raw.replace(",", ""))
    except ValueError:
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def record_donation(session: SessionDep, donation_in: DonationCreate) -> Donation:
    """Store an accepted donation as pending; there is no payment processor."""
    info = donation_in.donor_info
    donation = Donation(
        donor_name=info.name,
        email=str(info.email),
        amount=donation_in.amount,
        message=info.message or None,
        status="pending",
        payment_method=ONLINE_PAYMENT,
    )
    session.add(donation)
    session.commit()
    session.refresh(donation)

    donation.transaction_id = f"TXN-{donation.id:03d}-{donation.created_at.year}"
    session.add(donation)
    session.commit()
    session.refresh(donation)

    logger.info(
        "Donation %s of %.2f received from %s",
        donation.transaction_id,
        donation.amount,
        donation.email,
    )
    return donation


def _render_donate_page(
    request: Request,
    form_data: dict,
    flash_message: Optional[dict] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "donate.html",
        {
            "preset_amounts": PRESET_AMOUNTS,
            "impact": DONATION_IMPACT,
            "form_data": form_data,
            "flash_message": flash_message,
        },
        status_code=status_code,
    )


@router.get("/donate", response_class=HTMLResponse)
def donate_page(request: Request):
    return _render_donate_page(request, {})


@router.post("/donate", response_class=HTMLResponse)
async def donate_from_form(request: Request, session: SessionDep):
    form = await request.form()
    form_data = {
        key: (form.get(key) or "").strip()
        for key in ("amount", "custom_amount", "name", "email", "message")
    }

    amount = resolve_amount(form_data["amount"], form_data["custom_amount"])
    if amount is None:
        return _render_donate_page(
            request,
            form_data,
            flash(FLASH_ERROR, INVALID_AMOUNT),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    if not form_data["name"] or not form_data["email"]:
        return _render_donate_page(
            request,
            form_data,
            flash(FLASH_ERROR, MISSING_DONOR),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        donation_in = DonationCreate(
            amount=amount,
            donor_info={
                "name": form_data["name"],
                "email": form_data["email"],
                "message": form_data["message"],
            },
        )
    except ValueError:
        return _render_donate_page(
            request,
            form_data,
            flash(FLASH_ERROR, "Please enter a valid email address."),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    record_donation(session, donation_in)
    return RedirectResponse(url="/thank-you?kind=donation", status_code=303)


@router.post("/api/donate")
def donate(donation_in: DonationCreate, session: SessionDep):
    donation = record_donation(session, donation_in)
    return {"ok": True, "id": donation.id, "transaction_id": donation.transaction_id}


@router.get("/admin/donations", response_class=HTMLResponse)
def admin_donations_page(
    request: Request,
    session: SessionDep,
    admin: OptionalAdminDep,
    search: str = "",
    status: str = "all",
    payment_method: str = "all",
):
    if admin is None:
        return login_redirect()

    donations = filter_donations(session, search, status, payment_method)
    return templates.TemplateResponse(
        request,
        "admin/donations.html",
        {
            "current_admin": admin,
            "donations": donations,
            "summary": donation_summary(donations),
            "statuses": DONATION_STATUSES,
            "payment_methods": payment_methods(session),
            "filters": {"search": search, "status": status, "payment_method": payment_method},
        },
    )


@router.get("/admin/donations/export")
def export_donations(
    session: SessionDep,
    admin: OptionalAdminDep,
    search: str = "",
    status: str = "all",
    payment_method: str = "all",
):
    """
    Download the donations currently matching the filters as CSV.
    """
    if admin is None:
        return login_redirect()

    donations = filter_donations(session, search, status, payment_method)
    logger.info("Admin %s exported %d donations", admin.email, len(donations))
    return Response(
        content=donations_to_csv(donations),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


@router.get("/api/admin/donations", response_model=DonationList)
def list_donations(
    session: SessionDep,
    admin: AdminDep,
    search: Optional[str] = None,
    status: Optional[str] = None,
    payment_method: Optional[str] = None,
):
    if status is not None and status != "all" and status not in DONATION_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status value")

    donations = filter_donations(session, search, status, payment_method)
    return {
        "donations": [DonationRead.model_validate(d) for d in donations],
        "summary": donation_summary(donations),
    }
