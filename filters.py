"""
Search and filter queries behind the admin list views.

Every list is a conjunction: the search term must appear (case-insensitive)
in at least one of the searchable columns, and every selected enumeration
must match exactly. "all" or an empty value leaves a filter off.
"""

from typing import List, Optional

from sqlalchemy import or_
from sqlmodel import Session, col, select

from models import (
    DONATION_STATUSES,
    REQUEST_STATUSES,
    Donation,
    HelpRequest,
    Story,
)


def is_selected(value: Optional[str]) -> bool:
    return bool(value) and value != "all"


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(term: str, *columns):
    pattern = f"%{_escape_like(term.strip())}%"
    return or_(*[col(column).ilike(pattern, escape="\\") for column in columns])


def filter_requests(
    session: Session,
    search: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    ailment_type: Optional[str] = None,
) -> List[HelpRequest]:
    query = select(HelpRequest)
    if search and search.strip():
        query = query.where(
            _contains(search, HelpRequest.full_name, HelpRequest.email, HelpRequest.ailment_type)
        )
    if is_selected(status):
        query = query.where(HelpRequest.status == status)
    if is_selected(priority):
        query = query.where(HelpRequest.priority == priority)
    if is_selected(ailment_type):
        query = query.where(HelpRequest.ailment_type == ailment_type)
    query = query.order_by(col(HelpRequest.created_at).desc(), col(HelpRequest.id).desc())
    return list(session.exec(query).all())


def request_counts(requests: List[HelpRequest]) -> dict:
    counts = {status: 0 for status in REQUEST_STATUSES}
    for req in requests:
        counts[req.status] = counts.get(req.status, 0) + 1
    return counts


def filter_donations(
    session: Session,
    search: Optional[str] = None,
    status: Optional[str] = None,
    payment_method: Optional[str] = None,
) -> List[Donation]:
    query = select(Donation)
    if search and search.strip():
        query = query.where(
            _contains(search, Donation.donor_name, Donation.email, Donation.transaction_id)
        )
    if is_selected(status):
        query = query.where(Donation.status == status)
    if is_selected(payment_method):
        query = query.where(Donation.payment_method == payment_method)
    query = query.order_by(col(Donation.created_at).desc(), col(Donation.id).desc())
    return list(session.exec(query).all())


def donation_summary(donations: List[Donation]) -> dict:
    summary = {"total_amount": 0.0}
    summary.update({status: 0 for status in DONATION_STATUSES})
    for donation in donations:
        summary["total_amount"] += donation.amount
        summary[donation.status] = summary.get(donation.status, 0) + 1
    return summary


def filter_stories(
    session: Session,
    search: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Story]:
    query = select(Story)
    if search and search.strip():
        query = query.where(_contains(search, Story.name, Story.story))
    if is_selected(category):
        query = query.where(Story.category == category)
    if is_selected(status):
        query = query.where(Story.status == status)
    query = query.order_by(col(Story.created_at).desc(), col(Story.id).desc())
    return list(session.exec(query).all())


def ailment_types(session: Session) -> List[str]:
    """Distinct ailment types on file, for the request filter dropdown."""
    rows = session.exec(select(HelpRequest.ailment_type).distinct()).all()
    return sorted(rows)


def payment_methods(session: Session) -> List[str]:
    rows = session.exec(select(Donation.payment_method).distinct()).all()
    return sorted(rows)
