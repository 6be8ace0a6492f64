import csv
import io
from datetime import date
from typing import Iterable, Optional

from models import Donation


DONATION_CSV_HEADER = [
    "ID",
    "Donor Name",
    "Email",
    "Amount (NGN)",
    "Status",
    "Payment Method",
    "Date",
    "Transaction ID",
]


def _format_amount(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else f"{amount:.2f}"


def donations_to_csv(donations: Iterable[Donation]) -> str:
    """Render donations as CSV text, one row per donation after the header."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(DONATION_CSV_HEADER)
    for d in donations:
        writer.writerow(
            [
                d.id,
                d.donor_name,
                d.email,
                _format_amount(d.amount),
                d.status,
                d.payment_method,
                d.created_at.isoformat(),
                d.transaction_id,
            ]
        )
    return buffer.getvalue()


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"donations-{today.isoformat()}.csv"
