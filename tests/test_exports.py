import csv
import io
from datetime import date

from exports import DONATION_CSV_HEADER, donations_to_csv, export_filename
from models import Donation


def _rows(text):
    return list(csv.reader(io.StringIO(text)))


def test_csv_has_header_and_one_row_per_donation():
    donations = [
        Donation(
            id=7,
            donor_name="Okafor, Ngozi",
            email="ngozi@email.com",
            amount=12500.5,
            status="pending",
            payment_method="Online",
            transaction_id="TXN-007-2024",
            created_at=date(2024, 2, 1),
        )
    ]
    rows = _rows(donations_to_csv(donations))
    assert rows[0] == DONATION_CSV_HEADER
    assert rows[1] == [
        "7",
        "Okafor, Ngozi",
        "ngozi@email.com",
        "12500.50",
        "pending",
        "Online",
        "2024-02-01",
        "TXN-007-2024",
    ]


def test_empty_export_is_just_the_header():
    assert _rows(donations_to_csv([])) == [DONATION_CSV_HEADER]


def test_export_filename():
    assert export_filename(date(2024, 3, 9)) == "donations-2024-03-09.csv"


def test_export_matches_the_filtered_view(admin_client):
    resp = admin_client.get("/admin/donations/export", params={"status": "completed"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert f'filename="{export_filename()}"' in resp.headers["content-disposition"]

    rows = _rows(resp.text)
    assert len(rows) == 4 + 1
    assert {row[4] for row in rows[1:]} == {"completed"}
    assert rows[1][1] == "Adebayo Johnson"


def test_export_combines_filters(admin_client):
    resp = admin_client.get(
        "/admin/donations/export",
        params={"status": "completed", "payment_method": "Credit Card", "search": "kemi"},
    )
    rows = _rows(resp.text)
    assert [row[1] for row in rows[1:]] == ["Kemi Adebayo"]


def test_export_without_filters_has_every_donation(admin_client):
    rows = _rows(admin_client.get("/admin/donations/export").text)
    assert len(rows) == 6 + 1


def test_export_requires_login(client):
    resp = client.get("/admin/donations/export", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin/login"
