from datetime import date

from routers.pages import THANK_YOU_MESSAGES, dashboard_stats, recent_activity


def test_home_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Okwulora Helps" in resp.text
    assert "500+" in resp.text


def test_donate_page_lists_presets(client):
    resp = client.get("/donate")
    assert resp.status_code == 200
    assert "₦5,000" in resp.text
    assert "₦250,000" in resp.text


def test_thank_you_messages(client):
    for kind, message in THANK_YOU_MESSAGES.items():
        resp = client.get("/thank-you", params={"kind": kind})
        assert resp.status_code == 200
        assert message.replace("'", "&#39;") in resp.text

    plain = client.get("/thank-you")
    assert "Thank You!" in plain.text


def test_unknown_page_renders_html_404(client):
    resp = client.get("/no-such-page", headers={"Accept": "text/html"})
    assert resp.status_code == 404
    assert "Return to Home" in resp.text
    assert "/no-such-page" in resp.text


def test_unknown_api_path_is_json_404(client):
    resp = client.get("/api/no-such-thing", headers={"Accept": "text/html"})
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Not Found"}


def test_admin_root_redirects_to_dashboard(client):
    resp = client.get("/admin", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin/dashboard"


def test_dashboard_stats_on_seed_data(session):
    stats = dashboard_stats(session, today=date(2024, 1, 25))
    assert stats["total_stories"] == 6
    assert stats["total_donations"] == 6
    assert stats["total_requests"] == 6
    assert stats["pending_requests"] == 2
    assert stats["total_funds"] == 325000
    assert stats["monthly_donations"] == 325000


def test_monthly_donations_only_count_this_month(session):
    assert dashboard_stats(session, today=date(2024, 2, 10))["monthly_donations"] == 0


def test_recent_activity_is_newest_first(session):
    activity = recent_activity(session, limit=5)
    assert len(activity) == 5
    dates = [entry["date"] for entry in activity]
    assert dates == sorted(dates, reverse=True)
    assert activity[0]["date"] == date(2024, 1, 20)
    messages = [entry["message"] for entry in activity]
    assert "Donation of ₦50,000 from Adebayo Johnson" in messages
    assert "Help request from Aisha Bello" in messages


def test_dashboard_page(admin_client):
    resp = admin_client.get("/admin/dashboard")
    assert resp.status_code == 200
    assert "₦325,000" in resp.text
    assert "Add New Story" in resp.text
