import pytest

from routers.auth import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    SESSION_COOKIE,
    create_session_token,
    hash_password,
    verify_password,
    verify_session_token,
)

ADMIN_PAGES = [
    "/admin/dashboard",
    "/admin/stories",
    "/admin/stories/new",
    "/admin/stories/1/edit",
    "/admin/donations",
    "/admin/requests",
]

ADMIN_APIS = [
    "/api/admin/me",
    "/api/admin/stories",
    "/api/admin/donations",
    "/api/admin/requests",
    "/api/admin/requests/1",
    "/ui/admin/requests/1",
]


@pytest.mark.parametrize("path", ADMIN_PAGES)
def test_admin_pages_redirect_to_login(client, path):
    resp = client.get(path, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin/login"


@pytest.mark.parametrize("path", ADMIN_APIS)
def test_admin_apis_need_a_session(client, path):
    resp = client.get(path)
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Not logged in"}


def test_login_page_renders(client):
    resp = client.get("/admin/login")
    assert resp.status_code == 200
    assert 'name="password"' in resp.text


def test_wrong_password_is_rejected(client):
    resp = client.post("/admin/login", data={"email": ADMIN_EMAIL, "password": "nope"})
    assert resp.status_code == 400
    assert "Invalid email or password" in resp.text
    assert SESSION_COOKIE not in resp.cookies


def test_missing_credentials(client):
    resp = client.post("/admin/login", data={"email": ADMIN_EMAIL})
    assert resp.status_code == 400
    assert "Email and password are required" in resp.text


def test_json_login(client):
    resp = client.post("/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Login successful"
    assert client.get("/api/admin/me").json()["email"] == ADMIN_EMAIL


def test_json_login_with_bad_password(client):
    resp = client.post("/admin/login", json={"email": ADMIN_EMAIL, "password": "nope"})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Invalid email or password"}


@pytest.mark.parametrize(
    "body, detail",
    [
        (b"{not json", "Request body must be valid JSON"),
        (b'["a"]', "Email and password are required"),
        (b'{"email": "admin@okwulorahelps.org"}', "Email and password are required"),
    ],
)
def test_malformed_json_login_is_a_bad_request(client, body, detail):
    resp = client.post(
        "/admin/login",
        content=body,
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"detail": detail}


def test_login_opens_the_dashboard(admin_client):
    resp = admin_client.get("/admin/dashboard")
    assert resp.status_code == 200
    assert "Site Administrator" in resp.text


def test_logged_in_admin_skips_the_login_page(admin_client):
    resp = admin_client.get("/admin/login", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin/dashboard"


def test_tampered_cookie_is_ignored(client):
    token = create_session_token(1)
    client.cookies.set(SESSION_COOKIE, token[:-2] + "xx")
    resp = client.get("/admin/dashboard", follow_redirects=False)
    assert resp.status_code == 303


def test_cookie_for_unknown_admin_is_ignored(client):
    client.cookies.set(SESSION_COOKIE, create_session_token(999))
    assert client.get("/api/admin/me").status_code == 401


def test_logout_clears_the_session(admin_client):
    resp = admin_client.post("/admin/logout", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin/login"
    assert admin_client.get("/admin/dashboard", follow_redirects=False).status_code == 303


def test_session_token_round_trip():
    token = create_session_token(5)
    assert verify_session_token(token) == {"admin_id": 5}
    assert verify_session_token(token, max_age_seconds=-1) is None
    assert verify_session_token("not-a-token") is None


def test_password_hashing():
    hashed = hash_password("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)
