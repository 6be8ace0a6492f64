import logging
import os
import secrets
from typing import Annotated, Optional

from db import SessionDep
from fastapi import APIRouter, Cookie, Depends, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from itsdangerous import BadSignature, URLSafeTimedSerializer
from models import AdminUser
from passlib.context import CryptContext
from pydantic import ValidationError
from schemas import LoginData
from sqlmodel import select
from templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

SECRET_KEY = os.getenv("SECRET_KEY") or secrets.token_hex(32)
SESSION_COOKIE = "session"
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(60 * 60 * 8)))

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@okwulorahelps.org")
DEV_ADMIN_PASSWORD = "okwulora-admin"
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", DEV_ADMIN_PASSWORD)
ADMIN_NAME = os.getenv("ADMIN_NAME", "Site Administrator")

serializer = URLSafeTimedSerializer(SECRET_KEY, salt="admin-session")


pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_session_token(admin_id: int) -> str:
    """
    Store the admin id in the signed token.
    Example data:
        {"admin_id": 1}
    """
    return serializer.dumps({"admin_id": admin_id})


def verify_session_token(token: str, max_age_seconds: int = SESSION_MAX_AGE) -> Optional[dict]:
    """
    Returns {'admin_id': ...} if valid,
    or None if the token is tampered with or expired.
    """
    try:
        return serializer.loads(token, max_age=max_age_seconds)
    except BadSignature:
        return None


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        secure=False,
        samesite="lax",
        max_age=SESSION_MAX_AGE,
    )


def get_optional_admin(
    session: SessionDep,
    session_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE),
) -> Optional[AdminUser]:
    """
    Reads the 'session' cookie and returns the logged-in admin,
    or None when the cookie is missing, invalid or points at nobody.
    Page handlers use this and redirect to the login page themselves.
    """
    if session_token is None:
        return None

    data = verify_session_token(session_token)
    if not data:
        return None

    return session.get(AdminUser, data.get("admin_id"))


OptionalAdminDep = Annotated[Optional[AdminUser], Depends(get_optional_admin)]


def require_admin(admin: OptionalAdminDep) -> AdminUser:
    if admin is None:
        raise HTTPException(status_code=401, detail="Not logged in")
    return admin


AdminDep = Annotated[AdminUser, Depends(require_admin)]


def login_redirect() -> RedirectResponse:
    return RedirectResponse(url="/admin/login", status_code=303)


@router.get("/admin/login", response_class=HTMLResponse)
def login_page(request: Request, admin: OptionalAdminDep):
    if admin is not None:
        return RedirectResponse(url="/admin/dashboard", status_code=303)

    return templates.TemplateResponse(
        request,
        "admin/login.html",
        {"current_admin": None, "form_data": {}},
    )


@router.post("/admin/login")
async def login(request: Request, session: SessionDep):
    """
    Log in with email + password and set a signed cookie.

    Accepts either JSON (API clients) or form-data (from the HTML form).
    """
    is_json = request.headers.get("content-type", "").startswith("application/json")
    form_data: dict = {}

    try:
        if is_json:
            try:
                body = await request.json()
            except ValueError:
                raise HTTPException(status_code=400, detail="Request body must be valid JSON")
            if not isinstance(body, dict):
                raise HTTPException(status_code=400, detail="Email and password are required")
            try:
                payload = LoginData(**body)
            except ValidationError:
                raise HTTPException(status_code=400, detail="Email and password are required")
        else:
            form = await request.form()

            raw_email = form.get("email")
            raw_password = form.get("password")

            email = raw_email.strip() if isinstance(raw_email, str) else ""
            password = raw_password if isinstance(raw_password, str) else ""
            form_data = {"email": email}

            if not email or not password:
                raise HTTPException(status_code=400, detail="Email and password are required")

            try:
                payload = LoginData(email=email, password=password)
            except ValidationError:
                raise HTTPException(status_code=400, detail="Invalid email or password")

        admin = session.exec(
            select(AdminUser).where(AdminUser.email == payload.email)
        ).first()

        if admin is None or not verify_password(payload.password, admin.password_hash):
            logger.warning("Failed admin login for %s", payload.email)
            raise HTTPException(status_code=400, detail="Invalid email or password")

        if admin.id is None:
            raise HTTPException(status_code=500, detail="Admin has no ID in database")

    except HTTPException as exc:
        if is_json:
            raise

        return templates.TemplateResponse(
            request,
            "admin/login.html",
            {
                "current_admin": None,
                "form_data": form_data,
                "error": exc.detail,
            },
            status_code=exc.status_code,
        )

    token = create_session_token(admin.id)
    logger.info("Admin %s logged in", admin.email)

    if is_json:
        resp: Response = JSONResponse({"message": "Login successful", "name": admin.name})
    else:
        resp = RedirectResponse(url="/admin/dashboard", status_code=303)
    _set_session_cookie(resp, token)
    return resp


@router.post("/admin/logout")
def logout(admin: OptionalAdminDep):
    """
    Clear the session cookie and go back to the login page.
    """
    if admin is not None:
        logger.info("Admin %s logged out", admin.email)
    response = RedirectResponse(url="/admin/login", status_code=303)
    response.delete_cookie(SESSION_COOKIE)
    return response


@router.get("/api/admin/me")
def read_me(admin: AdminDep):
    return {"id": admin.id, "email": admin.email, "name": admin.name}
