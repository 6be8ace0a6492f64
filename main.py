import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from db import init_db
from routers import auth, donations, pages, requests, stories, ui
from templating import BASE_DIR, templates

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("okwulora")

app = FastAPI(title="Okwulora Helps")

app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")


@app.on_event("startup")
def on_startup() -> None:
    if auth.ADMIN_PASSWORD == auth.DEV_ADMIN_PASSWORD:
        logger.warning("ADMIN_PASSWORD is not set; using the development default")
    init_db()


def _wants_html(request: Request) -> bool:
    if request.url.path.startswith(("/api/", "/ui/")):
        return False
    return "text/html" in request.headers.get("accept", "")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and _wants_html(request):
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"path": request.url.path},
            status_code=404,
        )
    return JSONResponse(
        {"detail": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


app.include_router(auth.router)
app.include_router(pages.router)
app.include_router(donations.router)
app.include_router(requests.router)
app.include_router(stories.router)
app.include_router(ui.router)
