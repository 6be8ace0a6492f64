from pathlib import Path

from fastapi.templating import Jinja2Templates

from content import ORG_NAME, naira

BASE_DIR = Path(__file__).resolve().parent

FLASH_SUCCESS = "success"
FLASH_ERROR = "error"

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
templates.env.filters["naira"] = naira
templates.env.globals["org_name"] = ORG_NAME


def flash(kind: str, text: str) -> dict:
    return {"kind": kind, "text": text}
