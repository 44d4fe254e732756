"""Fixed set of page and asset documents, matched by exact path."""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, JSONResponse

from core.config import ASSETS_DIR

router = APIRouter(include_in_schema=False)

NO_CACHE = "no-cache, no-store, must-revalidate, proxy-revalidate"

PAGES = {
    "/": ("events.html", "text/html"),
    "/login": ("login.html", "text/html"),
}

ASSETS = {
    "styles.css": "text/css",
    "script.js": "application/javascript",
}


def _serve(file_name: str, media_type: str, headers: dict | None = None):
    path = Path(ASSETS_DIR) / file_name
    if not path.is_file():
        return JSONResponse(status_code=404, content={"error": "File not found"})
    return FileResponse(path, media_type=media_type, headers=headers)


@router.get("/")
async def calendar_page():
    return _serve(*PAGES["/"])


@router.get("/login")
async def login_page():
    return _serve(*PAGES["/login"])


@router.get("/assets/{name}")
async def asset(name: str):
    """Stylesheet and script only; anything else is 404."""
    media_type = ASSETS.get(name)
    if media_type is None:
        return JSONResponse(status_code=404, content={"error": "Asset not found"})
    return _serve(name, media_type, headers={"Cache-Control": NO_CACHE})
