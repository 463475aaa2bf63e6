"""
web/routes.py -- Jinja2 template routes for the Chirpy web pages.

These routes serve server-rendered HTML. They share app.state with the API
routes (same hit counter) but return HTML instead of JSON.

Routes:
  GET /app                 -- landing page (counted as a visit)
  GET /app/assets/{path}   -- asset paths fall back to the landing page (counted)
  GET /admin/metrics       -- visit count page (not counted)

Visits are counted by the middleware in api/main.py, not here, so every
/app path is counted exactly once whatever the handler does.
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from core.metrics import HitCounter

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


@router.get("/app", response_class=HTMLResponse)
def app_index(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", {})


@router.get("/app/assets/{asset_path:path}", response_class=HTMLResponse)
def app_assets(request: Request, asset_path: str) -> HTMLResponse:
    """Serve the landing page for any asset path; Chirpy ships no separate assets."""
    return templates.TemplateResponse(request, "index.html", {})


@router.get("/admin/metrics", response_class=HTMLResponse)
def admin_metrics(request: Request) -> HTMLResponse:
    """Render the number of /app visits since startup or the last reset."""
    hits: HitCounter = request.app.state.hits
    return templates.TemplateResponse(request, "metrics.html", {"hits": hits.hits})
