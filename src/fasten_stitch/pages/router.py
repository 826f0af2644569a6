from __future__ import annotations

from pathlib import Path
from typing import Final

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from fasten_stitch.config import StitchConfig
from fasten_stitch.events import (
    BRIDGE_HANDLER_NAME,
    ERROR_STATUS,
    READY_STATUS,
    SEARCH_QUERY_EVENT,
    STATUS_MESSAGES,
    WIDGET_EVENT_NAME,
    utc_now_iso,
)
from fasten_stitch.models import CONNECT_PATH

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

STITCH_ELEMENT_CSS: Final[str] = (
    "https://cdn.fastenhealth.com/connect/v3/fasten-stitch-element.css"
)
STITCH_ELEMENT_JS: Final[str] = "https://cdn.fastenhealth.com/connect/v3/fasten-stitch-element.js"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["pages"])


def _config(request: Request) -> StitchConfig:
    return request.app.state.stitch_config


@router.api_route(CONNECT_PATH, methods=["GET", "HEAD"], response_class=HTMLResponse)
async def connect_page(request: Request) -> HTMLResponse:
    config = _config(request)
    return templates.TemplateResponse(
        request,
        "connect.html",
        {
            "title": "Fasten Connect",
            "public_key": config.public_key,
            "environment": config.environment,
            "rendered_at": utc_now_iso(),
            "stitch_css": STITCH_ELEMENT_CSS,
            "stitch_js": STITCH_ELEMENT_JS,
            "page_script": {
                "bridgeHandler": BRIDGE_HANDLER_NAME,
                "widgetEvent": WIDGET_EVENT_NAME,
                "readyStatus": READY_STATUS,
                "errorStatus": ERROR_STATUS,
                "searchQueryEvent": SEARCH_QUERY_EVENT,
                "statusMessages": STATUS_MESSAGES,
            },
        },
    )


@router.api_route("/connect", methods=["GET", "HEAD"])
async def connect_redirect() -> RedirectResponse:
    return RedirectResponse(url=CONNECT_PATH, status_code=302)
