"""Web interface routes implementation."""

import os
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "..", "ux", "views")
templates = Jinja2Templates(directory=template_dir)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the landing page with the shorten form."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "create_path": request.url_for("create_short_url").path,
            "example_path": request.url_for("redirect_short_url", short_url="1").path,
        },
    )
