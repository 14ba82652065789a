from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from app.modules.aioverview.errors import OverviewError
from app.modules.aioverview.rendering import INDEX_TEMPLATE
from app.modules.aioverview.schema.overview import AIOverview
from app.modules.aioverview.services.overview_service import OverviewService
from core.conf import Settings, get_settings
from core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["AI Overview"])


# Dependency hooks; objects are built once in create_app() and held on app.state
def get_overview_service(request: Request) -> OverviewService:
    return request.app.state.overview_service


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(
    request: Request,
    q: str = Query("", description="Search keyword"),
    service: OverviewService = Depends(get_overview_service),
    templates: Jinja2Templates = Depends(get_templates),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Search form, plus the AI overview for `q` when one was submitted.

    Fetch failures are rendered inline with a 200; only a template failure
    produces a 500.
    """
    overview: Optional[AIOverview] = None
    error: Optional[str] = None

    if q:
        try:
            overview = await service.fetch(q, api_key=settings.SERPAPI_API_KEY)
        except OverviewError as e:
            logger.warning(f"❌ AI Overview fetch failed for query={q!r}: {e}")
            error = str(e)

    try:
        return templates.TemplateResponse(
            request,
            INDEX_TEMPLATE,
            {"query": q, "overview": overview, "error": error},
        )
    except TemplateError:
        logger.exception("Error rendering page")
        return PlainTextResponse("Error rendering page", status_code=500)
