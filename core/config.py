"""
Core Service Wiring
Builds the long-lived objects (templates, SerpAPI client, overview service)
and holds them on app.state.
"""

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from app.modules.aioverview.rendering import build_templates
from app.modules.aioverview.services.overview_service import OverviewService
from app.modules.aioverview.services.serpapi_client import SerpApiClient
from core.conf import Settings, settings as default_settings
from core.logging import get_logger

logger = get_logger(__name__)


def get_serpapi_client(settings: Settings) -> SerpApiClient:
    """Create the SerpAPI client from settings configuration."""
    return SerpApiClient(
        base_url=settings.SERPAPI_BASE_URL,
        timeout_secs=settings.SERPAPI_TIMEOUT_SECS,
    )


def get_page_templates() -> Jinja2Templates:
    """Create the HTML template environment."""
    return build_templates()


def wire_services(app: FastAPI, settings: Settings = default_settings) -> None:
    """Wire all per-process services into app.state."""
    logger.info("Wiring services...")

    app.state.settings = settings
    app.state.templates = get_page_templates()
    app.state.serpapi = get_serpapi_client(settings)
    app.state.overview_service = OverviewService.from_settings(app.state.serpapi, settings)

    if settings.SERPAPI_TIMEOUT_SECS is None:
        logger.info("SerpAPI calls have no timeout (SERPAPI_TIMEOUT_SECS unset)")

    logger.info("Service wiring completed successfully")


async def close_services(app: FastAPI) -> None:
    """Release resources opened by wire_services (call from shutdown)."""
    client = getattr(app.state, "serpapi", None)
    if client is not None:
        await client.close()
        logger.info("SerpAPI client session closed")
