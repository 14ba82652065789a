from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from pydantic import ValidationError

from app.modules.aioverview.errors import NotFoundError
from app.modules.aioverview.schema.overview import AIOverview, SearchMetadata, decode
from core.conf import Settings
from core.logging import get_logger

logger = get_logger(__name__)

PRIMARY_ENGINE = "google"
FOLLOWUP_ENGINE = "google_ai_overview"
AI_OVERVIEW_KEY = "ai_overview"


class SearchClient(Protocol):
    async def search(self, params: Dict[str, str], api_key: Optional[str] = None) -> Dict[str, Any]: ...


class OverviewService:
    """Fetches a Google AI overview for a keyword through SerpAPI.

    The inline overview from a regular `google` search is used when it has
    content. Otherwise the `page_token` it carries is followed with a
    `google_ai_overview` search, whose result is returned as-is.
    """

    def __init__(
        self,
        client: SearchClient,
        location: str = "Indonesia",
        google_domain: str = "google.com",
        gl: str = "id",
        hl: str = "id",
    ):
        self.client = client
        self.location = location
        self.google_domain = google_domain
        self.gl = gl
        self.hl = hl

    @classmethod
    def from_settings(cls, client: SearchClient, settings: Settings) -> "OverviewService":
        return cls(
            client,
            location=settings.SEARCH_LOCATION,
            google_domain=settings.SEARCH_GOOGLE_DOMAIN,
            gl=settings.SEARCH_GL,
            hl=settings.SEARCH_HL,
        )

    def primary_params(self, query: str) -> Dict[str, str]:
        return {
            "engine": PRIMARY_ENGINE,
            "q": query,
            "location": self.location,
            "google_domain": self.google_domain,
            "gl": self.gl,
            "hl": self.hl,
        }

    def followup_params(self, page_token: str) -> Dict[str, str]:
        return {
            "engine": FOLLOWUP_ENGINE,
            "page_token": page_token,
            "hl": self.hl,
            "gl": self.gl,
        }

    async def fetch(self, query: str, api_key: Optional[str] = None) -> AIOverview:
        """Return the AI overview for `query`.

        Raises:
            FetchError: either SerpAPI call failed.
            NotFoundError: the primary response has no `ai_overview` field.
            DecodeError: the overview or its page token could not be decoded.
        """
        results = await self.client.search(self.primary_params(query), api_key)
        logger.info(f"Primary search completed for query={query!r}")

        if AI_OVERVIEW_KEY not in results:
            logger.info(f"❌ AI Overview not found for query={query!r}")
            raise NotFoundError()
        raw = results[AI_OVERVIEW_KEY]

        inline = inline_overview(raw)
        if inline is not None:
            logger.info("Using inline AI Overview from primary search")
            return inline

        meta = decode(SearchMetadata, raw)
        logger.info(f"✅ page_token received, following up with {FOLLOWUP_ENGINE}")
        logger.debug(f"🔗 serpapi_link: {meta.serpapi_link}")

        results = await self.client.search(self.followup_params(meta.page_token), api_key)
        # A missing or null overview on the follow-up is an empty, final result.
        raw = results.get(AI_OVERVIEW_KEY)
        return decode(AIOverview, {} if raw is None else raw)


def inline_overview(raw: Any) -> Optional[AIOverview]:
    """Decode `raw` as an overview, or None when it is not usable as-is.

    A payload that decodes but has no text blocks and no references counts as
    not usable: SerpAPI returns that shape when the overview must be fetched
    with the page token.
    """
    try:
        overview = AIOverview.model_validate(raw)
    except ValidationError:
        return None
    if overview.is_empty():
        return None
    return overview
