from __future__ import annotations

"""SerpAPI transport.

One GET per call against the search endpoint. Every failure mode (HTTP status,
connection, timeout, malformed body, an `"error"` key in the payload) comes
out as `FetchError`, so callers only deal with decoded JSON objects.
"""

import asyncio
import json
from typing import Any, Dict, Mapping, Optional

import aiohttp

from app.modules.aioverview.errors import FetchError
from core.logging import get_logger
from core.utils.perf import profile_stage

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://serpapi.com/search.json"


class SerpApiClient:
    session: Optional[aiohttp.ClientSession]

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_secs: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout_secs)
        self.session = session

    def _get_session(self) -> aiohttp.ClientSession:
        # Created lazily so it binds to the running event loop.
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self.session

    async def close(self) -> None:
        if self.session is not None and not self.session.closed:
            await self.session.close()
        self.session = None

    @profile_stage("serpapi.search")
    async def search(self, params: Mapping[str, str], api_key: Optional[str] = None) -> Dict[str, Any]:
        """Run one SerpAPI search and return the decoded JSON object."""
        logger.debug(f"SerpAPI request params: {dict(params)}")

        query: Dict[str, str] = dict(params)
        if api_key is not None:
            query["api_key"] = api_key

        session = self._get_session()
        try:
            async with session.get(self.base_url, params=query) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    raise FetchError(f"SerpAPI returned HTTP {resp.status}: {_error_message(body)}")
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"SerpAPI request failed: {e!r}") from e
        except ValueError as e:
            raise FetchError(f"SerpAPI returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise FetchError(f"SerpAPI returned {type(data).__name__}, expected a JSON object")
        if data.get("error"):
            raise FetchError(f"SerpAPI error: {data['error']}")
        return data


def _error_message(body: str, limit: int = 500) -> str:
    """Best-effort extraction of SerpAPI's `error` field from an error body."""
    try:
        payload = json.loads(body)
    except ValueError:
        return body[:limit]
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return body[:limit]
