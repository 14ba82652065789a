from typing import Any, Dict, List, Optional

import pytest


class FakeSearchClient:
    """Replays canned SerpAPI results and records every call."""

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def search(self, params: Dict[str, str], api_key: Optional[str] = None) -> Dict[str, Any]:
        self.calls.append({"params": dict(params), "api_key": api_key})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_client_factory():
    return FakeSearchClient


@pytest.fixture
def overview_payload() -> Dict[str, Any]:
    return {
        "text_blocks": [
            {
                "type": "paragraph",
                "snippet": "Nasi goreng is a fried rice dish.",
                "snippet_highlighted_words": ["fried rice"],
                "reference_indexes": [0],
            },
            {
                "type": "list",
                "snippet": "Common ingredients:",
                "list": [
                    {"title": "Rice", "snippet": "Day-old rice works best.", "reference_indexes": [1]},
                    {"title": "Kecap manis", "snippet": "Sweet soy sauce.", "reference_indexes": [2]},
                ],
            },
        ],
        "references": [
            {
                "title": "Nasi goreng - Wikipedia",
                "link": "https://en.wikipedia.org/wiki/Nasi_goreng",
                "snippet": "Nasi goreng is an Indonesian fried rice dish.",
                "source": "Wikipedia",
                "index": 0,
            },
            {
                "title": "How to make nasi goreng",
                "link": "https://example.com/recipe",
                "snippet": "A step-by-step recipe.",
                "source": "Example Recipes",
                "index": 1,
            },
            {
                "title": "Kecap manis explained",
                "link": "https://example.org/kecap",
                "snippet": "What sweet soy sauce is.",
                "source": "Example Pantry",
                "index": 2,
            },
        ],
    }


@pytest.fixture
def token_payload() -> Dict[str, Any]:
    return {
        "page_token": "KIVu-nictZPdTsIwFMdv",
        "serpapi_link": "https://serpapi.com/search.json?engine=google_ai_overview&page_token=KIVu-nictZPdTsIwFMdv",
    }
