"""Failure kinds raised while fetching an AI overview.

The HTTP layer catches `OverviewError` and renders its message inline; it does
not distinguish between the subclasses.
"""

from __future__ import annotations


class OverviewError(Exception):
    """Base class for AI overview fetch failures."""


class FetchError(OverviewError):
    """Transport or API-level failure talking to SerpAPI."""


class NotFoundError(OverviewError):
    """The primary search response carries no `ai_overview` field."""

    def __init__(self, message: str = "ai overview not found"):
        super().__init__(message)


class DecodeError(OverviewError):
    """An overview or metadata payload does not match the expected shape."""
