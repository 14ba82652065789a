from __future__ import annotations

from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from app.modules.aioverview.errors import DecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)


class SerpModel(BaseModel):
    """Base for SerpAPI payload shapes.

    Unknown keys are ignored and `null` values fall back to the field default.
    Values are not coerced between types (`"3"` is not an int).
    """

    model_config = ConfigDict(extra="ignore", strict=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if isinstance(values, dict):
            return {k: v for k, v in values.items() if v is not None}
        return values


class ListItem(SerpModel):
    title: str = ""
    snippet: str = ""
    reference_indexes: List[int] = Field(default_factory=list)


class TextBlock(SerpModel):
    type: str = ""
    snippet: str = ""
    snippet_highlighted_words: List[str] = Field(default_factory=list)
    reference_indexes: List[int] = Field(default_factory=list)
    list: List[ListItem] = Field(default_factory=list)


class Reference(SerpModel):
    title: str = ""
    link: str = ""
    snippet: str = ""
    source: str = ""
    index: int = 0


class AIOverview(SerpModel):
    text_blocks: List[TextBlock] = Field(default_factory=list)
    references: List[Reference] = Field(default_factory=list)
    error: str = ""

    def is_empty(self) -> bool:
        return not self.text_blocks and not self.references


class SearchMetadata(SerpModel):
    """Continuation data returned in place of an inline overview."""

    page_token: str = Field(min_length=1)
    serpapi_link: str = ""


def decode(model: Type[ModelT], raw: Any) -> ModelT:
    """Validate a raw payload into `model`, raising `DecodeError` on mismatch."""
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise DecodeError(f"failed to decode {model.__name__}: {e.error_count()} validation error(s)") from e
