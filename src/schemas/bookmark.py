"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from core.config import get_settings

_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def validate_absolute_url(url: str) -> str:
    """
    Validate that a URL is absolute and within the length limit.

    The URL is returned as submitted (minus surrounding whitespace); parsing is
    only used for validation so the stored value is not normalized.

    Raises:
        ValueError: If the URL is empty, relative, or too long.
    """
    url = url.strip()
    if not url:
        raise ValueError("URL cannot be empty")

    settings = get_settings()
    if len(url) > settings.max_url_length:
        raise ValueError(
            f"URL exceeds maximum length of {settings.max_url_length:,} characters "
            f"(got {len(url):,} characters).",
        )

    # Hostless schemes such as file: and mailto: are absolute too
    try:
        _url_adapter.validate_python(url)
    except ValidationError as e:
        raise ValueError(f"Invalid URL: '{url}'") from e
    return url


def validate_title(title: str) -> str:
    """
    Validate that a title is non-blank and doesn't exceed maximum length.

    The title is returned exactly as submitted; whitespace is only ignored when
    deciding whether it is blank.
    """
    if not title.strip():
        raise ValueError("Title cannot be empty")

    settings = get_settings()
    if len(title) > settings.max_title_length:
        raise ValueError(
            f"Title exceeds maximum length of {settings.max_title_length:,} characters "
            f"(got {len(title):,} characters).",
        )
    return title


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    url: str
    title: str

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        """Validate URL is absolute."""
        return validate_absolute_url(v)

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        """Validate title is present."""
        return validate_title(v)


class BookmarkResponse(BaseModel):
    """
    Schema for bookmark responses.

    Serialized with camelCase keys: {id, url, title, userId, createdAt}.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: UUID
    url: str
    title: str
    user_id: str
    created_at: datetime


class DeleteBookmarkResponse(BaseModel):
    """Acknowledgment returned after a bookmark is deleted."""

    success: bool = True
