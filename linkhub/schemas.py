"""
Pydantic request/response models for the LinkHub API.

Request bodies are deliberately loose (everything optional) so that the
manager, not FastAPI, decides what a missing `url` means. Wire names are
camelCase to match the JSON the client expects.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from .models import Link


class LinkIn(BaseModel):
    """Body for POST /links and PUT /links/{id}."""
    url: Optional[str] = None
    title: Optional[str] = None
    tags: Optional[List[str]] = None


class FavouriteIn(BaseModel):
    """Body for PATCH /links/{id}/favourite. Any JSON value; coerced to bool."""
    is_favourite: Any = Field(None, alias="isFavourite")


class LinkOut(BaseModel):
    id: str
    url: str
    title: str
    tags: List[str]
    is_favourite: bool = Field(alias="isFavourite")
    click_count: int = Field(alias="clickCount")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_link(cls, link: Link) -> "LinkOut":
        return cls(
            id=link.id,
            url=link.url,
            title=link.title,
            tags=link.tags,
            isFavourite=link.is_favourite,
            clickCount=link.click_count,
            createdAt=link.created_at,
            updatedAt=link.updated_at,
        )


class MessageOut(BaseModel):
    message: str


class HealthOut(BaseModel):
    message: str
    timestamp: str
    database: str
