"""
Domain model for LinkHub.

`Link` is the only entity. Storage backends build and return `Link`
instances; the API layer serializes them through `schemas.LinkOut`.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import List


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Link:
    """A bookmarked URL and its metadata."""

    id: str
    url: str
    title: str = ""
    tags: List[str] = field(default_factory=list)
    is_favourite: bool = False
    click_count: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def copy(self) -> "Link":
        """Detached copy (own tags list) so callers can't mutate store state."""
        return replace(self, tags=list(self.tags))
