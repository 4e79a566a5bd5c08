"""
Client-side state and data-refresh orchestration for LinkHub.

Responsibilities:
    - Hold two caches, "all links" and "favourite links", each replaced
      wholesale by a full fetch (never patched locally)
    - Run user actions (share, edit, delete, favourite, open) against the API
      and refetch both caches after every successful mutation
    - Collect toast-style notifications for the front end to display

Failure policy:
    A failed mutation pushes an error notification and leaves both caches
    exactly as they were; no refresh is issued. A failed fetch logs the
    error and keeps the previous contents of that cache. The last fetch
    error is kept on `fetch_error` so a caller can tell "empty" from
    "unreachable".
"""

import asyncio
import enum
import logging
import webbrowser
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from linkhub.client.api import LinkData, LinkService
from linkhub.manager.normalize import normalize_url

log = logging.getLogger(__name__)

PREDEFINED_TAGS = [
    "Entertainment", "News", "Technology", "Sports", "Music", "Movies",
    "Education", "Work", "Gaming", "Shopping", "Social", "Travel",
]

RECENT_LIMIT = 5


class View(enum.Enum):
    """The three screens of the client. Dispatch over these must be exhaustive."""
    HOME = "home"
    FAVOURITES = "favourites"
    SHARE = "share"


@dataclass(frozen=True)
class Notification:
    level: str  # "success" | "error"
    message: str


@dataclass
class LinkForm:
    """Draft of a link being shared or edited."""
    url: str = ""
    title: str = ""
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_link(cls, link: LinkData) -> "LinkForm":
        return cls(url=link.get("url", ""), title=link.get("title") or "", tags=list(link.get("tags") or []))

    def add_tag(self, tag: str) -> None:
        if tag not in self.tags:
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> None:
        self.tags = [t for t in self.tags if t != tag]

    def add_custom_tag(self, tag: str) -> None:
        tag = tag.strip()
        if tag:
            self.add_tag(tag)

    def reset(self) -> None:
        self.url, self.title, self.tags = "", "", []

    def to_payload(self) -> Dict[str, Any]:
        return {"url": self.url, "title": self.title, "tags": list(self.tags)}


class LinkClient:
    """
    In-memory view model over `LinkService`.

    Args:
        service: API wrapper used for every call.
        opener: callable receiving the URL to open; defaults to the system
            browser.
    """

    def __init__(self, service: LinkService, opener: Callable[[str], Any] = webbrowser.open):
        self.service = service
        self.opener = opener
        self.links: List[LinkData] = []
        self.favourite_links: List[LinkData] = []
        self.loading = True
        self.active_view = View.HOME
        self.notifications: List[Notification] = []
        self.fetch_error: Optional[httpx.HTTPError] = None

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    async def fetch_links(self) -> None:
        try:
            self.links = await self.service.get_links()
        except httpx.HTTPError as exc:
            log.error("Error fetching links: %s", exc)
            self.fetch_error = exc
        finally:
            self.loading = False

    async def fetch_favourites(self) -> None:
        try:
            self.favourite_links = await self.service.get_favourite_links()
        except httpx.HTTPError as exc:
            log.error("Error fetching favourites: %s", exc)
            self.fetch_error = exc

    async def refresh(self) -> None:
        """Refetch both caches in full."""
        self.fetch_error = None
        await asyncio.gather(self.fetch_links(), self.fetch_favourites())

    load = refresh

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def notify(self, level: str, message: str) -> None:
        self.notifications.append(Notification(level, message))

    def drain_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    async def _mutate(
        self,
        call: Awaitable[Any],
        success: Optional[str],
        failure: str,
    ) -> Optional[Any]:
        try:
            result = await call
        except httpx.HTTPError as exc:
            log.warning("%s: %s", failure, exc)
            self.notify("error", failure)
            return None
        if success:
            self.notify("success", success)
        await self.refresh()
        return result

    async def share_link(self, form: LinkForm) -> Optional[LinkData]:
        if not form.url.strip():
            self.notify("error", "Please enter a URL")
            return None
        created = await self._mutate(
            self.service.create_link(form.to_payload()),
            "Link shared successfully!",
            "Failed to share link",
        )
        if created is not None:
            form.reset()
        return created

    async def update_link(self, link_id: str, form: LinkForm) -> Optional[LinkData]:
        return await self._mutate(
            self.service.update_link(link_id, form.to_payload()),
            "Link updated successfully!",
            "Failed to update link",
        )

    async def delete_link(self, link_id: str) -> bool:
        result = await self._mutate(
            self.service.delete_link(link_id),
            "Link deleted successfully!",
            "Failed to delete link",
        )
        return result is not None

    async def add_to_favourites(self, link_id: str) -> Optional[LinkData]:
        return await self._mutate(
            self.service.add_to_favourites(link_id),
            "Added to favourites!",
            "Failed to add to favourites",
        )

    async def remove_from_favourites(self, link_id: str) -> Optional[LinkData]:
        return await self._mutate(
            self.service.remove_from_favourites(link_id),
            "Removed from favourites!",
            "Failed to remove from favourites",
        )

    async def open_link(self, link: LinkData) -> str:
        """
        Count a click, then open the link. The URL is re-normalized here
        because cached records may predate server-side normalization.
        The link opens even if the click could not be recorded.
        """
        await self._mutate(self.service.record_click(link["id"]), None, "Failed to record click")
        url = normalize_url(link["url"])
        self.opener(url)
        return url

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    def select_view(self, view: View) -> None:
        self.active_view = View(view)

    @property
    def featured_link(self) -> Optional[LinkData]:
        return self.links[0] if self.links else None

    @property
    def recent_links(self) -> List[LinkData]:
        return self.links[1:1 + RECENT_LIMIT]

    def search_favourites(self, term: str = "") -> List[LinkData]:
        term = term.lower()
        return [
            link for link in self.favourite_links
            if term in (link.get("title") or "").lower()
            or term in link["url"].lower()
            or any(term in tag.lower() for tag in link.get("tags") or [])
        ]
