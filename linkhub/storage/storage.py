"""
Storage module for LinkHub (in-memory implementation).

Responsibilities:
    - Hold link records keyed by id
    - Hand out copies so callers cannot mutate stored state
    - Serialize writes with a store-owned lock (the in-memory stand-in for
      a database's single-row atomic update)

Design:
    - Reference implementation of the BaseStorage contract, used by tests
      and by `LINKHUB_STORAGE_BACKEND=memory` for local development.
    - Ordering is `created_at` descending; an insertion counter breaks ties
      so links created within the same clock tick still list newest first.
"""

import itertools
import threading
import uuid
from typing import Dict, List, Optional

from ..models import Link, utcnow
from .base import BaseStorage


class Storage(BaseStorage):
    def __init__(self):
        """
        Initialize an empty store.

        Internal schema:
            self.links = {link_id: Link}
            self._order = {link_id: insertion sequence number}
        """
        self.links: Dict[str, Link] = {}
        self._order: Dict[str, int] = {}
        self._seq = itertools.count()
        self._lock = threading.Lock()

    def ping(self) -> bool:
        return True

    def insert_link(self, url: str, title: str, tags: List[str]) -> Link:
        now = utcnow()
        link = Link(
            id=str(uuid.uuid4()),
            url=url,
            title=title,
            tags=list(tags),
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self.links[link.id] = link
            self._order[link.id] = next(self._seq)
        return link.copy()

    def list_links(self, favourites_only: bool = False) -> List[Link]:
        with self._lock:
            rows = [
                link for link in self.links.values()
                if link.is_favourite or not favourites_only
            ]
            rows.sort(key=lambda l: (l.created_at, self._order[l.id]), reverse=True)
            return [link.copy() for link in rows]

    def get_link(self, link_id: str) -> Optional[Link]:
        with self._lock:
            link = self.links.get(link_id)
            return link.copy() if link else None

    def replace_link(self, link_id: str, url: str, title: str, tags: List[str]) -> Optional[Link]:
        with self._lock:
            link = self.links.get(link_id)
            if link is None:
                return None
            link.url = url
            link.title = title
            link.tags = list(tags)
            link.updated_at = utcnow()
            return link.copy()

    def delete_link(self, link_id: str) -> bool:
        with self._lock:
            if self.links.pop(link_id, None) is None:
                return False
            self._order.pop(link_id, None)
            return True

    def set_favourite(self, link_id: str, is_favourite: bool) -> Optional[Link]:
        with self._lock:
            link = self.links.get(link_id)
            if link is None:
                return None
            link.is_favourite = is_favourite
            link.updated_at = utcnow()
            return link.copy()

    def increment_click(self, link_id: str) -> Optional[Link]:
        with self._lock:
            link = self.links.get(link_id)
            if link is None:
                return None
            link.click_count += 1
            link.updated_at = utcnow()
            return link.copy()
