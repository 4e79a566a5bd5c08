"""
Base storage interface for LinkHub.

Purpose:
    Define a small, stable contract that storage backends (in-memory,
    PostgreSQL) implement so the manager and API never care where links
    live.

Contract notes:
    - Identifiers are UUID strings generated by the store on insert.
    - Methods taking an id return None/False when the id is unknown; the
      manager turns that into NotFoundError.
    - `increment_click` must be atomic per id. Backends use their own
      primitive (SQL single-statement UPDATE, a store-owned lock); callers
      never read-modify-write.

Testing & Coverage:
    Abstract methods are annotated with `# pragma: no cover`.
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import Link


class BaseStorage(ABC):
    """Abstract base class for link storage backends."""

    @staticmethod
    def canonical_id(link_id: str) -> Optional[str]:
        """
        Return `link_id` in the form this store issues (lower-case, hyphenated
        UUID), or None if it is not a UUID at all. Upper-case, `urn:uuid:`,
        braced and unhyphenated spellings map to the same canonical id.
        """
        try:
            return str(uuid.UUID(str(link_id)))
        except ValueError:
            return None

    @classmethod
    def is_valid_id(cls, link_id: str) -> bool:
        return cls.canonical_id(link_id) is not None

    def connect(self) -> None:
        """Open/verify the backend. Called once at application startup."""

    def close(self) -> None:
        """Release backend resources. Called once at shutdown."""

    @abstractmethod  # pragma: no cover
    def ping(self) -> bool:
        """Return True if the backend is reachable."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def insert_link(self, url: str, title: str, tags: List[str]) -> Link:
        """
        Persist a new link with a fresh id, `is_favourite=False`,
        `click_count=0` and both timestamps set to now.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def list_links(self, favourites_only: bool = False) -> List[Link]:
        """Return links newest first, optionally only favourites."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def get_link(self, link_id: str) -> Optional[Link]:
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def replace_link(self, link_id: str, url: str, title: str, tags: List[str]) -> Optional[Link]:
        """Overwrite url/title/tags in one step; None if the id is unknown."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def delete_link(self, link_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def set_favourite(self, link_id: str, is_favourite: bool) -> Optional[Link]:
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def increment_click(self, link_id: str) -> Optional[Link]:
        """Atomically add 1 to `click_count`; None if the id is unknown."""
        raise NotImplementedError
