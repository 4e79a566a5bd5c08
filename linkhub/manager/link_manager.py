"""
LinkManager module for LinkHub.

Responsibilities:
    - Normalize and validate link input (url, title, tags)
    - Enforce identifier shape and existence rules
    - Interface with the injected storage backend

Design notes:
    - Storage is an injected dependency; the manager keeps no state of its own.
    - Update is a full replace of title/tags: fields the caller omits are reset
      to their empty defaults. Only `url` falls back to the stored value.
    - Click increments are delegated to the store's atomic primitive; the
      manager never reads the counter and writes it back.
"""

import logging
from typing import Any, List, Optional

from ..errors import InvalidIdentifier, NotFoundError, ValidationError
from ..models import Link
from ..storage.base import BaseStorage
from .normalize import clean_tags, clean_title, coerce_bool, normalize_url, validation_errors

log = logging.getLogger(__name__)

DELETED_MESSAGE = "Link deleted successfully"


class LinkManager:
    """Coordinates validation and persistence for link records."""

    def __init__(self, storage: BaseStorage):
        self.storage = storage

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------
    def _check_id(self, link_id: str) -> str:
        """Return the canonical form of `link_id` or raise InvalidIdentifier."""
        canonical = self.storage.canonical_id(link_id)
        if canonical is None:
            raise InvalidIdentifier()
        return canonical

    @staticmethod
    def _validate(url: str, title: str, tags: List[str]) -> None:
        errors = validation_errors(url, title, tags)
        if errors == ["URL is required"]:
            raise ValidationError("URL is required")
        if errors:
            raise ValidationError("Validation Error", errors=errors)

    # ---------------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------------
    def list_links(self) -> List[Link]:
        return self.storage.list_links()

    def list_favourites(self) -> List[Link]:
        return self.storage.list_links(favourites_only=True)

    # ---------------------------------------------------------------------
    # Mutations
    # ---------------------------------------------------------------------
    def create_link(
        self,
        url: Optional[str],
        title: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Link:
        """
        Create a link after normalizing its fields.

        Raises:
            ValidationError: url missing/blank, url shape rejected, or a
                title/tag length limit exceeded. Nothing is persisted.
        """
        if not url or not url.strip():
            raise ValidationError("URL is required")

        url = normalize_url(url)
        title = clean_title(title)
        tags = clean_tags(tags)
        self._validate(url, title, tags)

        link = self.storage.insert_link(url, title, tags)
        log.info("Created link %s -> %s", link.id, link.url)
        return link

    def update_link(
        self,
        link_id: str,
        url: Optional[str] = None,
        title: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Link:
        """
        Replace url/title/tags of an existing link.

        `url=None` keeps the stored url; a provided url (even blank) is
        normalized and validated. Omitted title/tags become ""/[].

        Raises:
            InvalidIdentifier, NotFoundError, ValidationError
        """
        link_id = self._check_id(link_id)
        existing = self.storage.get_link(link_id)
        if existing is None:
            raise NotFoundError()

        url = existing.url if url is None else normalize_url(url)
        title = clean_title(title)
        tags = clean_tags(tags)
        self._validate(url, title, tags)

        updated = self.storage.replace_link(link_id, url, title, tags)
        if updated is None:
            # Deleted between the lookup and the write.
            raise NotFoundError()
        log.info("Updated link %s", link_id)
        return updated

    def delete_link(self, link_id: str) -> str:
        """Remove a link permanently and return a confirmation message."""
        link_id = self._check_id(link_id)
        if not self.storage.delete_link(link_id):
            raise NotFoundError()
        log.info("Deleted link %s", link_id)
        return DELETED_MESSAGE

    def set_favourite(self, link_id: str, value: Any) -> Link:
        """Set `is_favourite` to the truthiness of `value`."""
        link_id = self._check_id(link_id)
        link = self.storage.set_favourite(link_id, coerce_bool(value))
        if link is None:
            raise NotFoundError()
        log.info("Link %s favourite=%s", link_id, link.is_favourite)
        return link

    def record_click(self, link_id: str) -> Link:
        """Atomically bump the click counter by one."""
        link_id = self._check_id(link_id)
        link = self.storage.increment_click(link_id)
        if link is None:
            raise NotFoundError()
        log.debug("Link %s clicked (%d)", link_id, link.click_count)
        return link
