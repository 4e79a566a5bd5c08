"""
Input normalization and validation helpers shared by the service and the
client.

Rules:
    - url:   trimmed; "https://" prepended unless it already starts with
             "http://" or "https://". At most 2048 characters; longer
             input is rejected before the shape check runs.
    - title: trimmed; None becomes "". At most 200 characters.
    - tags:  each trimmed, blank entries dropped, order and duplicates kept.
             Each at most 50 characters.

`URL_PATTERN` is a loose, purely syntactic shape check:
    [scheme] host-labels "." suffix(2-6 letters) [path] [?query | #fragment]
It does not resolve or fetch anything and will reject some valid
internationalized hosts.
"""

import re
from typing import Any, Iterable, List, Optional

TITLE_MAX_LENGTH = 200
TAG_MAX_LENGTH = 50
URL_MAX_LENGTH = 2048

URL_PATTERN = re.compile(
    r"^(https?://)?"          # optional scheme
    r"((?:[\da-z-]+\.)+)"     # host labels, each ending in a dot
    r"([a-z]{2,6})"           # suffix
    r"([/\w .-]*)"            # path
    r"([?#]\S*)?$",           # query / fragment
    re.IGNORECASE,
)


def normalize_url(url: str) -> str:
    """Trim and make sure the URL carries an http(s) scheme."""
    url = url.strip()
    if url and not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def clean_title(title: Optional[str]) -> str:
    return (title or "").strip()


def clean_tags(tags: Optional[Iterable[str]]) -> List[str]:
    if not tags:
        return []
    return [tag.strip() for tag in tags if tag and tag.strip()]


def is_valid_url(url: str) -> bool:
    return bool(URL_PATTERN.match(url))


def validation_errors(url: str, title: str, tags: List[str]) -> List[str]:
    """Return human-readable messages for every rule the normalized fields break."""
    errors: List[str] = []
    if not url:
        errors.append("URL is required")
    elif len(url) > URL_MAX_LENGTH:
        errors.append(f"URL cannot exceed {URL_MAX_LENGTH} characters")
    elif not is_valid_url(url):
        errors.append("Please enter a valid URL")
    if len(title) > TITLE_MAX_LENGTH:
        errors.append(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")
    if any(len(tag) > TAG_MAX_LENGTH for tag in tags):
        errors.append(f"Tag cannot exceed {TAG_MAX_LENGTH} characters")
    return errors


def coerce_bool(value: Any) -> bool:
    """Standard truthiness; missing (None) is False."""
    return bool(value)
