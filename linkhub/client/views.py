"""
Plain-text rendering of the three client views.

`RENDERERS` maps every `View` member to its renderer; `render_view` looks the
active view up there and refuses members that have no renderer.
"""

from typing import Callable, Dict, List, Optional

from linkhub.client.state import PREDEFINED_TAGS, LinkClient, View
from linkhub.client.api import LinkData

MAX_TAGS_SHOWN = 3


def _format_link(link: LinkData, max_tags: int = 0) -> str:
    title = link.get("title") or link["url"]
    tags = list(link.get("tags") or [])
    extra = ""
    if max_tags and len(tags) > max_tags:
        extra = f" +{len(tags) - max_tags}"
        tags = tags[:max_tags]
    star = "*" if link.get("isFavourite") else " "
    line = f"{star} [{link['id']}] {title}\n    {link['url']}  ({link.get('clickCount', 0)} clicks)"
    if tags:
        line += "\n    #" + " #".join(tags) + extra
    return line


def render_home(client: LinkClient, search: str = "") -> str:
    if client.loading:
        return "Loading..."
    out: List[str] = ["Welcome to LinkHub", "Your personal link sharing hub", ""]
    featured = client.featured_link
    if featured is None:
        out.append("No links yet. Share one to get started.")
        return "\n".join(out)
    out += ["Featured Link", _format_link(featured), ""]
    if client.recent_links:
        out.append("Recent Links")
        out += [_format_link(link, MAX_TAGS_SHOWN) for link in client.recent_links]
    return "\n".join(out)


def render_favourites(client: LinkClient, search: str = "") -> str:
    out: List[str] = ["Favourites", "Your saved links collection", ""]
    matches = client.search_favourites(search)
    if not matches:
        out.append("No favourites match your search." if search else "No favourites yet.")
    out += [_format_link(link) for link in matches]
    return "\n".join(out)


def render_share(client: LinkClient, search: str = "") -> str:
    return "\n".join([
        "Share Link",
        "Add a new link to your collection",
        "",
        "Suggested tags: " + ", ".join(PREDEFINED_TAGS),
    ])


RENDERERS: Dict[View, Callable[..., str]] = {
    View.HOME: render_home,
    View.FAVOURITES: render_favourites,
    View.SHARE: render_share,
}


def render_view(client: LinkClient, view: Optional[View] = None, search: str = "") -> str:
    view = client.active_view if view is None else view
    try:
        renderer = RENDERERS[view]
    except KeyError:
        raise ValueError(f"No renderer for view {view!r}") from None
    return renderer(client, search)
