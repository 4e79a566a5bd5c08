"""
linkhub: command-line front end for the LinkHub API

Usage:
  linkhub list
  linkhub favourites --search news
  linkhub share example.com --title "Example" --tag News --tag Work
  linkhub edit <id> example.org --title "Renamed"
  linkhub delete <id>
  linkhub fav <id> | unfav <id>
  linkhub open <id>
  linkhub health

Every command loads both caches first, runs its action, then prints the
relevant view followed by any notifications. If the API cannot be reached the
command prints an error notification and exits with status 1.
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import Callable, List, Optional

import httpx

from linkhub.client.api import LinkService
from linkhub.client.state import LinkClient, LinkForm, View
from linkhub.client.views import render_view
from linkhub.config import settings

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linkhub", description="Personal link bookmarks")
    parser.add_argument("--api", default=settings.API_URL, help="API base URL")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="show the home view")
    fav_view = sub.add_parser("favourites", help="show favourites")
    fav_view.add_argument("--search", default="")

    for name in ("share", "edit"):
        p = sub.add_parser(name)
        if name == "edit":
            p.add_argument("id")
        p.add_argument("url")
        p.add_argument("--title", default="")
        p.add_argument("--tag", dest="tags", action="append", default=[])

    for name in ("delete", "fav", "unfav"):
        sub.add_parser(name).add_argument("id")

    open_p = sub.add_parser("open", help="count a click and open the link")
    open_p.add_argument("id")
    open_p.add_argument("--no-browser", action="store_true", help="print the URL instead")

    sub.add_parser("health")
    return parser


def _form(args) -> LinkForm:
    form = LinkForm(url=args.url, title=args.title)
    for tag in args.tags:
        form.add_custom_tag(tag)
    return form


async def run(
    argv: Optional[List[str]] = None,
    service: Optional[LinkService] = None,
    out: Callable[[str], None] = print,
) -> int:
    """Execute one CLI command. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    service = service or LinkService(base_url=args.api)
    opener = out if getattr(args, "no_browser", False) else None
    client = LinkClient(service, opener=opener) if opener else LinkClient(service)

    async with service:
        try:
            if args.command == "health":
                out(json.dumps(await service.health(), indent=2))
                return 0

            await client.load()
            if client.fetch_error is not None:
                raise client.fetch_error
            view = View.HOME
            search = ""

            if args.command == "favourites":
                view, search = View.FAVOURITES, args.search
            elif args.command == "share":
                await client.share_link(_form(args))
            elif args.command == "edit":
                await client.update_link(args.id, _form(args))
            elif args.command == "delete":
                await client.delete_link(args.id)
            elif args.command == "fav":
                await client.add_to_favourites(args.id)
                view = View.FAVOURITES
            elif args.command == "unfav":
                await client.remove_from_favourites(args.id)
                view = View.FAVOURITES
            elif args.command == "open":
                link = next((l for l in client.links if l["id"] == args.id), None)
                if link is None:
                    client.notify("error", "Link not found")
                else:
                    await client.open_link(link)

            client.select_view(view)
            out(render_view(client, search=search))
        except httpx.HTTPError as exc:
            log.debug("API request failed", exc_info=True)
            client.notify("error", f"Could not reach the LinkHub API at {service.base_url}: {exc}")

    errors = 0
    for note in client.drain_notifications():
        out(f"[{note.level}] {note.message}")
        errors += note.level == "error"
    return 1 if errors else 0


def main() -> None:
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
