"""
LinkClient against the real app over httpx.ASGITransport.

Exercises the complete client loop: load, share, edit, favourite, open,
delete, and the error paths, with both caches refetched from the server.
"""

import asyncio
import uuid

from linkhub.client.state import LinkClient, LinkForm, Notification, View
from linkhub.client.views import RENDERERS, render_view


def test_full_client_session(make_service):
    opened = []

    async def scenario():
        service = make_service()
        client = LinkClient(service, opener=opened.append)
        await client.load()
        assert client.loading is False
        assert client.links == [] and client.favourite_links == []

        form = LinkForm(url="example.com", title="Example")
        form.add_tag("News")
        created = await client.share_link(form)
        assert created["url"] == "https://example.com"
        assert [l["id"] for l in client.links] == [created["id"]]

        await client.add_to_favourites(created["id"])
        assert [l["id"] for l in client.favourite_links] == [created["id"]]

        edit = LinkForm.from_link(client.links[0])
        edit.remove_tag("News")
        edit.title = "Renamed"
        await client.update_link(created["id"], edit)
        assert client.links[0]["title"] == "Renamed"
        assert client.links[0]["tags"] == []

        await client.open_link(client.links[0])
        assert opened == ["https://example.com"]
        assert client.links[0]["clickCount"] == 1
        assert client.favourite_links[0]["clickCount"] == 1

        await client.remove_from_favourites(created["id"])
        assert client.favourite_links == []

        assert await client.delete_link(created["id"]) is True
        assert client.links == []

        await service.http.aclose()
        return client.drain_notifications()

    notes = asyncio.run(scenario())
    assert [n.level for n in notes] == ["success"] * 5
    assert notes[0] == Notification("success", "Link shared successfully!")


def test_client_server_errors_notify_without_refresh(make_service):
    async def scenario():
        service = make_service()
        client = LinkClient(service)
        await client.share_link(LinkForm(url="a.com"))
        snapshot = list(client.links)

        await client.delete_link(str(uuid.uuid4()))
        await client.update_link("bad-id", LinkForm(url="b.com"))
        await client.share_link(LinkForm(url="not a url"))
        assert client.links == snapshot

        await service.http.aclose()
        return client.drain_notifications()[1:]

    notes = asyncio.run(scenario())
    assert notes == [
        Notification("error", "Failed to delete link"),
        Notification("error", "Failed to update link"),
        Notification("error", "Failed to share link"),
    ]


def test_render_views(make_service):
    async def scenario():
        service = make_service()
        client = LinkClient(service)
        for i in range(7):
            await client.share_link(LinkForm(url=f"site{i}.com", title=f"Site {i}", tags=["a", "b", "c", "d"]))
        await client.add_to_favourites(client.links[-1]["id"])
        await service.http.aclose()
        return client

    client = asyncio.run(scenario())

    home = render_view(client, View.HOME)
    assert "Featured Link" in home and "Site 6" in home
    assert "Recent Links" in home
    assert "Site 1" in home and "Site 0" not in home
    assert "+1" in home

    favs = render_view(client, View.FAVOURITES)
    assert "Site 0" in favs
    assert "No favourites match" in render_view(client, View.FAVOURITES, search="zzz")

    assert "Suggested tags" in render_view(client, View.SHARE)


def test_every_view_has_a_renderer():
    assert set(RENDERERS) == set(View)


def test_home_shows_loading_before_first_fetch(make_service):
    client = LinkClient(service=None)
    assert render_view(client, View.HOME) == "Loading..."


def test_render_view_defaults_to_active_view():
    client = LinkClient(service=None)
    client.loading = False
    client.select_view(View.SHARE)
    assert render_view(client) == render_view(client, View.SHARE)
