"""
Async HTTP wrapper around the LinkHub API.

Thin by intent: one method per endpoint, JSON in, JSON out. Non-2xx
responses raise `httpx.HTTPStatusError`; the caller decides what to show.

The underlying `httpx.AsyncClient` can be injected, which lets tests talk
to an in-process app through `httpx.ASGITransport`.
"""

from typing import Any, Dict, List, Optional

import httpx

from linkhub.config import settings

LinkData = Dict[str, Any]


class LinkService:
    def __init__(self, base_url: Optional[str] = None, http: Optional[httpx.AsyncClient] = None):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(headers={"Content-Type": "application/json"})

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "LinkService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        r = await self.http.request(method, f"{self.base_url}{path}", **kwargs)
        r.raise_for_status()
        return r.json()

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", "/health")

    async def get_links(self) -> List[LinkData]:
        return await self._request("GET", "/links")

    async def get_favourite_links(self) -> List[LinkData]:
        return await self._request("GET", "/links/favourites")

    async def create_link(self, link_data: LinkData) -> LinkData:
        return await self._request("POST", "/links", json=link_data)

    async def update_link(self, link_id: str, link_data: LinkData) -> LinkData:
        return await self._request("PUT", f"/links/{link_id}", json=link_data)

    async def delete_link(self, link_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/links/{link_id}")

    async def add_to_favourites(self, link_id: str) -> LinkData:
        return await self._request("PATCH", f"/links/{link_id}/favourite", json={"isFavourite": True})

    async def remove_from_favourites(self, link_id: str) -> LinkData:
        return await self._request("PATCH", f"/links/{link_id}/favourite", json={"isFavourite": False})

    async def record_click(self, link_id: str) -> LinkData:
        return await self._request("PATCH", f"/links/{link_id}/click")
