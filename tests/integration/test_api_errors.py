"""
Error translation tests: every failure mode of the API and its status/body.
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from linkhub.config import settings
from main import create_app


@pytest.mark.parametrize("body", [{}, {"url": ""}, {"url": "   "}, {"title": "no url"}])
def test_create_missing_url_is_400(client, body):
    r = client.post("/api/links", json=body)
    assert r.status_code == 400
    assert r.json() == {"message": "URL is required"}
    assert client.get("/api/links").json() == []


def test_create_without_body_is_400(client):
    r = client.post("/api/links")
    assert r.status_code == 400
    assert r.json()["message"] == "URL is required"


def test_create_bad_url_shape(client):
    r = client.post("/api/links", json={"url": "not a url"})
    assert r.status_code == 400
    assert r.json() == {"message": "Validation Error", "errors": ["Please enter a valid URL"]}


def test_create_title_too_long(client):
    r = client.post("/api/links", json={"url": "a.com", "title": "x" * 201})
    assert r.status_code == 400
    assert r.json()["errors"] == ["Title cannot exceed 200 characters"]


def test_create_url_too_long(client):
    r = client.post("/api/links", json={"url": "a.com/" + "." * 100_000 + "!"})
    assert r.status_code == 400
    assert r.json()["errors"] == ["URL cannot exceed 2048 characters"]
    assert client.get("/api/links").json() == []


def test_wrong_json_types_are_400_not_422(client):
    r = client.post("/api/links", json={"url": "a.com", "tags": "not-a-list"})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation Error"
    assert body["errors"]


@pytest.mark.parametrize(
    "method,path,kwargs",
    [
        ("put", "/api/links/{id}", {"json": {"url": "a.com"}}),
        ("delete", "/api/links/{id}", {}),
        ("patch", "/api/links/{id}/favourite", {"json": {"isFavourite": True}}),
        ("patch", "/api/links/{id}/click", {}),
    ],
)
def test_invalid_and_missing_ids(client, method, path, kwargs):
    r = getattr(client, method)(path.format(id="not-a-valid-id"), **kwargs)
    assert r.status_code == 400
    assert r.json() == {"message": "Invalid link ID"}

    r = getattr(client, method)(path.format(id=uuid.uuid4()), **kwargs)
    assert r.status_code == 404
    assert r.json() == {"message": "Link not found"}


@pytest.mark.parametrize("spell", [str.upper, lambda i: f"urn:uuid:{i}"])
def test_alternate_id_spellings_reach_the_link(client, spell):
    link = client.post("/api/links", json={"url": "a.com"}).json()
    r = client.patch(f"/api/links/{spell(link['id'])}/click")
    assert r.status_code == 200
    assert r.json()["id"] == link["id"]
    assert r.json()["clickCount"] == 1


def test_update_nonexistent_leaves_store_unchanged(client):
    client.post("/api/links", json={"url": "a.com"})
    before = client.get("/api/links").json()
    r = client.put(f"/api/links/{uuid.uuid4()}", json={"url": "b.com"})
    assert r.status_code == 404
    assert client.get("/api/links").json() == before


def test_update_validation_error(client):
    link = client.post("/api/links", json={"url": "a.com"}).json()
    r = client.put(f"/api/links/{link['id']}", json={"url": "bad url"})
    assert r.status_code == 400
    assert r.json()["message"] == "Validation Error"


@pytest.mark.parametrize("method,path", [("get", "/api/nope"), ("get", "/"), ("post", "/api/health"), ("get", "/api/links/x/click")])
def test_unmatched_route(client, method, path):
    r = getattr(client, method)(path)
    assert r.status_code == 404
    assert r.json() == {"message": "Route not found"}


def _broken_client(storage, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("disk on fire")
    monkeypatch.setattr(storage, "list_links", boom)
    return TestClient(create_app(storage=storage), raise_server_exceptions=False)


def test_internal_error_redacted_in_production(storage, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "production")
    r = _broken_client(storage, monkeypatch).get("/api/links")
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error", "error": "Something went wrong"}


def test_internal_error_detail_in_development(storage, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "development")
    r = _broken_client(storage, monkeypatch).get("/api/links")
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error", "error": "disk on fire"}
