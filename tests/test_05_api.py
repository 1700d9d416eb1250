#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for the JSON API (/api/v1/pages, /api/v1/search, /api/health)."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from minwiki.main import STORE_FAILED_MESSAGE
from tests.conftest import save_page


# ── Pages ─────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_put_creates_page(client):
    resp = await client.put("/api/v1/pages/Test", json={"body": "Hello"})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["title"] == "Test"
    assert data["body"] == "Hello"
    assert data["id"] > 0


@pytest.mark.asyncio
async def test_put_twice_keeps_id(client):
    first = (await client.put("/api/v1/pages/Test", json={"body": "one"})).json()
    second = (await client.put("/api/v1/pages/Test", json={"body": "two"})).json()
    assert second["id"] == first["id"]
    assert second["body"] == "two"


@pytest.mark.asyncio
async def test_get_page(client):
    await save_page(client, "Test", "content")
    resp = await client.get("/api/v1/pages/Test")
    assert resp.status_code == 200
    assert resp.json()["body"] == "content"


@pytest.mark.asyncio
async def test_get_missing_page_is_404(client):
    resp = await client.get("/api/v1/pages/Missing")
    assert resp.status_code == 404
    assert "Missing" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_invalid_title_is_rejected(client):
    resp = await client.put("/api/v1/pages/bad-title", json={"body": "x"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_titles(client):
    await save_page(client, "Beta", "")
    await save_page(client, "Alpha", "")
    resp = await client.get("/api/v1/pages")
    assert resp.status_code == 200
    assert resp.json() == ["Alpha", "Beta"]


# ── Search ────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_api_search_returns_hits_with_snippets(client):
    await save_page(client, "Volcanoes", "The word lava appears here.")
    await save_page(client, "Oceans", "Water, mostly.")
    resp = await client.get("/api/v1/search", params={"q": "lava"})
    assert resp.status_code == 200
    hits = resp.json()
    assert [h["title"] for h in hits] == ["Volcanoes"]
    assert "lava" in hits[0]["snippet"]


@pytest.mark.asyncio
async def test_api_search_without_query_returns_all(client):
    await save_page(client, "One", "")
    await save_page(client, "Two", "")
    resp = await client.get("/api/v1/search")
    assert sorted(h["title"] for h in resp.json()) == ["One", "Two"]


@pytest.mark.asyncio
async def test_api_search_store_failure_is_500(broken_client):
    resp = await broken_client.get("/api/v1/search", params={"q": "x"})
    assert resp.status_code == 500
    assert resp.json() == {"detail": STORE_FAILED_MESSAGE}
    assert "pages" not in resp.text


@pytest.mark.asyncio
async def test_unexpected_error_is_json_500(crashing_client):
    resp = await crashing_client.get("/api/v1/pages")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error"}


# ── Misc ──────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_health_reports_page_count(client):
    await save_page(client, "Test", "x")
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["pages"] == 1


@pytest.mark.asyncio
async def test_unknown_api_path_is_json_404(client):
    resp = await client.get("/api/v1/unknown")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Not found"}


# -----------------------------------------------------------------------------
