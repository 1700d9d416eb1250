#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for the HTML UI: routing, redirects, rendering and error pages."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from tests.conftest import save_page


# ── Home ──────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_home_redirects_to_front_page(client):
    resp = await client.get("/")
    assert resp.status_code == 302
    assert resp.headers["location"] == "/view/FrontPage"


# ── view ──────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_view_unsaved_redirects_to_edit(client):
    resp = await client.get("/view/Test")
    assert resp.status_code == 302
    assert resp.headers["location"] == "/edit/Test"


@pytest.mark.asyncio
async def test_view_unsaved_does_not_create_page(client, store):
    await client.get("/view/Test")
    assert await store.count() == 0


@pytest.mark.asyncio
async def test_save_then_view(client):
    resp = await client.post("/save/Test", data={"body": "Hello"})
    assert resp.status_code == 302
    assert resp.headers["location"] == "/view/Test"

    resp = await client.get("/view/Test")
    assert resp.status_code == 200
    assert "Hello" in resp.text
    assert "/edit/Test" in resp.text


@pytest.mark.asyncio
async def test_view_follows_redirect_to_edit_form(client):
    resp = await client.get("/view/Fresh", follow_redirects=True)
    assert resp.status_code == 200
    assert 'action="/save/Fresh"' in resp.text


@pytest.mark.asyncio
async def test_view_escapes_body(client):
    await save_page(client, "Markup", "<script>alert(1)</script>")
    resp = await client.get("/view/Markup")
    assert resp.status_code == 200
    assert "<script>alert(1)</script>" not in resp.text
    assert "&lt;script&gt;" in resp.text


# ── edit ──────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_edit_unsaved_shows_empty_form(client):
    resp = await client.get("/edit/NewPage")
    assert resp.status_code == 200
    assert 'action="/save/NewPage"' in resp.text
    assert "Editing NewPage" in resp.text


@pytest.mark.asyncio
async def test_edit_saved_page_prefills_textarea(client):
    await save_page(client, "Test", "existing text")
    resp = await client.get("/edit/Test")
    assert resp.status_code == 200
    assert "existing text" in resp.text


# ── save ──────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_save_twice_keeps_latest(client, store):
    await save_page(client, "Test", "first")
    await save_page(client, "Test", "second")
    resp = await client.get("/view/Test")
    assert "second" in resp.text
    assert "first" not in resp.text
    assert await store.count() == 1


@pytest.mark.asyncio
async def test_save_via_query_string(client, store):
    resp = await client.get("/save/Test", params={"body": "from query"})
    assert resp.status_code == 302
    assert (await store.load("Test")).body == b"from query"


# ── search ────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_search_lists_matches(client):
    await save_page(client, "PythonGuide", "Learn Python programming.")
    await save_page(client, "JavaGuide", "Learn Java programming.")

    resp = await client.post("/search/results", data={"body": "Python"})
    assert resp.status_code == 200
    assert 'href="/view/PythonGuide"' in resp.text
    assert "JavaGuide" not in resp.text


@pytest.mark.asyncio
async def test_search_no_results(client):
    resp = await client.post("/search/results", data={"body": "xyzzy"})
    assert resp.status_code == 200
    assert "No results found" in resp.text


@pytest.mark.asyncio
async def test_search_empty_lists_everything(client):
    await save_page(client, "One", "1")
    await save_page(client, "Two", "2")
    resp = await client.post("/search/results", data={"body": ""})
    assert resp.status_code == 200
    assert 'href="/view/One"' in resp.text
    assert 'href="/view/Two"' in resp.text


# ── Unmatched paths ───────────────────────────────────────────────────────────

@pytest.mark.asyncio
@pytest.mark.parametrize("path", [
    "/view/Abc%20123",
    "/foo/Abc",
    "/view/",
    "/view/Abc/extra",
    "/view/Abc-1",
    "/VIEW/Abc",
])
async def test_unmatched_paths_are_404(client, path):
    resp = await client.get(path)
    assert resp.status_code == 404
    assert "could not be found" in resp.text


@pytest.mark.asyncio
async def test_unmatched_post_is_404(client, store):
    resp = await client.post("/save/Bad-Title", data={"body": "x"})
    assert resp.status_code == 404
    assert await store.count() == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/view/Abc%0A", "/edit/Abc%0A", "/view/Abc%0Aextra"])
async def test_trailing_newline_is_not_trimmed(client, path):
    await save_page(client, "Abc", "stored body")
    resp = await client.get(path)
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("text/html")
    assert "could not be found" in resp.text
    assert "stored body" not in resp.text


@pytest.mark.asyncio
async def test_save_with_trailing_newline_writes_nothing(client, store):
    resp = await client.post("/save/New%0A", data={"body": "x"})
    assert resp.status_code == 404
    assert await store.count() == 0


# ── Store failures ────────────────────────────────────────────────────────────

@pytest.mark.asyncio
@pytest.mark.parametrize("method, path", [
    ("GET", "/view/Test"),
    ("GET", "/edit/Test"),
    ("POST", "/save/Test"),
])
async def test_store_failure_is_500(broken_client, method, path):
    resp = await broken_client.request(method, path, data={"body": "x"} if method == "POST" else None)
    assert resp.status_code == 500
    assert "Error 500" in resp.text
    assert "location" not in resp.headers


@pytest.mark.asyncio
async def test_search_store_failure_is_visible(broken_client):
    resp = await broken_client.post("/search/results", data={"body": "x"})
    assert resp.status_code == 500
    assert "Search is unavailable" in resp.text
    assert "No results found" not in resp.text


@pytest.mark.asyncio
async def test_store_failure_page_hides_driver_detail(broken_client):
    resp = await broken_client.get("/view/Test")
    assert resp.status_code == 500
    assert "could not complete the request" in resp.text
    assert "no such table" not in resp.text
    assert "SELECT" not in resp.text


@pytest.mark.asyncio
async def test_unexpected_error_renders_html_500(crashing_client):
    resp = await crashing_client.get("/view/Test")
    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("text/html")
    assert "Error 500" in resp.text
    assert "boom" not in resp.text


# -----------------------------------------------------------------------------
