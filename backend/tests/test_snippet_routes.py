"""
Snippetbox Backend — Home & Snippet Route Tests
=================================================

What:  HTTP-level tests for GET /, GET /snippet and POST /snippet/create.
How:   Requests go through the full middleware chain via HTTPX + ASGITransport.

What we test:
    ✅ Home page renders from the template cache
    ✅ Unregistered paths → 404 with a plain-text body
    ✅ Snippet id parsing: positive integers echoed, everything else 404
    ✅ Create endpoint: POST accepted, any other method 405 + Allow: POST
    ✅ Security and request-id headers on normal and error responses
"""

from datetime import datetime, timezone

import pytest

from snippetbox.middleware.request_id import choose_request_id


class TestHome:

    @pytest.mark.asyncio
    async def test_home_renders_page(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Latest Snippets" in response.text
        assert str(datetime.now(timezone.utc).year) in response.text

    @pytest.mark.asyncio
    async def test_home_answers_head(self, test_client):
        response = await test_client.head("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path",
        [
            "/foo",
            "/home",
            "/snippets",
            "/user/unknown",
            "/snippet/create/x",
            "/snippet/",
            "/snippet/create/",
            "/user/login/",
            "/health/",
        ],
    )
    async def test_unknown_paths_are_not_found(self, test_client, path):
        response = await test_client.get(path)
        assert response.status_code == 404
        assert response.text == "Not Found\n"
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_static_assets_are_served(self, test_client):
        response = await test_client.get("/static/css/main.css")
        assert response.status_code == 200
        assert "text/css" in response.headers["content-type"]


class TestShowSnippet:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1", 1),
            ("42", 42),
            ("+7", 7),
            ("007", 7),
            ("9223372036854775807", 9223372036854775807),
        ],
    )
    async def test_positive_ids_are_echoed(self, test_client, raw, expected):
        response = await test_client.get("/snippet", params={"id": raw})
        assert response.status_code == 200
        assert response.text == f"display the snippet id {expected} ..."

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw",
        ["0", "-1", "-42", "abc", "", "1.5", " 1", "1_000", "0x10", "٣", "9223372036854775808"],
    )
    async def test_invalid_ids_are_not_found(self, test_client, raw):
        response = await test_client.get("/snippet", params={"id": raw})
        assert response.status_code == 404
        assert response.text == "Not Found\n"

    @pytest.mark.asyncio
    async def test_missing_id_is_not_found(self, test_client):
        response = await test_client.get("/snippet")
        assert response.status_code == 404


class TestCreateSnippet:

    @pytest.mark.asyncio
    async def test_post_is_accepted(self, test_client):
        response = await test_client.post("/snippet/create")
        assert response.status_code == 200
        assert response.text == "Create from Snippet!"

    @pytest.mark.asyncio
    async def test_trailing_slash_is_not_the_create_route(self, test_client):
        response = await test_client.post("/snippet/create/")
        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "OPTIONS"])
    async def test_other_methods_are_not_allowed(self, test_client, method):
        response = await test_client.request(method, "/snippet/create")
        assert response.status_code == 405
        assert response.headers["Allow"] == "POST"
        assert response.text == "Method Not Allowed\n"


class TestResponseHeaders:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/", "/nope"])
    async def test_secure_headers_present(self, test_client, path):
        response = await test_client.get(path)
        assert response.headers["X-Frame-Options"] == "deny"
        assert response.headers["X-XSS-Protection"] == "1; mode=block"
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    @pytest.mark.parametrize("client_id", ["has spaces", "x" * 65, "semi;colon"])
    async def test_unusable_request_id_replaced(self, test_client, client_id):
        response = await test_client.get("/", headers={"X-Request-ID": client_id})
        rid = response.headers["X-Request-ID"]
        assert rid != client_id
        assert len(rid) == 8


class TestChooseRequestId:

    def test_plain_token_kept(self):
        assert choose_request_id("req-2024.01_a") == "req-2024.01_a"

    @pytest.mark.parametrize("value", [None, "", "line\nbreak", "x" * 65])
    def test_other_values_replaced(self, value):
        rid = choose_request_id(value)
        assert rid != value
        assert len(rid) == 8
