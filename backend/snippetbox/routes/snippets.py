"""
Snippetbox Backend — Home & Snippet Route Handlers
====================================================

What:  GET / (home page), GET /snippet?id=N, POST /snippet/create.
How:   The home page is rendered from the template cache; the snippet
       handlers answer in plain text.

Status codes:
    Unregistered paths                  → 404 (router)
    /snippet with a missing, malformed,
      zero, negative or >64-bit id      → 404 (NotFoundError)
    /snippet/create with any non-POST   → 405 + "Allow: POST" (router)
"""

import logging
import re
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from snippetbox.exceptions import NotFoundError
from snippetbox.rendering import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Snippets"])

# Optionally signed base-10 digits only: no whitespace, underscores or
# non-ASCII digits, all of which int() would otherwise accept
_INTEGER_RX = re.compile(r"[+-]?[0-9]+")
_MAX_ID = 2**63 - 1


def parse_snippet_id(raw: Optional[str]) -> int:
    """
    Parse the `id` query parameter.

    Raises:
        NotFoundError: missing, not an integer, out of 64-bit range, or < 1
    """
    if raw is None or not _INTEGER_RX.fullmatch(raw):
        raise NotFoundError(resource="snippet", resource_id=raw)
    snippet_id = int(raw)
    if snippet_id < 1 or snippet_id > _MAX_ID:
        raise NotFoundError(resource="snippet", resource_id=raw)
    return snippet_id


@router.api_route(
    "/", methods=["GET", "HEAD"], response_class=HTMLResponse, summary="Home page"
)
async def home(request: Request) -> HTMLResponse:
    return render(request, "home.page.html")


@router.get("/snippet", response_class=PlainTextResponse, summary="Show a snippet")
async def show_snippet(
    raw_id: Optional[str] = Query(default=None, alias="id"),
) -> PlainTextResponse:
    snippet_id = parse_snippet_id(raw_id)
    return PlainTextResponse(f"display the snippet id {snippet_id} ...")


@router.post("/snippet/create", response_class=PlainTextResponse, summary="Create a snippet")
async def create_snippet() -> PlainTextResponse:
    """
    Only POST is routed here. Starlette answers every other method with
    405 and an `Allow: POST` header, which the HTTPException handler in
    main.py passes through unchanged.
    """
    return PlainTextResponse("Create from Snippet!")
