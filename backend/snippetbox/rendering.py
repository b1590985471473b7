"""
Snippetbox Backend — Template Cache & Renderer
================================================

What:  Compiles every page template once and renders pages from that cache.
How:   `new_template_cache()` builds a dict of page name → compiled Jinja2
       template. `create_app()` stores it on `app.state.template_cache`;
       nothing mutates it afterwards, so concurrent requests read it freely.
Who:   Page handlers call `render(request, "home.page.html", {...})`.

Template layout (snippetbox/templates/):
    *.page.html      one per page; each extends base.layout.html
    *.layout.html    shared skeleton
    *.partial.html   fragments pulled in with {% include %}

Rendering is all-or-nothing: the page is rendered to a string before any
response object exists. A missing page or a failure halfway through raises
TemplateRenderError, which the 500 handler turns into the generic status
text, so no partial HTML reaches the client.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape
from starlette.requests import Request
from starlette.responses import HTMLResponse

from snippetbox.exceptions import TemplateRenderError
from snippetbox.session import is_authenticated, peek_flash, pop_flash

logger = logging.getLogger(__name__)

PAGE_SUFFIX = ".page.html"

TemplateCache = Dict[str, Template]


def new_template_cache(directory: Union[str, Path]) -> TemplateCache:
    """
    Compile every `*.page.html` in `directory`.

    Layouts and partials are resolved through the same loader, so a syntax
    error in any of them fails here, at startup, rather than on a request.
    """
    directory = Path(directory)
    env = Environment(
        loader=FileSystemLoader(str(directory)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )

    cache: TemplateCache = {}
    for page in sorted(directory.glob(f"*{PAGE_SUFFIX}")):
        cache[page.name] = env.get_template(page.name)

    logger.info("Template cache built: %d pages from %s", len(cache), directory)
    return cache


def add_default_data(data: Optional[Dict[str, Any]], request: Request) -> Dict[str, Any]:
    """
    Context every page receives.

    The flash message is only read here; `render` removes it once the
    page has rendered, so a failed render leaves it for the next page.
    """
    context: Dict[str, Any] = dict(data or {})
    context["current_year"] = datetime.now(timezone.utc).year
    context["flash"] = peek_flash(request)
    context["is_authenticated"] = is_authenticated(request)
    context["request"] = request
    return context


def render(
    request: Request,
    name: str,
    data: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    """
    Render page `name` from the application's template cache.

    Raises:
        TemplateRenderError: the page is not in the cache, or rendering failed
    """
    cache: TemplateCache = getattr(request.app.state, "template_cache", {})
    template = cache.get(name)
    if template is None:
        raise TemplateRenderError(f"template {name} does not exist", template=name)

    context = add_default_data(data, request)

    try:
        body = template.render(**context)
    except Exception as exc:
        raise TemplateRenderError(
            f"template {name} failed to render: {exc}", template=name
        ) from exc

    if context["flash"] is not None:
        pop_flash(request)

    return HTMLResponse(body, status_code=status_code)
