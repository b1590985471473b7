"""
Snippetbox Backend — Session Helpers
======================================

What:  Small accessors over the signed cookie session provided by
       Starlette's SessionMiddleware.
How:   `request.session` is a plain dict serialized into the cookie at the
       end of the response; these helpers only read and write keys.

Keys:
    flash                  one-shot message, removed once a page showing it renders
    authenticated_user_id  id of the logged-in user
"""

from typing import Optional

from starlette.requests import Request

FLASH_KEY = "flash"
AUTH_USER_KEY = "authenticated_user_id"


def has_session(request: Request) -> bool:
    """False when SessionMiddleware is not installed (e.g. bare test apps)."""
    return "session" in request.scope


def flash(request: Request, message: str) -> None:
    request.session[FLASH_KEY] = message


def peek_flash(request: Request) -> Optional[str]:
    if not has_session(request):
        return None
    return request.session.get(FLASH_KEY)


def pop_flash(request: Request) -> Optional[str]:
    if not has_session(request):
        return None
    return request.session.pop(FLASH_KEY, None)


def login(request: Request, user_id: int) -> None:
    request.session[AUTH_USER_KEY] = user_id


def logout(request: Request) -> None:
    request.session.pop(AUTH_USER_KEY, None)


def authenticated_user_id(request: Request) -> Optional[int]:
    if not has_session(request):
        return None
    return request.session.get(AUTH_USER_KEY)


def is_authenticated(request: Request) -> bool:
    return authenticated_user_id(request) is not None
