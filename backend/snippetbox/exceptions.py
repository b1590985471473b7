"""
Snippetbox Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) turn the ones that
       escape a handler into plain-text responses with the right status code.
Who:   Raised by services, the renderer and route handlers.

Exception Hierarchy:
    SnippetboxError (base)          → 500 Internal Server Error
    ├── NotFoundError               → 404 Not Found
    ├── TemplateRenderError         → 500 Internal Server Error (detail logged)
    ├── DuplicateEmailError         → sentinel, handled by the signup route
    └── InvalidCredentialsError     → sentinel, handled by the login route

The two sentinels are raised at the service boundary so handlers can match
them without inspecting database driver error codes.
"""

from typing import Any, Dict, Optional


class SnippetboxError(Exception):
    """
    Base exception for all Snippetbox application errors.

    Attributes:
        message:  Human-readable description (logged, never sent to the client
                  for 5xx responses)
        context:  Additional debug info (logged only)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(SnippetboxError):
    """
    Raised when a requested resource does not exist or the request
    identifies it with an invalid value (e.g. `/snippet?id=abc`).

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class TemplateRenderError(SnippetboxError):
    """
    Raised when a page template is missing from the cache or fails to render.

    HTTP: 500 Internal Server Error. The client gets the generic status text;
    the template name and the underlying error are logged server-side.
    """

    def __init__(
        self,
        message: str = "Template rendering failed",
        template: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if template:
            ctx["template"] = template
        super().__init__(message=message, context=ctx)
        self.template = template


class DuplicateEmailError(SnippetboxError):
    """Registration hit the unique constraint on `users.email`."""

    def __init__(self, email: Optional[str] = None):
        super().__init__(
            message="Email address is already in use",
            context={"email": email} if email else None,
        )


class InvalidCredentialsError(SnippetboxError):
    """
    Authentication failed.

    Covers both "no user with that email" and "wrong password" so callers
    cannot tell which one happened.
    """

    def __init__(self):
        super().__init__(message="Invalid credentials")
