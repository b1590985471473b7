# Middleware package init
"""
Snippetbox Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [Secure Headers] → [Session] → Route Handler

    1. Request ID: correlation ID for every log line of the request
    2. Logging: one access line with status and duration
    3. Secure Headers: browser hardening headers on every response,
       including error pages
    4. Session: Starlette's signed-cookie SessionMiddleware
"""
