# Routes package init
"""
Snippetbox Backend — Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles one resource.

Route Inventory:
    - snippets.py: GET  /                 (home page)
                   GET  /snippet?id=N     (show snippet)
                   POST /snippet/create   (create snippet)
    - users.py:    GET/POST /user/signup, GET/POST /user/login, POST /user/logout
    - health.py:   GET  /health           (service health check)

Routes stay thin: parse the request, call a service or the renderer,
shape the response. Persistence belongs to services.
"""
