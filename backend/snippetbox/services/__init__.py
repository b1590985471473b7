# Services package init
"""
Snippetbox Backend — Services Layer
=====================================

What:  Data-access and business rules sitting between routes (HTTP) and the
       database (persistence).
How:   Services receive the request's AsyncSession, run parameterized
       statements, and raise sentinel exceptions the routes can match.

Service Inventory:
    - UserService: registration (bcrypt), authentication, lookup
"""
