# Routes package init
"""
Info API — API Routes Package
==============================

Route Inventory:
    - themas.py:  {api_prefix}/themas          (CRUD + paged list for Thema)
    - health.py:  GET /management/health       (service health check)

Routes handle HTTP concerns: id rules, status codes, headers. Persistence
goes through repositories.
"""
