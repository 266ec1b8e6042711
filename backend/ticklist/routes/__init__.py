# Routes package init
"""
Ticklist Backend — API Routes Package
=======================================

Route Inventory:
    - health.py:     GET  /                    (liveness, empty 200)
    - resources.py:  GET  /crags    POST /crags
                     GET  /routes   POST /routes
                     GET  /ascents  POST /ascents

Design Principle:
    Routes are THIN: decode the body, call the TableResource, pick the status
    code. Undefined paths and methods fall through to FastAPI's default
    404 / 405 responses.
"""
