# Routes package init
"""
Journal Backend — API Routes Package
====================================

Route Inventory:
    - auth.py:     POST /api/auth/sign-up, POST /api/auth/sign-in
    - entries.py:  GET/POST /api/entries, GET/PUT/DELETE /api/entries/{entryId}
    - health.py:   GET  /health

Design Principle:
    Routes are THIN — they extract request data, resolve dependencies
    (session, caller identity), call a service, and pick the status code.
"""
