"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All JSON error responses carry a top-level "message"

Design Decisions:
    - Thin routes delegate to services
"""
