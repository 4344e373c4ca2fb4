"""API Layer — FastAPI routes, request parsing, and the failure interceptor.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON bodies
"""
