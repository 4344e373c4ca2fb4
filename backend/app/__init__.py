"""Backend API — TestProjects CRUD service with runtime error reporting.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
