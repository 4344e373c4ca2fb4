"""Boundary Protocols — contracts between the HTTP shell and the store.

Invariants:
    - Routes depend on TestProjectRepository, never on SQLAlchemy directly
    - "Not found" is a return value (None / False), never an exception
    - Store errors propagate unmodified through every method
"""

from typing import Protocol

from app.schemas.test_project import TestProjectRead


class TestProjectRepository(Protocol):
    """Contract for TestProject persistence, implemented by TestProjectRepo."""

    async def list_all(self) -> list[TestProjectRead]: ...
    async def get_by_id(self, project_id: int) -> TestProjectRead | None: ...
    async def create(self, data: dict) -> TestProjectRead: ...
    async def update(self, project_id: int, data: dict) -> TestProjectRead | None: ...
    async def delete(self, project_id: int) -> bool: ...
