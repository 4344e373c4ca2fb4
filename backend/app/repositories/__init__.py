"""Repository layer package."""

from app.repositories.test_project_repo import TestProjectRepo

__all__ = ["TestProjectRepo"]
