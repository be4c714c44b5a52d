"""Business logic services for repover."""

from repover.services.repositories import RepositoryService

__all__ = ["RepositoryService"]
