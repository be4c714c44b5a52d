"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from repover.config import Settings, get_settings
from repover.services.repositories import RepositoryService


def get_settings_dep(request: Request) -> Settings:
    """Settings the app was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_repository_service(request: Request) -> RepositoryService:
    """Get the repository service created with the app.

    The service is shared across requests so its record cache persists.
    """
    return request.app.state.repository_service


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
RepositoryServiceDep = Annotated[RepositoryService, Depends(get_repository_service)]
