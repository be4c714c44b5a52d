"""Repository administration endpoints.

Handlers are plain functions: git runs as blocking subprocesses, so
FastAPI executes them in its threadpool.
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from repover.api.dependencies import RepositoryServiceDep
from repover.core.exceptions import (
    GitCommandError,
    ReadmeExistsError,
    RepositoryNotFoundError,
    RepoverError,
    ValidationError,
)
from repover.core.models.repository import BulkOperationResult, RepositoryRecord
from repover.core.models.version import BumpKind

router = APIRouter(prefix="/repositories")


# --- Request/Response models ---

class RepositoryRequest(BaseModel):
    """Request targeting one repository directory."""

    dir: str = Field(..., min_length=1)


class BumpRequest(RepositoryRequest):
    """Request to bump (or explicitly set) a repository's tag."""

    kind: BumpKind = BumpKind.PATCH
    tag: str | None = Field(default=None, min_length=1, max_length=255)
    message: str | None = None
    patch_limit: int | None = Field(default=None, ge=0)
    minor_limit: int | None = Field(default=None, ge=0)


class KeywordsRequest(BaseModel):
    """Keyword normalization request; all repositories when dir is omitted."""

    dir: str | None = None


class AlignRequest(BaseModel):
    """Request to tag every repository with one version."""

    tag: str = Field(..., min_length=1, max_length=255)
    message: str | None = None


class TagResponse(BaseModel):
    path: str
    tag: str | None


class ReadmeResponse(BaseModel):
    path: str


class BulkResponse(BaseModel):
    succeeded: dict[str, str]
    failed: dict[str, str]
    total: int


def _http_error(error: RepoverError) -> HTTPException:
    if isinstance(error, RepositoryNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, ReadmeExistsError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(error, ValidationError):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(error, GitCommandError):
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail={"message": error.message, **error.details})


def _bulk_response(result: BulkOperationResult) -> BulkResponse:
    return BulkResponse(succeeded=result.succeeded, failed=result.failed, total=result.total)


# --- Read endpoints ---

@router.get("", response_model=list[RepositoryRecord])
def list_repositories(service: RepositoryServiceDep) -> list[RepositoryRecord]:
    """List every discovered repository."""
    return service.list_repositories()


@router.get("/record", response_model=RepositoryRecord)
def get_repository(dir: str, service: RepositoryServiceDep) -> RepositoryRecord:
    """Get one repository's record."""
    try:
        return service.get_repository(dir)
    except RepoverError as e:
        raise _http_error(e)


# --- Mutation endpoints ---

@router.post("/bump", response_model=TagResponse)
def bump(request: BumpRequest, service: RepositoryServiceDep) -> TagResponse:
    """Bump the tag, commit and push."""
    try:
        tag = service.bump(
            request.dir,
            kind=request.kind,
            tag=request.tag,
            message=request.message,
            patch_limit=request.patch_limit,
            minor_limit=request.minor_limit,
        )
    except RepoverError as e:
        raise _http_error(e)
    return TagResponse(path=request.dir, tag=tag)


@router.post("/untag", response_model=TagResponse)
def untag(request: RepositoryRequest, service: RepositoryServiceDep) -> TagResponse:
    """Delete the last local tag."""
    try:
        tag = service.untag(request.dir)
    except RepoverError as e:
        raise _http_error(e)
    return TagResponse(path=request.dir, tag=tag)


@router.post("/refresh", response_model=RepositoryRecord)
def refresh(request: RepositoryRequest, service: RepositoryServiceDep) -> RepositoryRecord:
    """Re-inspect a repository and replace its cached record."""
    try:
        return service.refresh(request.dir)
    except RepoverError as e:
        raise _http_error(e)


@router.post("/readme", response_model=ReadmeResponse, status_code=status.HTTP_201_CREATED)
def readme(request: RepositoryRequest, service: RepositoryServiceDep) -> ReadmeResponse:
    """Create a default README.md."""
    try:
        path = service.create_readme(request.dir)
    except RepoverError as e:
        raise _http_error(e)
    return ReadmeResponse(path=str(path))


@router.post("/keywords", response_model=dict[str, bool])
def keywords(request: KeywordsRequest, service: RepositoryServiceDep) -> dict[str, bool]:
    """Add default keywords to manifests that lack them."""
    try:
        return service.normalize_keywords(request.dir)
    except RepoverError as e:
        raise _http_error(e)


@router.post("/bulk-patch", response_model=BulkResponse)
def bulk_patch(service: RepositoryServiceDep) -> BulkResponse:
    """Patch-bump every repository."""
    return _bulk_response(service.bulk_patch())


@router.post("/align", response_model=BulkResponse)
def align(request: AlignRequest, service: RepositoryServiceDep) -> BulkResponse:
    """Tag every repository with the same version."""
    try:
        result = service.align(request.tag, message=request.message)
    except RepoverError as e:
        raise _http_error(e)
    return _bulk_response(result)
