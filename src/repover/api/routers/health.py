"""Health check endpoint."""

from fastapi import APIRouter

from repover import __version__

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
