"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_backend_check():
    """Lazy import to avoid startup failures."""
    from ...services.tsp.solver import backend_available
    return backend_available


@router.get("/health/solver", status_code=status.HTTP_200_OK)
def health_solver() -> dict:
    """Check that the configured MILP backend can be instantiated."""
    try:
        backend_available = _get_backend_check()
        return {"service": "milp", "backend": settings.milp_backend, "healthy": backend_available()}
    except Exception as e:
        return {"service": "milp", "backend": settings.milp_backend, "healthy": False, "error": str(e)}
