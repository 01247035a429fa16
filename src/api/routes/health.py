"""
Health check endpoints.

Provides endpoints for monitoring application health and status.
"""

from typing import Any, Dict

from fastapi import APIRouter

from config.settings import get_settings
from search.catalog import get_catalog


router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        Health status with basic info
    """
    return {
        "status": "healthy",
        "service": "design-directory-search",
    }


@router.get("/health/detailed")
async def detailed_health_check() -> Dict[str, Any]:
    """
    Detailed health check.

    Checks:
    - Configuration loaded
    - Catalog loaded and non-empty
    - Query parser configured (LLM parsing is optional; search works without it)
    """
    settings = get_settings()
    catalog_size = len(get_catalog())

    return {
        "status": "healthy" if catalog_size > 0 else "degraded",
        "service": "design-directory-search",
        "environment": settings.environment,
        "checks": {
            "config": "ok",
            "catalog": {
                "status": "loaded" if catalog_size > 0 else "empty",
                "resources": catalog_size,
                "path": str(settings.catalog_path),
            },
            "query_parser": {
                "enabled": settings.query_parser_enabled,
                "configured": settings.query_parser_configured,
                "remote_endpoint": bool(settings.query_parser_endpoint),
            },
        },
    }


@router.get("/ready")
async def readiness_check() -> Dict[str, str]:
    """
    Kubernetes-style readiness probe.

    Ready once the catalog holds at least one resource.
    """
    if not get_catalog():
        return {"status": "not_ready", "reason": "catalog_empty"}

    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """
    Kubernetes-style liveness probe.

    Returns 200 if the service is alive.
    """
    return {"status": "alive"}
