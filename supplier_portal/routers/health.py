"""
Health and info endpoints (public).
"""
import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..context import AppContext, get_context
from .. import __version__
from ..errors import utc_timestamp

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)

SERVICE_NAME = "supplier-portal-api"
SERVICE_VERSION = __version__


def check_store_detailed(context: AppContext) -> Dict[str, Any]:
    """Check role store connectivity with response time."""
    result: Dict[str, Any] = {
        "status": "unknown",
        "connected": False,
        "backend": context.settings.sp_store_backend,
        "responseTimeMs": None,
        "error": None,
    }

    start_time = time.time()
    try:
        context.store.ping()
        result["connected"] = True
        result["status"] = "healthy"
    except Exception as e:
        # le health check ne doit jamais faire tomber le process
        logger.warning("Role store health check failed: %s", e)
        result["status"] = "unhealthy"
        result["error"] = str(e)
    result["responseTimeMs"] = round((time.time() - start_time) * 1000, 2)

    return result


@router.get("/health")
def health(context: AppContext = Depends(get_context)):
    database = check_store_detailed(context)
    return {
        "status": "OK" if database["connected"] else "DEGRADED",
        "uptime": context.uptime,
        "timestamp": utc_timestamp(),
        "environment": context.settings.sp_env,
        "database": database,
    }


@router.get("/info")
def info(context: AppContext = Depends(get_context)):
    return {
        "name": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": "Supplier portal backend: role checks and user profiles",
        "environment": context.settings.sp_env,
        "endpoints": [
            "GET /api/health",
            "GET /api/info",
            "GET /api/check-roles",
            "GET /api/check-supplier",
            "GET /api/check-admin",
            "GET /api/supplier/me",
            "GET /api/user/profile",
            "PUT /api/user/update",
            "GET /api/admin/users",
        ],
    }
