# routers/health.py

import requests
from fastapi import APIRouter

from core.config import settings
from core.logging_config import logger

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/app
# Simple API health check
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app():
    """
    Lightweight health check for uptime monitors.
    """
    return {
        "service": settings.PROJECT_NAME,
        "status": "ok",
    }


# -----------------------------------------------------
# GET /health/identity
# Checks the identity endpoint is reachable
# No auth required
# -----------------------------------------------------
@router.get("/identity", summary="Identity service reachability")
def health_identity():
    """
    Calls the profile endpoint without a token. Any HTTP answer
    (401 included) means the service is up; only network errors
    count as down.
    """
    try:
        response = requests.get(settings.profile_url, timeout=5)
        return {
            "service": "identity",
            "status": "ok",
            "upstream_status": response.status_code,
        }
    except requests.RequestException as e:
        logger.warning(f"Identity health check failed: {e}")
        return {
            "service": "identity",
            "status": "error",
            "error": str(e),
        }
