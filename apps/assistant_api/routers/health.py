"""
Health Check Endpoints.

- GET /healthz: Liveness probe (API running)
"""

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """
    Liveness probe - is the API process running?

    Returns 200 OK if server is alive.
    """
    return {"status": "healthy", "service": "kiisha-assistant-api"}
