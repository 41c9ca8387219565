"""
Prometheus Metrics Endpoint.

Exposes /metrics for Prometheus scraping.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=PlainTextResponse)
async def metrics():
    """
    Prometheus metrics endpoint.

    Example metrics:
    ```
    # HELP tool_dispatch_total Tool dispatch outcomes
    # TYPE tool_dispatch_total counter
    tool_dispatch_total{tool_name="list_assets",outcome="success"} 15.0
    tool_dispatch_total{tool_name="suggest_vatr_value",outcome="role_denied"} 2.0
    ```
    """
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)
