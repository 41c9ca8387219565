"""
FastAPI Routers.

Contains:
- tools: GET /tools, POST /tools/{name}/execute
- confirmations: GET /confirmations, POST /confirmations/{id}/confirm|decline
- health: GET /healthz
- metrics: GET /metrics
"""

__all__ = ["tools", "confirmations", "health", "metrics"]
