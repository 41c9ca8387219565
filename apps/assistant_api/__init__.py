"""
KIISHA Assistant API.

HTTP entry point for the `api` channel:
- /tools: role menu and tool execution
- /confirmations: pending confirmation handling
- /healthz: Health check
- /metrics: Prometheus metrics
"""

__all__ = ["app"]
