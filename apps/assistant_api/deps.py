"""
FastAPI Dependency Injection.

Provides:
- Settings
- Tool registry and confirmation gate (built at startup, kept on app.state)
- Execution context for the authenticated caller
"""

import uuid
from functools import lru_cache

from fastapi import Depends, Header, Request

from apps.assistant_api.auth import validate_jwt
from kiisha_config.settings import Settings
from kiisha_tools.base import Channel, ExecutionContext
from kiisha_tools.confirmation import ConfirmationGate
from kiisha_tools.registry import ToolRegistry


@lru_cache
def get_settings() -> Settings:
    """Dependency: application settings."""
    return Settings()


def get_registry(request: Request) -> ToolRegistry:
    """Dependency: tool catalog."""
    return request.app.state.tool_registry


def get_gate(request: Request) -> ConfirmationGate:
    """Dependency: dispatcher plus pending-confirmation store."""
    return request.app.state.confirmation_gate


async def get_execution_context(
    authorization: str | None = Header(None, description="Bearer JWT token"),
    x_correlation_id: str | None = Header(None, description="Cross-channel correlation id"),
    settings: Settings = Depends(get_settings),
) -> ExecutionContext:
    """
    Dependency: identity of the caller for this request.

    Raises:
        HTTPException: 401 if authentication fails
    """
    caller = validate_jwt(authorization, settings)
    return ExecutionContext(
        user_id=caller.user_id,
        org_id=caller.org_id,
        role=caller.role,
        channel=Channel.API,
        correlation_id=x_correlation_id or uuid.uuid4().hex,
    )
