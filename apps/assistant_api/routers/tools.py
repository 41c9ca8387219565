"""
Tool Endpoints.

- GET /tools: function-calling menu for the caller's role
- POST /tools/{tool_name}/execute: dispatch a tool call
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from apps.assistant_api.deps import get_execution_context, get_gate, get_registry
from kiisha_obs.logging import get_logger
from kiisha_tools.base import ExecutionContext
from kiisha_tools.confirmation import ConfirmationGate
from kiisha_tools.llm_format import get_openai_tools
from kiisha_tools.registry import ToolRegistry

router = APIRouter()
logger = get_logger(__name__)


class ExecuteToolRequest(BaseModel):
    """Request schema for POST /tools/{tool_name}/execute."""

    input: Any = Field(default_factory=dict, description="Tool arguments")


@router.get("")
async def list_tools(
    ctx: ExecutionContext = Depends(get_execution_context),
    registry: ToolRegistry = Depends(get_registry),
) -> dict[str, Any]:
    """
    Tools offered to the caller's role.

    Filtered by role allow-list only; execution re-checks permissions.
    """
    return {"role": ctx.role, "tools": get_openai_tools(registry, ctx.role)}


@router.post("/{tool_name}/execute")
async def execute_tool(
    tool_name: str,
    request_body: ExecuteToolRequest,
    ctx: ExecutionContext = Depends(get_execution_context),
    gate: ConfirmationGate = Depends(get_gate),
) -> dict[str, Any]:
    """
    Dispatch a tool call.

    Always 200: failures are reported in the body as
    `{"success": false, "error": ...}`. Tools that need confirmation return
    `requiresConfirmation` and a `confirmationId` to confirm or decline.
    """
    logger.info(
        "tool_execute_requested",
        tool_name=tool_name,
        user_id=ctx.user_id,
        correlation_id=ctx.correlation_id,
    )
    result = await gate.request(tool_name, request_body.input, ctx)
    return result.to_payload()
