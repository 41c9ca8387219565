"""LLM function-calling formats.

Builds the per-role tool menu sent to the model provider and turns the
provider's tool calls back into dispatcher calls. The menu is filtered by
role allow-list only; it is advisory, the dispatcher decides at call time.
"""

import json
from typing import Any, Literal

from pydantic import BaseModel

from kiisha_tools.base import ExecutionContext, Tool
from kiisha_tools.dispatch import ToolDispatcher
from kiisha_tools.registry import ToolRegistry
from kiisha_tools.results import FailureReason, ToolFailure, ToolResult
from kiisha_tools.schema import model_json_schema


def to_openai_tool_format(tool: Tool) -> dict[str, Any]:
    """OpenAI-style function definition for a tool."""
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": model_json_schema(tool.input_model),
        },
    }


def get_openai_tools(registry: ToolRegistry, role: str) -> list[dict[str, Any]]:
    """Function-calling menu for a role."""
    return [to_openai_tool_format(t) for t in registry.tools_for_role(role)]


def to_anthropic_tool_format(openai_tool: dict[str, Any]) -> dict[str, Any]:
    """Reshape an OpenAI function definition for the Anthropic messages API."""
    function = openai_tool["function"]
    return {
        "name": function["name"],
        "description": function["description"],
        "input_schema": function["parameters"],
    }


def get_anthropic_tools(registry: ToolRegistry, role: str) -> list[dict[str, Any]]:
    return [to_anthropic_tool_format(t) for t in get_openai_tools(registry, role)]


# ============================================================================
# TOOL CALLS
# ============================================================================


class ToolCallFunction(BaseModel):
    name: str
    arguments: str = ""


class ToolCall(BaseModel):
    """A tool call as returned by the model provider."""

    id: str
    type: Literal["function"] = "function"
    function: ToolCallFunction


async def dispatch_tool_call(
    dispatcher: ToolDispatcher, call: ToolCall, ctx: ExecutionContext
) -> ToolResult:
    """Decode a provider tool call and dispatch it.

    Arguments arrive as a JSON string; an empty string means no arguments.
    """
    raw = call.function.arguments.strip()
    try:
        arguments = json.loads(raw) if raw else {}
    except json.JSONDecodeError as e:
        return ToolFailure(
            reason=FailureReason.INVALID_INPUT,
            error=f"Invalid input: arguments are not valid JSON: {e}",
        )

    return await dispatcher.execute(call.function.name, arguments, ctx)


def tool_result_message(call: ToolCall, result: ToolResult) -> dict[str, Any]:
    """Conversation message that feeds a tool result back to the model."""
    return {
        "role": "tool",
        "tool_call_id": call.id,
        "content": json.dumps(result.to_payload(), default=str),
    }
