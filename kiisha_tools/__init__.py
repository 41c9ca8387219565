"""KIISHA AI Tool Layer.

Registry, dispatcher and confirmation gate for tools the assistant may call
on behalf of a user, with the same permission semantics on every channel.
"""

from kiisha_tools.base import Channel, ExecutionContext, Permission, Tool, ToolInput, ToolMetadata
from kiisha_tools.confirmation import ConfirmationGate, ConfirmationStore
from kiisha_tools.dispatch import ToolDispatcher
from kiisha_tools.llm_format import get_openai_tools, to_openai_tool_format
from kiisha_tools.registry import ToolRegistry
from kiisha_tools.results import (
    ConfirmationRequest,
    ConfirmationRequired,
    FailureReason,
    ToolFailure,
    ToolResult,
    ToolSuccess,
)

__all__ = [
    "Channel",
    "ConfirmationGate",
    "ConfirmationRequest",
    "ConfirmationRequired",
    "ConfirmationStore",
    "ExecutionContext",
    "FailureReason",
    "Permission",
    "Tool",
    "ToolDispatcher",
    "ToolFailure",
    "ToolInput",
    "ToolMetadata",
    "ToolRegistry",
    "ToolResult",
    "ToolSuccess",
    "get_openai_tools",
    "to_openai_tool_format",
]
