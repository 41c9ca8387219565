"""Tool Registry.

Catalog of AI-callable tools, built once at startup and read-only after.
"""

from kiisha_obs.logging import get_logger
from kiisha_tools.base import Tool

logger = get_logger(__name__)


class ToolRegistry:
    """Tool registry with role-based lookup."""

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool. Re-registering a name replaces the old entry."""
        if tool.name in self._tools:
            logger.warning("tool_overwritten", tool_name=tool.name)
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        """Get tool by name."""
        return self._tools.get(name)

    def all_tools(self) -> list[Tool]:
        """Snapshot of every registered tool."""
        return list(self._tools.values())

    def tools_for_role(self, role: str) -> list[Tool]:
        """Tools whose allow-list contains the role.

        The generic permission check is not applied here; that happens at
        dispatch time.
        """
        return [t for t in self._tools.values() if role in t.metadata.allowed_roles]

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
