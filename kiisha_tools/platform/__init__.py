"""Platform tool catalog.

Tools for the renewable-energy asset platform:
- Assets and VATR records
- Documents and categories
- RFIs (Requests for Information)

Usage:
    from kiisha_tools.platform import PlatformClient, register_platform_tools
    from kiisha_tools.registry import ToolRegistry

    registry = ToolRegistry()
    register_platform_tools(registry, PlatformClient("https://platform/api"))
"""

from kiisha_config.settings import Settings
from kiisha_obs.logging import get_logger
from kiisha_tools.policies import find_role_drift
from kiisha_tools.registry import ToolRegistry

from .client import PlatformClient
from .exceptions import (
    PlatformAPIError,
    PlatformAuthError,
    PlatformForbiddenError,
    PlatformNotFoundError,
    PlatformValidationError,
)
from .tools import ALL_TOOLS

logger = get_logger(__name__)

__all__ = [
    "PlatformClient",
    "PlatformAPIError",
    "PlatformAuthError",
    "PlatformForbiddenError",
    "PlatformNotFoundError",
    "PlatformValidationError",
    "register_platform_tools",
    "build_registry",
]


def register_platform_tools(registry: ToolRegistry, client: PlatformClient) -> None:
    """Register every platform tool with the tool registry.

    Logs a warning for each allow-listed role that lacks the permission the
    tool needs; such a role would be offered the tool and then refused.
    """
    for tool_cls in ALL_TOOLS:
        registry.register(tool_cls(client))

    for tool_name, role in find_role_drift(registry):
        logger.warning("tool_role_drift", tool_name=tool_name, role=role)

    logger.info("platform_tools_registered", count=len(ALL_TOOLS))


def build_registry(settings: Settings) -> ToolRegistry:
    """Registry loaded with the platform catalog, configured from settings."""
    client = PlatformClient(
        base_url=settings.PLATFORM_API_URL,
        service_token=settings.PLATFORM_SERVICE_TOKEN,
        timeout_seconds=settings.PLATFORM_TIMEOUT_SECONDS,
    )
    registry = ToolRegistry()
    register_platform_tools(registry, client)
    return registry
