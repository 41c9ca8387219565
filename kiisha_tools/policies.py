"""Role permission policy.

Maps each platform role to the generic capabilities it holds. The
dispatcher looks this up per call; tools additionally carry their own role
allow-list and both must agree before anything runs.
"""

from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from kiisha_tools.base import Permission
from kiisha_tools.registry import ToolRegistry

FALLBACK_ROLE = "investor_viewer"


class RolePermissions(BaseModel):
    """Capabilities of a single role."""

    model_config = ConfigDict(frozen=True)

    can_read: bool = False
    can_write: bool = False
    can_delete: bool = False
    can_share: bool = False
    can_verify: bool = False
    can_see_internal: bool = False
    restricted_clusters: tuple[str, ...] = Field(default_factory=tuple)

    def grants(self, permission: Permission) -> bool:
        """Whether this role holds the given capability."""
        return {
            Permission.READ: self.can_read,
            Permission.WRITE: self.can_write,
            Permission.DELETE: self.can_delete,
            Permission.SHARE: self.can_share,
            Permission.VERIFY: self.can_verify,
        }[Permission(permission)]


PermissionLookup = Callable[[str], RolePermissions]

ROLE_TOOL_PERMISSIONS: dict[str, RolePermissions] = {
    "admin": RolePermissions(
        can_read=True,
        can_write=True,
        can_delete=True,
        can_share=True,
        can_verify=True,
        can_see_internal=True,
    ),
    "editor": RolePermissions(
        can_read=True,
        can_write=True,
        can_see_internal=True,
    ),
    "reviewer": RolePermissions(
        can_read=True,
        can_verify=True,
        can_see_internal=True,
    ),
    "investor_viewer": RolePermissions(
        can_read=True,
        restricted_clusters=("financial", "compliance"),
    ),
}


def get_role_permissions(role: str) -> RolePermissions:
    """Permissions for a role; unknown roles get the least privileged set."""
    return ROLE_TOOL_PERMISSIONS.get(role, ROLE_TOOL_PERMISSIONS[FALLBACK_ROLE])


def find_role_drift(
    registry: ToolRegistry, lookup: PermissionLookup = get_role_permissions
) -> list[tuple[str, str]]:
    """(tool_name, role) pairs where a role is allow-listed for a tool but
    its permission set does not grant the tool's required permission.

    Such a role would see the tool in its menu and then be refused at
    dispatch.
    """
    drift = []
    for tool in registry.all_tools():
        for role in tool.metadata.allowed_roles:
            if not lookup(role).grants(tool.metadata.required_permission):
                drift.append((tool.name, role))
    return drift
