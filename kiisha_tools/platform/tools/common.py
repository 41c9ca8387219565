"""Shared pieces of the platform tools."""

from kiisha_tools.platform.client import PlatformClient

ALL_ROLES = ["admin", "editor", "reviewer", "investor_viewer"]
INTERNAL_ROLES = ["admin", "editor", "reviewer"]
WRITER_ROLES = ["admin", "editor"]


class PlatformTool:
    """Base for tools backed by the platform API."""

    def __init__(self, client: PlatformClient):
        self.client = client

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
