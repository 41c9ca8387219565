"""Tool Registry Tests."""

from unittest.mock import patch

from kiisha_tools.base import Permission, ToolMetadata
from kiisha_tools.registry import ToolRegistry


class MockTool:
    def __init__(self, name="mock_tool", roles=("admin",), description="Mock tool"):
        self.name = name
        self.description = description
        self.metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=list(roles))


def test_register_and_retrieve_tool():
    """Test tool registration and retrieval."""
    registry = ToolRegistry()
    tool = MockTool()

    registry.register(tool)
    retrieved = registry.get("mock_tool")

    assert retrieved is tool
    assert "mock_tool" in registry
    assert len(registry) == 1


def test_get_unknown_tool_returns_none():
    assert ToolRegistry().get("missing") is None


def test_register_same_name_replaces():
    """Last registration wins; the registry never holds two entries per name."""
    registry = ToolRegistry()
    registry.register(MockTool(description="first"))
    registry.register(MockTool(description="second"))

    assert len(registry) == 1
    assert registry.get("mock_tool").description == "second"


def test_register_same_name_logs_overwrite():
    registry = ToolRegistry()

    with patch("kiisha_tools.registry.logger") as mock_logger:
        registry.register(MockTool())
        mock_logger.warning.assert_not_called()

        registry.register(MockTool(description="second"))

    mock_logger.warning.assert_called_once_with("tool_overwritten", tool_name="mock_tool")


def test_all_tools_is_a_snapshot():
    registry = ToolRegistry()
    registry.register(MockTool())

    snapshot = registry.all_tools()
    snapshot.clear()

    assert len(registry.all_tools()) == 1


def test_tools_for_role_filters_by_allow_list():
    registry = ToolRegistry()
    registry.register(MockTool("open_tool", roles=("admin", "editor", "investor_viewer")))
    registry.register(MockTool("admin_tool", roles=("admin",)))

    assert [t.name for t in registry.tools_for_role("admin")] == ["open_tool", "admin_tool"]
    assert [t.name for t in registry.tools_for_role("investor_viewer")] == ["open_tool"]
    assert registry.tools_for_role("nobody") == []


def test_names_in_registration_order():
    registry = ToolRegistry()
    for name in ("b", "a", "c"):
        registry.register(MockTool(name))

    assert registry.names() == ["b", "a", "c"]
