"""Pytest fixtures.

Small fake tools cover the dispatcher contract without a platform behind
them; the platform catalog has its own tests under tests/platform_catalog.
"""

import pytest
from fastapi.testclient import TestClient
from pydantic import Field

from apps.assistant_api.auth import create_access_token
from apps.assistant_api.deps import get_gate, get_registry, get_settings
from apps.assistant_api.main import app
from kiisha_config.settings import Settings
from kiisha_obs.logging import setup_logging
from kiisha_tools.base import Channel, ExecutionContext, Permission, ToolInput, ToolMetadata
from kiisha_tools.confirmation import ConfirmationGate, ConfirmationStore
from kiisha_tools.dispatch import ToolDispatcher
from kiisha_tools.platform import PlatformClient, register_platform_tools
from kiisha_tools.registry import ToolRegistry

ALL_ROLES = ["admin", "editor", "reviewer", "investor_viewer"]


class EchoInput(ToolInput):
    message: str = Field(..., description="Text to echo back")
    times: int = Field(1, ge=1, le=5, description="Repeat count")


class EchoTool:
    """Read tool open to every role."""

    name = "echo"
    description = "Echo a message back"
    input_model = EchoInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=ALL_ROLES)

    def __init__(self):
        self.calls = []

    async def execute(self, ctx, input_data):
        self.calls.append((ctx, input_data))
        return {"echo": input_data.message * input_data.times}


class ArchiveInput(ToolInput):
    record_id: int = Field(..., description="Record to archive")


class ArchiveTool:
    """Write tool behind the confirmation gate."""

    name = "archive_record"
    description = "Archive a record"
    input_model = ArchiveInput
    metadata = ToolMetadata(
        required_permission=Permission.WRITE,
        requires_confirmation=True,
        allowed_roles=["admin", "editor"],
    )

    def __init__(self):
        self.calls = []

    async def execute(self, ctx, input_data):
        self.calls.append((ctx, input_data))
        return {"archived": input_data.record_id}


class ExplodingTool:
    """Handler that always raises."""

    name = "explode"
    description = "Always fails"
    input_model = EchoInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=ALL_ROLES)

    async def execute(self, ctx, input_data):
        raise RuntimeError("platform unavailable")


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Only warnings and errors reach the captured output."""
    setup_logging(Settings(_env_file=None, LOG_LEVEL="WARNING", LOG_FORMAT="text"))


@pytest.fixture
def echo_tool():
    return EchoTool()


@pytest.fixture
def archive_tool():
    return ArchiveTool()


@pytest.fixture
def exploding_tool():
    return ExplodingTool()


@pytest.fixture
def registry(echo_tool, archive_tool, exploding_tool):
    """Isolated registry with the fake tools."""
    registry = ToolRegistry()
    registry.register(echo_tool)
    registry.register(archive_tool)
    registry.register(exploding_tool)
    return registry


@pytest.fixture
def dispatcher(registry):
    return ToolDispatcher(registry)


@pytest.fixture
def make_ctx():
    """Factory for execution contexts."""

    def _make(role="editor", user_id=7, org_id=1, channel=Channel.WEB, correlation_id="corr-1"):
        return ExecutionContext(
            user_id=user_id,
            org_id=org_id,
            role=role,
            channel=channel,
            correlation_id=correlation_id,
        )

    return _make


@pytest.fixture
def gate(dispatcher):
    return ConfirmationGate(dispatcher, ConfirmationStore())


@pytest.fixture
def client(registry, gate):
    """FastAPI test client wired to the fake registry."""
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_gate] = lambda: gate
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Factory for Authorization headers."""

    def _headers(role="editor", user_id=7, org_id=1):
        token = create_access_token(user_id, org_id, role, get_settings())
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def platform_client():
    """Platform client pointed at a host that is never contacted."""
    return PlatformClient("http://platform.test/api", service_token="svc-token")


@pytest.fixture
def platform_registry(platform_client):
    """Registry loaded with the full platform catalog."""
    registry = ToolRegistry()
    register_platform_tools(registry, platform_client)
    return registry
