"""Tool Interface & Metadata.

Every AI-callable tool declares an input model, the permission it needs,
the roles allowed to call it and whether a human must confirm it first.
"""

import uuid
from enum import Enum
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field


class Permission(str, Enum):
    """Generic capabilities a role may hold."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    SHARE = "share"
    VERIFY = "verify"


class Channel(str, Enum):
    """Channels an assistant request can originate from."""

    WEB = "web"
    WHATSAPP = "whatsapp"
    EMAIL = "email"
    API = "api"


class ToolMetadata(BaseModel):
    """Access and confirmation metadata for a tool."""

    required_permission: Permission
    requires_confirmation: bool = False
    allowed_roles: list[str] = Field(default_factory=list)


class ToolInput(BaseModel):
    """Base class for tool input schemas.

    Strict mode: values are never coerced ("5" is not an int). Unknown keys
    are dropped.
    """

    model_config = ConfigDict(strict=True, extra="ignore")


class ExecutionContext(BaseModel):
    """Per-call identity of whoever asked the assistant to act."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    org_id: int
    role: str
    channel: Channel = Channel.WEB
    correlation_id: str = Field(default_factory=lambda: uuid.uuid4().hex)


class Tool(Protocol):
    """Tool interface."""

    name: str
    description: str
    input_model: type[ToolInput]
    metadata: ToolMetadata

    async def execute(self, ctx: ExecutionContext, input_data: Any) -> Any:
        """Execute tool action with validated input."""
        ...
