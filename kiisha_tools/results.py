"""Tool results.

A dispatch ends in exactly one of three states: the tool ran, the tool is
waiting for a human to confirm, or the call failed. There is no partial
success.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class FailureReason(str, Enum):
    """Why a dispatch failed."""

    UNKNOWN_TOOL = "unknown_tool"
    ROLE_DENIED = "role_denied"
    PERMISSION_DENIED = "permission_denied"
    INVALID_INPUT = "invalid_input"
    EXECUTION_FAILED = "execution_failed"


class ConfirmationRequest(BaseModel):
    """What a human has to approve before a tool runs."""

    tool_name: str
    input: dict[str, Any]
    message: str

    def to_payload(self) -> dict[str, Any]:
        return {"toolName": self.tool_name, "input": self.input, "message": self.message}


class ToolSuccess(BaseModel):
    """The tool ran and produced data."""

    kind: Literal["success"] = "success"
    data: Any = None

    @property
    def success(self) -> bool:
        return True

    @property
    def requires_confirmation(self) -> bool:
        return False

    @property
    def error(self) -> str | None:
        return None

    def to_payload(self) -> dict[str, Any]:
        return {"success": True, "data": self.data}


class ConfirmationRequired(BaseModel):
    """The tool was not run; a human must confirm first."""

    kind: Literal["confirmation_required"] = "confirmation_required"
    confirmation: ConfirmationRequest
    confirmation_id: str | None = None

    @property
    def success(self) -> bool:
        return True

    @property
    def requires_confirmation(self) -> bool:
        return True

    @property
    def data(self) -> dict[str, Any]:
        return self.confirmation.to_payload()

    @property
    def error(self) -> str | None:
        return None

    def to_payload(self) -> dict[str, Any]:
        payload = {"success": True, "requiresConfirmation": True, "data": self.data}
        if self.confirmation_id:
            payload["confirmationId"] = self.confirmation_id
        return payload


class ToolFailure(BaseModel):
    """The call was rejected or the handler failed."""

    kind: Literal["failure"] = "failure"
    reason: FailureReason
    error: str

    @property
    def success(self) -> bool:
        return False

    @property
    def requires_confirmation(self) -> bool:
        return False

    @property
    def data(self) -> None:
        return None

    def to_payload(self) -> dict[str, Any]:
        return {"success": False, "error": self.error}


ToolResult = Annotated[
    Union[ToolSuccess, ConfirmationRequired, ToolFailure],
    Field(discriminator="kind"),
]

TOOL_RESULT_TYPES = (ToolSuccess, ConfirmationRequired, ToolFailure)
