"""Tool Dispatcher.

Single gate between a tool call requested by the assistant and its effect.
Checks run in a fixed order and stop at the first failure:

1. the tool exists
2. the caller's role is on the tool's allow-list
3. the role's permission set grants the tool's required permission
4. the input validates against the tool's input model (strict, JSON mode)
5. tools that need confirmation are returned as a confirmation request
6. the handler runs; anything it raises becomes a failure result

The dispatcher never raises and keeps no state between calls.
"""

import json
import time
from typing import Any

from pydantic import ValidationError

from kiisha_obs.logging import get_logger
from kiisha_obs.metrics import tool_dispatch_total, tool_execution_duration
from kiisha_tools.base import ExecutionContext
from kiisha_tools.policies import PermissionLookup, get_role_permissions
from kiisha_tools.registry import ToolRegistry
from kiisha_tools.results import (
    TOOL_RESULT_TYPES,
    ConfirmationRequest,
    ConfirmationRequired,
    FailureReason,
    ToolFailure,
    ToolResult,
    ToolSuccess,
)

logger = get_logger(__name__)

CONFIRMATION_PROMPT = "This action requires confirmation. Reply YES to proceed with: {description}"
UNKNOWN_TOOL_LABEL = "<unknown>"


class ToolDispatcher:
    """Validates and executes tool calls against a registry."""

    def __init__(
        self,
        registry: ToolRegistry,
        permissions: PermissionLookup = get_role_permissions,
    ):
        """Initialize dispatcher.

        Args:
            registry: Tool catalog to dispatch against
            permissions: Role -> permission set lookup
        """
        self.registry = registry
        self.permissions = permissions

    async def execute(
        self,
        tool_name: str,
        raw_input: Any,
        ctx: ExecutionContext,
        *,
        confirmed: bool = False,
    ) -> ToolResult:
        """Dispatch a tool call.

        Args:
            tool_name: Registered tool name
            raw_input: Unvalidated input, usually decoded LLM arguments
            ctx: Caller identity
            confirmed: Set only when re-invoking after a human confirmed.
                Skips the confirmation gate; every other check still runs.

        Returns:
            ToolSuccess, ConfirmationRequired or ToolFailure
        """
        log = logger.bind(
            tool_name=tool_name,
            role=ctx.role,
            channel=ctx.channel.value,
            correlation_id=ctx.correlation_id,
        )

        tool = self.registry.get(tool_name)
        if tool is None:
            return self._fail(
                log, UNKNOWN_TOOL_LABEL, FailureReason.UNKNOWN_TOOL, f"Unknown tool: {tool_name}"
            )

        metadata = tool.metadata
        if ctx.role not in metadata.allowed_roles:
            return self._fail(
                log,
                tool_name,
                FailureReason.ROLE_DENIED,
                f"Permission denied: {tool_name} requires role {' or '.join(metadata.allowed_roles)}",
            )

        if not self.permissions(ctx.role).grants(metadata.required_permission):
            return self._fail(
                log,
                tool_name,
                FailureReason.PERMISSION_DENIED,
                f"Permission denied: {ctx.role} cannot {metadata.required_permission.value}",
            )

        try:
            encoded = json.dumps(raw_input)
        except (TypeError, ValueError) as e:
            return self._fail(
                log, tool_name, FailureReason.INVALID_INPUT, f"Invalid input: not JSON-serializable: {e}"
            )

        # JSON mode: strict, but enum fields accept their string values
        try:
            validated = tool.input_model.model_validate_json(encoded)
        except ValidationError as e:
            return self._fail(log, tool_name, FailureReason.INVALID_INPUT, f"Invalid input: {e}")

        if metadata.requires_confirmation and not confirmed:
            log.info("tool_confirmation_required")
            tool_dispatch_total.labels(tool_name, "confirmation_required").inc()
            return ConfirmationRequired(
                confirmation=ConfirmationRequest(
                    tool_name=tool_name,
                    input=validated.model_dump(mode="json"),
                    message=CONFIRMATION_PROMPT.format(description=tool.description),
                )
            )

        started = time.perf_counter()
        try:
            outcome = await tool.execute(ctx, validated)
        except Exception as e:
            log.warning("tool_execution_failed", error=str(e), exc_info=True)
            tool_dispatch_total.labels(tool_name, FailureReason.EXECUTION_FAILED.value).inc()
            return ToolFailure(
                reason=FailureReason.EXECUTION_FAILED,
                error=f"Tool execution failed: {str(e) or type(e).__name__}",
            )
        finally:
            tool_execution_duration.labels(tool_name).observe(time.perf_counter() - started)

        result = outcome if isinstance(outcome, TOOL_RESULT_TYPES) else ToolSuccess(data=outcome)
        label = result.reason.value if isinstance(result, ToolFailure) else result.kind
        tool_dispatch_total.labels(tool_name, label).inc()
        log.info("tool_executed", success=result.success, confirmed=confirmed)
        return result

    def _fail(self, log, metric_name: str, reason: FailureReason, error: str) -> ToolFailure:
        log.info("tool_dispatch_rejected", reason=reason.value, error=error)
        tool_dispatch_total.labels(metric_name, reason.value).inc()
        return ToolFailure(reason=reason, error=error)
