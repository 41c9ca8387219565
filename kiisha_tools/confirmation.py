"""Confirmation Gate.

The dispatcher only answers "this needs confirmation"; it remembers
nothing. This module is the caller-side half: it keeps pending
confirmations per user, resolves them, and re-dispatches the confirmed call
so every access check runs again under the confirming identity.
"""

import uuid
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, Field

from kiisha_obs.logging import get_logger
from kiisha_obs.metrics import confirmations_total
from kiisha_tools.base import Channel, ExecutionContext
from kiisha_tools.dispatch import ToolDispatcher
from kiisha_tools.results import ConfirmationRequest, ConfirmationRequired, ToolResult

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConfirmationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    EXPIRED = "expired"


class PendingConfirmation(BaseModel):
    """A tool call waiting for a human yes/no."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: int
    org_id: int
    channel: Channel
    correlation_id: str
    tool_name: str
    input: dict[str, Any]
    message: str
    status: ConfirmationStatus = ConfirmationStatus.PENDING
    created_at: datetime
    expires_at: datetime
    resolved_at: datetime | None = None
    resolved_by: int | None = None


# ============================================================================
# EXCEPTIONS
# ============================================================================


class ConfirmationError(Exception):
    """Base exception for confirmation handling."""

    pass


class ConfirmationNotFoundError(ConfirmationError):
    """No confirmation with this id."""

    pass


class ConfirmationOwnershipError(ConfirmationError):
    """Confirmation was requested by a different user."""

    pass


class ConfirmationStateError(ConfirmationError):
    """Confirmation was already confirmed, declined or expired."""

    pass


class ConfirmationExpiredError(ConfirmationError):
    """Confirmation passed its expiry time."""

    pass


# ============================================================================
# STORE
# ============================================================================


class ConfirmationStore:
    """In-memory store of pending confirmations (per process).

    Resolved records are kept for `retention_minutes` so a repeated confirm
    gets "already confirmed" instead of "not found", then dropped. Every
    create and list sweeps overdue and retired records.
    """

    def __init__(
        self,
        expiry_minutes: int = 30,
        retention_minutes: int = 10,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.expiry = timedelta(minutes=expiry_minutes)
        self.retention = timedelta(minutes=retention_minutes)
        self.clock = clock
        self._items: dict[str, PendingConfirmation] = {}

    def create(self, ctx: ExecutionContext, request: ConfirmationRequest) -> PendingConfirmation:
        self.sweep()
        now = self.clock()
        pending = PendingConfirmation(
            user_id=ctx.user_id,
            org_id=ctx.org_id,
            channel=ctx.channel,
            correlation_id=ctx.correlation_id,
            tool_name=request.tool_name,
            input=request.input,
            message=request.message,
            created_at=now,
            expires_at=now + self.expiry,
        )
        self._items[pending.id] = pending
        confirmations_total.labels(ConfirmationStatus.PENDING.value).inc()
        logger.info(
            "confirmation_created",
            confirmation_id=pending.id,
            tool_name=pending.tool_name,
            user_id=pending.user_id,
            correlation_id=pending.correlation_id,
        )
        return pending

    def get(self, confirmation_id: str) -> PendingConfirmation | None:
        return self._items.get(confirmation_id)

    def confirm(self, confirmation_id: str, user_id: int) -> PendingConfirmation:
        """Mark a pending confirmation as confirmed.

        Raises:
            ConfirmationNotFoundError: Unknown id
            ConfirmationOwnershipError: Requested by another user
            ConfirmationStateError: Already resolved
            ConfirmationExpiredError: Past expiry (record is marked expired)
        """
        pending = self._pending_for(confirmation_id, user_id)

        if self.clock() > pending.expires_at:
            self._resolve(pending, ConfirmationStatus.EXPIRED)
            raise ConfirmationExpiredError("Confirmation expired")

        return self._resolve(pending, ConfirmationStatus.CONFIRMED, user_id)

    def decline(self, confirmation_id: str, user_id: int) -> PendingConfirmation:
        pending = self._pending_for(confirmation_id, user_id)
        return self._resolve(pending, ConfirmationStatus.DECLINED, user_id)

    def list_pending(
        self, user_id: int, channel: Channel | None = None
    ) -> list[PendingConfirmation]:
        """Pending confirmations for a user, newest first."""
        self.sweep()
        items = [
            p
            for p in self._items.values()
            if p.user_id == user_id
            and p.status == ConfirmationStatus.PENDING
            and (channel is None or p.channel == channel)
        ]
        return sorted(items, key=lambda p: p.created_at, reverse=True)

    def expire_stale(self) -> int:
        """Expire every overdue pending confirmation. Returns how many."""
        now = self.clock()
        stale = [
            p
            for p in self._items.values()
            if p.status == ConfirmationStatus.PENDING and p.expires_at < now
        ]
        for pending in stale:
            self._resolve(pending, ConfirmationStatus.EXPIRED)
        return len(stale)

    def purge_resolved(self) -> int:
        """Drop resolved records older than the retention window. Returns how many."""
        cutoff = self.clock() - self.retention
        retired = [
            p.id
            for p in self._items.values()
            if p.status != ConfirmationStatus.PENDING
            and p.resolved_at is not None
            and p.resolved_at <= cutoff
        ]
        for confirmation_id in retired:
            del self._items[confirmation_id]
        return len(retired)

    def sweep(self) -> None:
        expired = self.expire_stale()
        purged = self.purge_resolved()
        if expired or purged:
            logger.info("confirmations_swept", expired=expired, purged=purged)

    def __len__(self) -> int:
        return len(self._items)

    @staticmethod
    def short_code(confirmation_id: str) -> str:
        """Short form quoted back to users on chat channels."""
        return confirmation_id[:8]

    def _pending_for(self, confirmation_id: str, user_id: int) -> PendingConfirmation:
        pending = self._items.get(confirmation_id)
        if pending is None:
            raise ConfirmationNotFoundError("Confirmation not found")
        if pending.user_id != user_id:
            raise ConfirmationOwnershipError("Confirmation belongs to another user")
        if pending.status != ConfirmationStatus.PENDING:
            raise ConfirmationStateError(f"Confirmation already {pending.status.value}")
        return pending

    def _resolve(
        self,
        pending: PendingConfirmation,
        status: ConfirmationStatus,
        resolved_by: int | None = None,
    ) -> PendingConfirmation:
        pending.status = status
        pending.resolved_at = self.clock()
        if resolved_by is not None:
            pending.resolved_by = resolved_by
        confirmations_total.labels(status.value).inc()
        logger.info(
            "confirmation_resolved",
            confirmation_id=pending.id,
            tool_name=pending.tool_name,
            status=status.value,
        )
        return pending


# ============================================================================
# GATE
# ============================================================================


class ConfirmationGate:
    """Couples a dispatcher with a confirmation store."""

    def __init__(self, dispatcher: ToolDispatcher, store: ConfirmationStore):
        self.dispatcher = dispatcher
        self.store = store

    async def request(self, tool_name: str, raw_input: Any, ctx: ExecutionContext) -> ToolResult:
        """Dispatch a call; confirmation requests are stored and get an id."""
        result = await self.dispatcher.execute(tool_name, raw_input, ctx)
        if isinstance(result, ConfirmationRequired):
            pending = self.store.create(ctx, result.confirmation)
            return result.model_copy(update={"confirmation_id": pending.id})
        return result

    async def confirm(self, confirmation_id: str, ctx: ExecutionContext) -> ToolResult:
        """Resolve a pending confirmation and run the tool.

        Raises:
            ConfirmationError: The confirmation cannot be resolved by this user
        """
        pending = self.store.confirm(confirmation_id, ctx.user_id)
        return await self.dispatcher.execute(pending.tool_name, pending.input, ctx, confirmed=True)

    async def decline(self, confirmation_id: str, ctx: ExecutionContext) -> PendingConfirmation:
        return self.store.decline(confirmation_id, ctx.user_id)
