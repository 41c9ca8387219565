"""
Confirmation Endpoints.

- GET /confirmations: caller's pending confirmations
- POST /confirmations/{id}/confirm: run the confirmed tool
- POST /confirmations/{id}/decline: discard it
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from apps.assistant_api.deps import get_execution_context, get_gate
from kiisha_tools.base import ExecutionContext
from kiisha_tools.confirmation import (
    ConfirmationError,
    ConfirmationExpiredError,
    ConfirmationGate,
    ConfirmationNotFoundError,
    ConfirmationOwnershipError,
    ConfirmationStateError,
)

router = APIRouter()

_STATUS_CODES: dict[type[ConfirmationError], int] = {
    ConfirmationNotFoundError: status.HTTP_404_NOT_FOUND,
    ConfirmationOwnershipError: status.HTTP_403_FORBIDDEN,
    ConfirmationStateError: status.HTTP_409_CONFLICT,
    ConfirmationExpiredError: status.HTTP_410_GONE,
}


def _to_http(exc: ConfirmationError) -> HTTPException:
    code = _STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail=str(exc))


@router.get("")
async def list_confirmations(
    ctx: ExecutionContext = Depends(get_execution_context),
    gate: ConfirmationGate = Depends(get_gate),
) -> dict[str, Any]:
    pending = gate.store.list_pending(ctx.user_id)
    return {
        "confirmations": [
            {
                "id": p.id,
                "code": gate.store.short_code(p.id),
                "tool_name": p.tool_name,
                "message": p.message,
                "channel": p.channel.value,
                "created_at": p.created_at.isoformat(),
                "expires_at": p.expires_at.isoformat(),
            }
            for p in pending
        ]
    }


@router.post("/{confirmation_id}/confirm")
async def confirm(
    confirmation_id: str,
    ctx: ExecutionContext = Depends(get_execution_context),
    gate: ConfirmationGate = Depends(get_gate),
) -> dict[str, Any]:
    """
    Confirm a pending tool call and execute it.

    Raises:
        HTTPException: 404 unknown, 403 other user, 409 resolved, 410 expired
    """
    try:
        result = await gate.confirm(confirmation_id, ctx)
    except ConfirmationError as e:
        raise _to_http(e) from e
    return result.to_payload()


@router.post("/{confirmation_id}/decline")
async def decline(
    confirmation_id: str,
    ctx: ExecutionContext = Depends(get_execution_context),
    gate: ConfirmationGate = Depends(get_gate),
) -> dict[str, Any]:
    try:
        pending = await gate.decline(confirmation_id, ctx)
    except ConfirmationError as e:
        raise _to_http(e) from e
    return {"id": pending.id, "status": pending.status.value}
