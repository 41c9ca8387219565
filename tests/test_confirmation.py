"""Confirmation Store & Gate Tests."""

from datetime import datetime, timedelta, timezone

import pytest

from kiisha_tools.base import Channel
from kiisha_tools.confirmation import (
    ConfirmationExpiredError,
    ConfirmationGate,
    ConfirmationNotFoundError,
    ConfirmationOwnershipError,
    ConfirmationStateError,
    ConfirmationStatus,
    ConfirmationStore,
)
from kiisha_tools.results import ConfirmationRequest, FailureReason, ToolSuccess


class ManualClock:
    def __init__(self):
        self.now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def store(clock):
    return ConfirmationStore(expiry_minutes=30, clock=clock)


def _request(record_id=5):
    return ConfirmationRequest(
        tool_name="archive_record",
        input={"record_id": record_id},
        message="This action requires confirmation. Reply YES to proceed with: Archive a record",
    )


# ============================================================================
# STORE
# ============================================================================


def test_create_records_caller_and_expiry(store, clock, make_ctx):
    pending = store.create(make_ctx(channel=Channel.WHATSAPP), _request())

    assert pending.status == ConfirmationStatus.PENDING
    assert pending.user_id == 7
    assert pending.channel == Channel.WHATSAPP
    assert pending.correlation_id == "corr-1"
    assert pending.expires_at - pending.created_at == timedelta(minutes=30)
    assert store.get(pending.id) is pending


def test_confirm_by_owner(store, clock, make_ctx):
    pending = store.create(make_ctx(), _request())
    clock.advance(minutes=5)

    confirmed = store.confirm(pending.id, user_id=7)

    assert confirmed.status == ConfirmationStatus.CONFIRMED
    assert confirmed.resolved_by == 7
    assert confirmed.resolved_at == clock.now


def test_confirm_unknown_id(store):
    with pytest.raises(ConfirmationNotFoundError):
        store.confirm("nope", user_id=7)


def test_confirm_by_other_user(store, make_ctx):
    pending = store.create(make_ctx(user_id=7), _request())

    with pytest.raises(ConfirmationOwnershipError):
        store.confirm(pending.id, user_id=8)
    assert store.get(pending.id).status == ConfirmationStatus.PENDING


def test_confirm_twice(store, make_ctx):
    pending = store.create(make_ctx(), _request())
    store.confirm(pending.id, user_id=7)

    with pytest.raises(ConfirmationStateError, match="already confirmed"):
        store.confirm(pending.id, user_id=7)


def test_confirm_after_expiry(store, clock, make_ctx):
    pending = store.create(make_ctx(), _request())
    clock.advance(minutes=31)

    with pytest.raises(ConfirmationExpiredError):
        store.confirm(pending.id, user_id=7)

    assert store.get(pending.id).status == ConfirmationStatus.EXPIRED
    assert store.get(pending.id).resolved_by is None


def test_decline(store, make_ctx):
    pending = store.create(make_ctx(), _request())

    declined = store.decline(pending.id, user_id=7)

    assert declined.status == ConfirmationStatus.DECLINED
    with pytest.raises(ConfirmationStateError, match="already declined"):
        store.confirm(pending.id, user_id=7)


def test_list_pending_newest_first(store, clock, make_ctx):
    first = store.create(make_ctx(), _request(1))
    clock.advance(minutes=1)
    second = store.create(make_ctx(channel=Channel.EMAIL), _request(2))
    store.create(make_ctx(user_id=99), _request(3))
    clock.advance(minutes=1)
    done = store.create(make_ctx(), _request(4))
    store.decline(done.id, user_id=7)

    assert [p.id for p in store.list_pending(7)] == [second.id, first.id]
    assert [p.id for p in store.list_pending(7, channel=Channel.EMAIL)] == [second.id]


def test_expire_stale(store, clock, make_ctx):
    old = store.create(make_ctx(), _request(1))
    clock.advance(minutes=20)
    fresh = store.create(make_ctx(), _request(2))
    clock.advance(minutes=15)

    assert store.expire_stale() == 1
    assert store.get(old.id).status == ConfirmationStatus.EXPIRED
    assert store.get(fresh.id).status == ConfirmationStatus.PENDING
    assert store.expire_stale() == 0


def test_resolved_records_dropped_after_retention(store, clock, make_ctx):
    for record_id in range(50):
        pending = store.create(make_ctx(), _request(record_id))
        store.decline(pending.id, user_id=7)
    assert len(store) == 50

    clock.advance(minutes=11)

    assert store.purge_resolved() == 50
    assert len(store) == 0


def test_resolved_record_kept_within_retention(store, clock, make_ctx):
    pending = store.create(make_ctx(), _request())
    store.confirm(pending.id, user_id=7)
    clock.advance(minutes=5)

    assert store.purge_resolved() == 0
    with pytest.raises(ConfirmationStateError):
        store.confirm(pending.id, user_id=7)


def test_create_sweeps_old_records(store, clock, make_ctx):
    declined = store.create(make_ctx(), _request(1))
    store.decline(declined.id, user_id=7)
    overdue = store.create(make_ctx(), _request(2))
    clock.advance(minutes=45)

    store.create(make_ctx(), _request(3))

    assert store.get(declined.id) is None
    assert store.get(overdue.id).status == ConfirmationStatus.EXPIRED
    assert len(store) == 2


def test_list_pending_hides_overdue(store, clock, make_ctx):
    pending = store.create(make_ctx(), _request())
    clock.advance(minutes=31)

    assert store.list_pending(7) == []
    assert store.get(pending.id).status == ConfirmationStatus.EXPIRED


def test_short_code():
    assert ConfirmationStore.short_code("1234abcd-0000-0000-0000-000000000000") == "1234abcd"


# ============================================================================
# GATE
# ============================================================================


@pytest.mark.asyncio
async def test_gate_stores_confirmation_request(gate, make_ctx, archive_tool):
    result = await gate.request("archive_record", {"record_id": 5}, make_ctx())

    assert result.requires_confirmation is True
    assert result.confirmation_id is not None
    assert result.to_payload()["confirmationId"] == result.confirmation_id
    assert gate.store.get(result.confirmation_id).input == {"record_id": 5}
    assert archive_tool.calls == []


@pytest.mark.asyncio
async def test_gate_passes_through_other_results(gate, make_ctx):
    success = await gate.request("echo", {"message": "hi"}, make_ctx())
    failure = await gate.request("missing", {}, make_ctx())

    assert isinstance(success, ToolSuccess)
    assert failure.reason == FailureReason.UNKNOWN_TOOL
    assert gate.store.list_pending(7) == []


@pytest.mark.asyncio
async def test_gate_confirm_executes_once(gate, make_ctx, archive_tool):
    ctx = make_ctx()
    pending = await gate.request("archive_record", {"record_id": 5}, ctx)

    result = await gate.confirm(pending.confirmation_id, ctx)

    assert result.to_payload() == {"success": True, "data": {"archived": 5}}
    assert len(archive_tool.calls) == 1
    with pytest.raises(ConfirmationStateError):
        await gate.confirm(pending.confirmation_id, ctx)
    assert len(archive_tool.calls) == 1


@pytest.mark.asyncio
async def test_gate_confirm_rechecks_role(dispatcher, make_ctx, archive_tool):
    """Same user id, but the role was downgraded before confirming."""
    gate = ConfirmationGate(dispatcher, ConfirmationStore())
    pending = await gate.request("archive_record", {"record_id": 5}, make_ctx(role="editor"))

    result = await gate.confirm(pending.confirmation_id, make_ctx(role="investor_viewer"))

    assert result.reason == FailureReason.ROLE_DENIED
    assert archive_tool.calls == []


@pytest.mark.asyncio
async def test_gate_store_does_not_grow_with_declines(dispatcher, make_ctx, clock):
    gate = ConfirmationGate(dispatcher, ConfirmationStore(clock=clock))
    ctx = make_ctx()

    for record_id in range(100):
        pending = await gate.request("archive_record", {"record_id": record_id}, ctx)
        await gate.decline(pending.confirmation_id, ctx)
    clock.advance(minutes=11)
    await gate.request("archive_record", {"record_id": 1}, ctx)

    assert len(gate.store) == 1


@pytest.mark.asyncio
async def test_gate_decline_never_executes(gate, make_ctx, archive_tool):
    ctx = make_ctx()
    pending = await gate.request("archive_record", {"record_id": 5}, ctx)

    declined = await gate.decline(pending.confirmation_id, ctx)

    assert declined.status == ConfirmationStatus.DECLINED
    assert archive_tool.calls == []
