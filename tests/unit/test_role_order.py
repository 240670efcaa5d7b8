"""Unit tests for role ordering and the access envelope."""

import pytest

from backend.portal.access.envelope import AccessEnvelope, PermissionDenied
from backend.portal.db.context import Actor, RequestContext
from backend.portal.db.inmemory import InMemoryKeyValueStore
from backend.portal.db.stores import create_audit_log
from backend.portal.models.common import ActionKind, Role


def _ctx(role: Role) -> RequestContext:
    return RequestContext(
        actor=Actor(actor_id=7, employee_code="T007", name="Test", role=role),
        origin="10.0.0.7",
    )


@pytest.fixture
def envelope() -> AccessEnvelope:
    return AccessEnvelope(create_audit_log(InMemoryKeyValueStore(), capacity=10))


@pytest.mark.parametrize(
    ("role", "minimum", "allowed"),
    [
        (Role.admin, Role.admin, True),
        (Role.admin, Role.viewer, True),
        (Role.officer, Role.staff, True),
        (Role.officer, Role.admin, False),
        (Role.staff, Role.staff, True),
        (Role.staff, Role.officer, False),
        (Role.viewer, Role.staff, False),
        (Role.viewer, Role.viewer, True),
    ],
)
def test_role_total_order(role: Role, minimum: Role, allowed: bool) -> None:
    """Test admin > officer > staff > viewer."""
    assert role.at_least(minimum) is allowed


def test_require_role_returns_actor(envelope: AccessEnvelope) -> None:
    """Test that a sufficient role returns the acting employee."""
    actor = envelope.require_role(_ctx(Role.officer), Role.staff, operation="search")

    assert actor.actor_id == 7


def test_require_role_denies_lower_role(envelope: AccessEnvelope) -> None:
    """Test that staff cannot pass an admin check and nothing is audited."""
    with pytest.raises(PermissionDenied) as exc_info:
        envelope.require_role(_ctx(Role.staff), Role.admin, operation="audit_read")

    assert exc_info.value.required_role == Role.admin
    assert exc_info.value.actor is not None
    assert len(envelope.audit_log) == 0


def test_require_role_denies_unauthenticated(envelope: AccessEnvelope) -> None:
    """Test that an unauthenticated context is always denied."""
    with pytest.raises(PermissionDenied) as exc_info:
        envelope.require_role(RequestContext(actor=None), Role.viewer, operation="search")

    assert exc_info.value.actor is None


def test_record_populates_every_field(envelope: AccessEnvelope) -> None:
    """Test that audit records carry actor, kind, detail, origin and timestamp."""
    ctx = _ctx(Role.staff)
    assert ctx.actor is not None

    record = envelope.record(ctx, ctx.actor, ActionKind.search, "Searched for: lease")

    assert record.actor_id == 7
    assert record.action_kind == ActionKind.search
    assert record.detail == "Searched for: lease"
    assert record.origin == "10.0.0.7"
    assert record.timestamp.tzinfo is not None
    assert envelope.audit_log.entries() == [record]


def test_read_audit_trail_filters_newest_first(envelope: AccessEnvelope) -> None:
    """Test audit trail reads and filters."""
    ctx = _ctx(Role.admin)
    assert ctx.actor is not None
    first = envelope.record(ctx, ctx.actor, ActionKind.login, "in")
    second = envelope.record(ctx, ctx.actor, ActionKind.search, "q")
    third = envelope.record(ctx, ctx.actor, ActionKind.logout, "out")

    assert envelope.read_audit_trail(ctx, Role.admin) == [third, second, first]
    assert envelope.read_audit_trail(ctx, Role.admin, action_kind=ActionKind.search) == [second]
    assert envelope.read_audit_trail(ctx, Role.admin, actor_id=99) == []
    assert envelope.read_audit_trail(ctx, Role.admin, limit=1) == [third]

    with pytest.raises(PermissionDenied):
        envelope.read_audit_trail(_ctx(Role.officer), Role.admin)
