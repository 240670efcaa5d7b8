"""Access and audit envelope applied around every core operation."""

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

from backend.portal.db.context import Actor, RequestContext
from backend.portal.db.stores import BoundedLog
from backend.portal.models.common import ActionKind, Role
from backend.portal.models.logs import AuditRecord
from backend.portal.utils.logging import StructuredQueryLogger
from backend.portal.utils.metrics import PrometheusPortalMetrics


class PermissionDenied(Exception):
    """Raised when the acting employee's role is below an operation's minimum.

    Always raised before any store access or audit write.
    """

    def __init__(self, required_role: Role, actor: Actor | None, operation: str) -> None:
        self.required_role = required_role
        self.actor = actor
        self.operation = operation
        if actor is None:
            message = f"{operation} requires an authenticated {required_role.value}"
        else:
            message = (
                f"{operation} requires role {required_role.value}, "
                f"employee {actor.employee_code} has {actor.role.value}"
            )
        super().__init__(message)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AccessEnvelope:
    """Role check plus audit trail append."""

    def __init__(
        self,
        audit_log: BoundedLog[AuditRecord],
        *,
        query_logger: StructuredQueryLogger | None = None,
        metrics: PrometheusPortalMetrics | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize envelope.

        Args:
            audit_log: Bounded audit trail
            query_logger: Structured logger for denials
            metrics: Metrics sink for denials
            clock: Timestamp source for audit records
        """
        self._audit_log = audit_log
        self._logger = query_logger or StructuredQueryLogger()
        self._metrics = metrics or PrometheusPortalMetrics()
        self._clock = clock

    @property
    def audit_log(self) -> BoundedLog[AuditRecord]:
        return self._audit_log

    def now(self) -> datetime:
        return self._clock()

    def require_role(self, ctx: RequestContext, minimum_role: Role, operation: str) -> Actor:
        """Return the acting employee if their role is at least minimum_role.

        Denials are logged and counted but not written to the audit trail.

        Raises:
            PermissionDenied: If unauthenticated or the role is too low
        """
        actor = ctx.actor
        if actor is None or not actor.role.at_least(minimum_role):
            self._logger.log_denied(ctx, operation, minimum_role.value)
            self._metrics.inc_denied(operation)
            raise PermissionDenied(minimum_role, actor, operation)
        return actor

    def record(
        self, ctx: RequestContext, actor: Actor, action_kind: ActionKind, detail: str
    ) -> AuditRecord:
        """Append one fully populated audit record."""
        record = AuditRecord(
            id=uuid4(),
            actor_id=actor.actor_id,
            action_kind=action_kind,
            detail=detail,
            origin=ctx.origin,
            timestamp=self._clock(),
        )
        self._audit_log.append(record)
        return record

    def read_audit_trail(
        self,
        ctx: RequestContext,
        minimum_role: Role,
        *,
        action_kind: ActionKind | None = None,
        actor_id: int | None = None,
        limit: int | None = None,
    ) -> list[AuditRecord]:
        """Audit records newest first, optionally filtered.

        Reading the trail is not itself audited.

        Raises:
            PermissionDenied: If the employee may not read the trail
        """
        self.require_role(ctx, minimum_role, operation="audit_read")
        records = self._audit_log.entries(newest_first=True)
        if action_kind is not None:
            records = [record for record in records if record.action_kind == action_kind]
        if actor_id is not None:
            records = [record for record in records if record.actor_id == actor_id]
        return records if limit is None else records[:limit]
