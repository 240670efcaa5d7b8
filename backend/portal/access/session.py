"""Session transitions: unauthenticated <-> authenticated-as-role."""

import logging

from backend.portal.access.directory import Employee, EmployeeDirectory
from backend.portal.access.envelope import AccessEnvelope
from backend.portal.db.context import RequestContext
from backend.portal.models.common import ActionKind

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when credentials do not resolve to an active employee."""


class SessionManager:
    """Resolves employees into request contexts and audits login/logout.

    One-time-password delivery is not handled here; callers present the
    employee code (or registered mobile number) directly.
    """

    def __init__(self, directory: EmployeeDirectory, envelope: AccessEnvelope) -> None:
        self._directory = directory
        self._envelope = envelope

    def _resolve(self, credential: str) -> Employee:
        employee = self._directory.get_by_code(credential) or self._directory.get_by_mobile(
            credential
        )
        if employee is None or not employee.is_active:
            raise AuthenticationError("Invalid employee credential or account not active")
        return employee

    def context_for(self, credential: str, origin: str) -> RequestContext:
        """Build an authenticated context without auditing a login.

        Raises:
            AuthenticationError: If the credential is unknown or inactive
        """
        return RequestContext(actor=self._resolve(credential).as_actor(), origin=origin)

    def login(self, credential: str, origin: str) -> RequestContext:
        """Authenticate and audit a login.

        Raises:
            AuthenticationError: If the credential is unknown or inactive
        """
        ctx = self.context_for(credential, origin)
        assert ctx.actor is not None
        self._envelope.record(ctx, ctx.actor, ActionKind.login, "User logged in successfully")
        logger.info(f"Employee {ctx.actor.employee_code} logged in from {origin}")
        return ctx

    def logout(self, ctx: RequestContext) -> RequestContext:
        """Audit a logout and return the unauthenticated context.

        Logging out an unauthenticated context is a no-op.
        """
        if ctx.actor is not None:
            self._envelope.record(ctx, ctx.actor, ActionKind.logout, "User logged out")
            logger.info(f"Employee {ctx.actor.employee_code} logged out")
        return RequestContext(actor=None, origin=ctx.origin)
