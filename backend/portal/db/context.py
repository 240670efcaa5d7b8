"""Request context for access enforcement."""

from dataclasses import dataclass

from backend.portal.models.common import Role


@dataclass(frozen=True)
class Actor:
    """Authenticated employee acting on the portal."""

    actor_id: int
    employee_code: str
    name: str
    role: Role


@dataclass(frozen=True)
class RequestContext:
    """Request context containing the acting employee and network origin.

    `actor` is None while the session is unauthenticated.
    """

    actor: Actor | None
    origin: str = "127.0.0.1"

    @property
    def is_authenticated(self) -> bool:
        return self.actor is not None
