"""Common types and enums shared across all models."""

from enum import Enum


class Role(str, Enum):
    """Employee role, ordered admin > officer > staff > viewer."""

    viewer = "viewer"
    staff = "staff"
    officer = "officer"
    admin = "admin"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def at_least(self, minimum: "Role") -> bool:
        """Return True if this role is `minimum` or higher."""
        return self.rank >= minimum.rank


_ROLE_RANK: dict[Role, int] = {
    Role.viewer: 1,
    Role.staff: 2,
    Role.officer: 3,
    Role.admin: 4,
}


class ActionKind(str, Enum):
    """Audited action type."""

    login = "login"
    logout = "logout"
    upload = "upload"
    search = "search"
    ai_query = "ai_query"
    download = "download"
    view = "view"


class CaseStatus(str, Enum):
    """Case file status."""

    active = "active"
    closed = "closed"
