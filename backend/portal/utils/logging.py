"""Structured logging for queries and access decisions."""

import logging
from typing import Any

from backend.portal.db.context import RequestContext

logger = logging.getLogger(__name__)


class StructuredQueryLogger:
    """Structured logger for search and assistant queries."""

    def log_query(
        self,
        ctx: RequestContext,
        engine: str,
        outcome: str,
        result_count: int,
        latency_ms: float,
    ) -> None:
        """Log a served query with structured data.

        The query text itself stays in the audit log only.
        """
        log_data: dict[str, Any] = {
            "actor_id": ctx.actor.actor_id if ctx.actor else None,
            "origin": ctx.origin,
            "engine": engine,
            "outcome": outcome,
            "result_count": result_count,
            "latency_ms": round(latency_ms, 2),
        }

        log_msg = f"Query served: {engine} - {outcome}"

        logger.info(log_msg, extra={"structured": log_data})

    def log_denied(self, ctx: RequestContext, operation: str, required_role: str) -> None:
        """Log a refused operation."""
        log_data: dict[str, Any] = {
            "actor_id": ctx.actor.actor_id if ctx.actor else None,
            "role": ctx.actor.role.value if ctx.actor else None,
            "origin": ctx.origin,
            "operation": operation,
            "required_role": required_role,
        }

        logger.warning(
            f"Permission denied: {operation} requires {required_role}",
            extra={"structured": log_data},
        )
