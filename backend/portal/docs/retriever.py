"""Lexical search - case-insensitive substring match over the chunk index."""

import time

from backend.portal.access.envelope import AccessEnvelope
from backend.portal.db.context import RequestContext
from backend.portal.db.stores import DocumentStore, IndexStore
from backend.portal.models.common import ActionKind, Role
from backend.portal.models.docs import SearchResult
from backend.portal.utils.logging import StructuredQueryLogger
from backend.portal.utils.metrics import PrometheusPortalMetrics

UNKNOWN_DOCUMENT_TITLE = "Unknown Document"


class LexicalSearchEngine:
    """Substring search over every indexed chunk.

    Matching strategy:
    - Trim the query; an empty query returns [] without reading the index
    - A chunk matches iff its case-folded content contains the case-folded
      query as one contiguous substring (no tokenization, no stemming)
    - Results keep index scan order; there is no relevance ranking
    - Each hit carries its document's title, or "Unknown Document" when the
      document cannot be found
    """

    engine_name = "lexical"

    def __init__(
        self,
        documents: DocumentStore,
        index: IndexStore,
        envelope: AccessEnvelope,
        *,
        min_role: Role = Role.staff,
        query_logger: StructuredQueryLogger | None = None,
        metrics: PrometheusPortalMetrics | None = None,
    ) -> None:
        self._documents = documents
        self._index = index
        self._envelope = envelope
        self._min_role = min_role
        self._logger = query_logger or StructuredQueryLogger()
        self._metrics = metrics or PrometheusPortalMetrics()

    def search(self, query: str, ctx: RequestContext) -> list[SearchResult]:
        """Search chunks containing query.

        Args:
            query: Raw user-entered query
            ctx: Request context

        Returns:
            Matching chunks in scan order, joined with document titles

        Raises:
            PermissionDenied: If the employee may not search
        """
        actor = self._envelope.require_role(ctx, self._min_role, operation="search")

        needle = query.strip()
        if not needle:
            return []

        started = time.perf_counter()
        folded = needle.casefold()
        titles = self._documents.titles()

        results = [
            SearchResult(
                chunk=chunk,
                document_title=titles.get(chunk.document_id, UNKNOWN_DOCUMENT_TITLE),
            )
            for chunk in self._index.scan_all()
            if folded in chunk.content.casefold()
        ]

        self._envelope.record(ctx, actor, ActionKind.search, f"Searched for: {needle}")

        latency_ms = (time.perf_counter() - started) * 1000
        outcome = "match" if results else "no_match"
        self._metrics.record_query(self.engine_name, outcome, latency_ms)
        self._logger.log_query(ctx, self.engine_name, outcome, len(results), latency_ms)

        return results
