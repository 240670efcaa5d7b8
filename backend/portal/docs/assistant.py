"""Retrieval composer - rule-based stand-in for a retrieval-augmented assistant.

Selection and answer composition are pure functions so a real ranker or
model call can replace them without touching audit or history plumbing.
"""

import time
from collections.abc import Iterable, Mapping
from itertools import islice
from uuid import UUID, uuid4

from backend.portal.access.envelope import AccessEnvelope
from backend.portal.db.context import RequestContext
from backend.portal.db.stores import BoundedLog, DocumentStore, IndexStore
from backend.portal.docs.retriever import UNKNOWN_DOCUMENT_TITLE
from backend.portal.models.common import ActionKind, Role
from backend.portal.models.docs import AssistantAnswer, ContentChunk
from backend.portal.models.logs import QueryLogEntry
from backend.portal.utils.logging import StructuredQueryLogger
from backend.portal.utils.metrics import PrometheusPortalMetrics

NO_MATCH_ANSWER = (
    "I couldn't find relevant information in the stored case files. "
    "Please upload relevant documents or try a different query."
)

DISCLAIMER = (
    "This information is derived from your uploaded case documents. "
    "For more detailed analysis, please refer to the complete case files."
)


class BlankQueryError(ValueError):
    """Raised when an assistant query is empty after trimming."""


def tokenize(query: str) -> list[str]:
    """Split on whitespace and case-fold each token."""
    return [token.casefold() for token in query.split()]


def select_candidates(
    chunks: Iterable[ContentChunk], tokens: list[str], limit: int
) -> list[ContentChunk]:
    """First `limit` chunks, in scan order, containing any token.

    Union semantics: one matching token is enough. No scoring beyond
    "matched at all".
    """
    if not tokens:
        return []
    matching = (
        chunk for chunk in chunks if any(token in chunk.content.casefold() for token in tokens)
    )
    return list(islice(matching, limit))


def cited_document_ids(candidates: list[ContentChunk]) -> list[UUID]:
    """Candidate document ids in candidate order, without repeats."""
    return list(dict.fromkeys(chunk.document_id for chunk in candidates))


def compose_answer(
    query: str,
    candidates: list[ContentChunk],
    titles: Mapping[UUID, str],
    *,
    quote_chars: int = 300,
) -> str:
    """Compose the templated, cited answer.

    Args:
        query: Trimmed user query
        candidates: Selected chunks, best first
        titles: Document id to title map
        quote_chars: Prefix length quoted from the first candidate

    Returns:
        Answer text; the fixed apology when there are no candidates
    """
    if not candidates:
        return NO_MATCH_ANSWER

    quote = candidates[0].content[:quote_chars]
    sources = "\n".join(
        f"- {titles.get(chunk.document_id, UNKNOWN_DOCUMENT_TITLE)} (Chunk {chunk.order + 1})"
        for chunk in candidates
    )

    return (
        f"Based on the case files I found, here's what I can tell you about \"{query}\":\n"
        f"\n"
        f"{quote}...\n"
        f"\n"
        f"**Sources:**\n"
        f"{sources}\n"
        f"\n"
        f"{DISCLAIMER}"
    )


class RetrievalComposer:
    """Selects matching chunks and composes a cited answer."""

    engine_name = "assistant"

    def __init__(
        self,
        documents: DocumentStore,
        index: IndexStore,
        query_log: BoundedLog[QueryLogEntry],
        envelope: AccessEnvelope,
        *,
        min_role: Role = Role.staff,
        candidate_limit: int = 3,
        quote_chars: int = 300,
        query_logger: StructuredQueryLogger | None = None,
        metrics: PrometheusPortalMetrics | None = None,
    ) -> None:
        self._documents = documents
        self._index = index
        self._query_log = query_log
        self._envelope = envelope
        self._min_role = min_role
        self._candidate_limit = candidate_limit
        self._quote_chars = quote_chars
        self._logger = query_logger or StructuredQueryLogger()
        self._metrics = metrics or PrometheusPortalMetrics()

    def ask(self, query: str, ctx: RequestContext) -> AssistantAnswer:
        """Answer a natural-language query from indexed chunks.

        Every call, including one with no matching chunk, appends one query
        log entry and one `ai_query` audit record after the answer is built.

        Args:
            query: Raw user-entered query, must not be blank
            ctx: Request context

        Returns:
            AssistantAnswer with answer text and cited document ids

        Raises:
            PermissionDenied: If the employee may not query
            BlankQueryError: If query is blank
        """
        actor = self._envelope.require_role(ctx, self._min_role, operation="ai_query")

        question = query.strip()
        if not question:
            raise BlankQueryError("query must not be blank")

        started = time.perf_counter()
        candidates = select_candidates(
            self._index.scan_all(), tokenize(question), self._candidate_limit
        )
        titles = self._documents.titles() if candidates else {}
        answer = AssistantAnswer(
            answer=compose_answer(question, candidates, titles, quote_chars=self._quote_chars),
            cited_document_ids=cited_document_ids(candidates),
        )

        self._query_log.append(
            QueryLogEntry(
                id=uuid4(),
                query=question,
                answer=answer.answer,
                timestamp=self._envelope.now(),
                source_document_ids=answer.cited_document_ids,
            )
        )
        self._envelope.record(ctx, actor, ActionKind.ai_query, f"AI Query: {question}")

        latency_ms = (time.perf_counter() - started) * 1000
        outcome = "match" if candidates else "no_match"
        self._metrics.record_query(self.engine_name, outcome, latency_ms)
        self._logger.log_query(ctx, self.engine_name, outcome, len(candidates), latency_ms)

        return answer

    def history(self, ctx: RequestContext, limit: int | None = None) -> list[QueryLogEntry]:
        """Query history, newest first.

        Raises:
            PermissionDenied: If the employee may not query
        """
        self._envelope.require_role(ctx, self._min_role, operation="ai_history")
        entries = self._query_log.entries(newest_first=True)
        return entries if limit is None else entries[:limit]
