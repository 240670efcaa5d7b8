"""Prometheus metrics for the retrieval core."""

from prometheus_client import Counter, Histogram

# Query metrics
portal_query_latency_ms = Histogram(
    "portal_query_latency_ms",
    "Query latency in milliseconds",
    ["engine"],
    buckets=[1, 5, 10, 25, 50, 100, 250, 500, 1000],
)

portal_queries_total = Counter(
    "portal_queries_total",
    "Total queries served",
    ["engine", "outcome"],
)

portal_permission_denied_total = Counter(
    "portal_permission_denied_total",
    "Total operations refused by the role check",
    ["operation"],
)

portal_chunks_indexed_total = Counter(
    "portal_chunks_indexed_total",
    "Total content chunks appended to the index",
)


class PrometheusPortalMetrics:
    """Prometheus-based portal metrics implementation."""

    def record_query(self, engine: str, outcome: str, latency_ms: float) -> None:
        """Record one served query."""
        portal_queries_total.labels(engine=engine, outcome=outcome).inc()
        portal_query_latency_ms.labels(engine=engine).observe(latency_ms)

    def inc_denied(self, operation: str) -> None:
        """Increment permission denial counter."""
        portal_permission_denied_total.labels(operation=operation).inc()

    def inc_chunks_indexed(self, count: int) -> None:
        """Increment indexed chunk counter."""
        portal_chunks_indexed_total.inc(count)
