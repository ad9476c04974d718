"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Lineup metrics
lineup_assignments = Counter(
    'lineup_assignments_total',
    'Total lineup assignment attempts',
    ['role', 'status']  # success, conflict, error
)

lineup_assignment_latency = Histogram(
    'lineup_assignment_latency_seconds',
    'Lineup assignment latency',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

lineup_position_retries = Counter(
    'lineup_position_retries_total',
    'Comic position retries due to concurrent inserts'
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)

redis_connection_errors = Counter(
    'redis_connection_errors_total',
    'Redis connection errors'
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_lineup_assignment(role: str, status: str):
    """Record lineup assignment attempt. Status: success, conflict, error"""
    lineup_assignments.labels(role=role, status=status).inc()


def record_cache_operation(operation: str, hit: bool):
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
