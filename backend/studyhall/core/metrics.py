"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking write metrics
booking_writes = Counter(
    'booking_writes_total',
    'Booking create/update attempts',
    ['operation', 'status']  # create/update, success/conflict/invalid
)

# Data anomalies: more than one booking active on a seat at one instant
occupancy_anomalies = Counter(
    'occupancy_anomalies_total',
    'Seats found with more than one active booking'
)

live_occupancy = Gauge(
    'live_occupancy_bookings',
    'Bookings active at the last dashboard computation'
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_write(operation: str, status: str):
    """Record booking write. Operation: create, update. Status: success, conflict, invalid"""
    booking_writes.labels(operation=operation, status=status).inc()


def record_occupancy_anomaly():
    occupancy_anomalies.inc()


def record_live_occupancy(count: int):
    live_occupancy.set(count)


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
