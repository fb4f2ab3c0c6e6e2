"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_attempts = Counter(
    'booking_attempts_total',
    'Total booking requests',
    ['outcome']  # confirmed, waiting
)

cancellations = Counter(
    'ticket_cancellations_total',
    'Ticket cancellation requests',
    ['result']  # cancelled, not_found
)

promotions = Counter(
    'waiting_list_promotions_total',
    'Waiting passengers promoted into a freed seat'
)

undo_attempts = Counter(
    'cancellation_undo_total',
    'Cancellation undo requests',
    ['result']  # confirmed, waiting, empty
)

# Inventory state of the service built at startup (process-wide)
seats_occupied = Gauge(
    'seats_occupied',
    'Number of occupied seats'
)

waiting_list_length = Gauge(
    'waiting_list_length',
    'Passengers currently on the waiting list'
)

# Persistence metrics
snapshot_operations = Counter(
    'snapshot_operations_total',
    'Snapshot persistence operations',
    ['operation', 'result']  # save/load/clear, ok/missing/error
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )

# Convenience functions for instrumentation
def record_booking(outcome: str):
    """Record booking outcome. Outcome: confirmed, waiting"""
    booking_attempts.labels(outcome=outcome).inc()

def record_cancellation(found: bool, promoted: bool = False):
    cancellations.labels(result="cancelled" if found else "not_found").inc()
    if promoted:
        promotions.inc()

def record_undo(result: str):
    """Record undo result. Result: confirmed, waiting, empty"""
    undo_attempts.labels(result=result).inc()

def record_inventory(occupied: int, waiting: int):
    seats_occupied.set(occupied)
    waiting_list_length.set(waiting)

def record_snapshot_operation(operation: str, result: str):
    snapshot_operations.labels(operation=operation, result=result).inc()
