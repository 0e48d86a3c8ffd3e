from prometheus_client import Counter, Histogram

from eventhub.platform.exception.exceptions import (
    AlreadyCancelledError,
    CustomBaseError,
    ForbiddenError,
    InsufficientInventoryError,
    InternalError,
    InvalidStateError,
    NotFoundError,
)


class BookingMetrics:
    """
    Booking coordinator metrics

    Exposed at /metrics. `operation` is create/cancel, `result` is the outcome
    name (success, insufficient_inventory, not_found, ...).
    """

    def __init__(self):
        self.booking_operations = Counter(
            'eventhub_booking_operations_total',
            'Booking coordinator operations by outcome',
            ['operation', 'result'],
        )

        self.booking_operation_duration = Histogram(
            'eventhub_booking_operation_duration_seconds',
            'Booking coordinator operation latency (including retries)',
            ['operation'],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
        )

        self.booking_retries = Counter(
            'eventhub_booking_retries_total',
            'Transactions retried after a transient store conflict',
            ['operation'],
        )

        self.tickets_sold = Counter('eventhub_tickets_sold_total', 'Tickets deducted by bookings')
        self.tickets_released = Counter(
            'eventhub_tickets_released_total', 'Tickets returned by cancellations'
        )

        self.notification_failures = Counter(
            'eventhub_notification_failures_total',
            'Domain event handlers that raised',
            ['event_type'],
        )

    def record_operation(self, *, operation: str, result: str, duration: float) -> None:
        self.booking_operations.labels(operation=operation, result=result).inc()
        self.booking_operation_duration.labels(operation=operation).observe(duration)

    def record_retry(self, *, operation: str) -> None:
        self.booking_retries.labels(operation=operation).inc()

    def record_tickets_sold(self, *, quantity: int) -> None:
        self.tickets_sold.inc(quantity)

    def record_tickets_released(self, *, quantity: int) -> None:
        self.tickets_released.inc(quantity)

    @staticmethod
    def result_label(error: CustomBaseError) -> str:
        if isinstance(error, InsufficientInventoryError):
            return 'insufficient_inventory'
        if isinstance(error, AlreadyCancelledError):
            return 'already_cancelled'
        if isinstance(error, InvalidStateError):
            return 'invalid_state'
        if isinstance(error, NotFoundError):
            return 'not_found'
        if isinstance(error, ForbiddenError):
            return 'forbidden'
        if isinstance(error, InternalError):
            return 'internal_error'
        return 'rejected'

    def record_handler_failure(self, *, event_type: str) -> None:
        self.notification_failures.labels(event_type=event_type).inc()


# Global metrics instance
metrics = BookingMetrics()
