from prometheus_client import Counter, Gauge, Histogram


class TicketingMetrics:
    """
    Ticketing Core Metrics Collector

    Tracks reservation / booking business outcomes, the reaper and the
    optimistic-concurrency retry loop around event transactions
    """

    def __init__(self):
        # ========== Reservation Business Metrics ==========
        self.reservation_requests = Counter(
            'ticketing_reservation_requests_total',
            'Total reservation requests by outcome',
            ['ticket_type', 'result'],  # result: success / <error kind>
        )

        self.reservation_duration = Histogram(
            'ticketing_reservation_duration_seconds',
            'Reservation processing time',
            ['result'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        # ========== Booking Business Metrics ==========
        self.bookings_confirmed = Counter(
            'ticketing_bookings_confirmed_total',
            'Bookings created from reservations',
            ['payment_status'],
        )

        self.bookings_cancelled = Counter(
            'ticketing_bookings_cancelled_total', 'Bookings cancelled and returned to inventory'
        )

        self.booking_revenue = Counter(
            'ticketing_booking_revenue_total', 'Sum of confirmed booking totals'
        )

        # ========== Reaper Metrics ==========
        self.reservations_reaped = Counter(
            'ticketing_reservations_reaped_total',
            'Reservations released by the reaper or an explicit release',
            ['trigger'],  # trigger: reaper / explicit
        )

        self.reaper_sweep_duration = Histogram(
            'ticketing_reaper_sweep_duration_seconds',
            'Duration of one reaper sweep',
            buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0],
        )

        # ========== Store Metrics ==========
        self.transaction_retries = Counter(
            'ticketing_transaction_retries_total',
            'Event transactions retried after an optimistic version conflict',
            ['operation'],
        )

        self.transaction_failures = Counter(
            'ticketing_transaction_failures_total',
            'Event transactions that gave up',
            ['operation', 'reason'],  # reason: contention / timeout
        )

        # ========== System Health Metrics ==========
        self.service_uptime = Gauge(
            'service_uptime_seconds', 'Service uptime in seconds', ['service', 'instance_id']
        )

    # ========== Helper Methods ==========

    def record_reservation(self, *, ticket_type: str, result: str, duration: float):
        self.reservation_requests.labels(ticket_type=ticket_type, result=result).inc()
        self.reservation_duration.labels(result=result).observe(duration)

    def record_booking_confirmed(self, *, payment_status: str, total: float):
        self.bookings_confirmed.labels(payment_status=payment_status).inc()
        if total > 0:
            self.booking_revenue.inc(total)

    def record_booking_cancelled(self):
        self.bookings_cancelled.inc()

    def record_reservation_released(self, *, trigger: str, count: int = 1):
        if count > 0:
            self.reservations_reaped.labels(trigger=trigger).inc(count)

    def record_reaper_sweep(self, *, duration: float):
        self.reaper_sweep_duration.observe(duration)

    def record_transaction_retry(self, *, operation: str):
        self.transaction_retries.labels(operation=operation).inc()

    def record_transaction_failure(self, *, operation: str, reason: str):
        self.transaction_failures.labels(operation=operation, reason=reason).inc()


# Global metrics instance
metrics = TicketingMetrics()
