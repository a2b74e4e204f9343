from prometheus_client import Counter, Gauge, Histogram


class ReadingRoomMetrics:
    """
    Reading Room Core Metrics Collector

    Tracks the subscription lifecycle and how freed seats are handed to the waiting list
    """

    def __init__(self):
        # ========== Subscription Lifecycle Metrics ==========
        self.subscriptions_terminated = Counter(
            'subscriptions_terminated_total',
            'Total subscriptions terminated',
            ['trigger'],  # trigger: manual/lapsed/enrollment
        )

        self.enrollments = Counter(
            'enrollments_total',
            'Total enrollment requests',
            ['outcome'],  # outcome: enrolled/queued
        )

        self.termination_duration = Histogram(
            'subscription_termination_duration_seconds',
            'Termination processing time, dispatch included',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0],
        )

        # ========== Waiting List Metrics ==========
        self.waiting_list_dispatches = Counter(
            'waiting_list_dispatches_total',
            'Waiting list dispatch attempts on a freed seat',
            ['outcome'],  # outcome: empty/assigned/subscribed
        )

        self.seats_reconciled = Counter(
            'seats_reconciled_total', 'Seats freed by reconciliation'
        )

        self.occupied_seats = Gauge('occupied_seats', 'Occupied seats in the last listing')

    # ========== Helper Methods ==========

    def record_termination(self, *, trigger: str, duration: float):
        self.subscriptions_terminated.labels(trigger=trigger).inc()
        self.termination_duration.observe(duration)

    def record_enrollment(self, *, outcome: str):
        self.enrollments.labels(outcome=outcome).inc()

    def record_dispatch(self, *, outcome: str):
        self.waiting_list_dispatches.labels(outcome=outcome).inc()

    def record_reconciliation(self, *, freed: int):
        self.seats_reconciled.inc(freed)


# Global metrics instance
metrics = ReadingRoomMetrics()
