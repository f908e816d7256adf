"""Prometheus metrics for monitoring sweeps, reminders and push delivery"""

from prometheus_client import Counter, Histogram
from obligation_reminders.domain.models import SweepSummary

# Sweep metrics
sweep_counter = Counter(
    "reminder_sweep_total",
    "Reminder sweeps run",
    ["outcome"],  # completed | failed
)

obligations_checked_counter = Counter(
    "reminder_obligations_checked_total",
    "Obligations evaluated by reminder sweeps",
)

reminders_created_counter = Counter(
    "reminder_notifications_created_total",
    "Reminder notifications written",
    ["kind", "notification_type"],
)

reminder_write_failures_counter = Counter(
    "reminder_write_failures_total",
    "Reminders that could not be written",
)

# Push gateway metrics
push_latency_histogram = Histogram(
    "push_gateway_latency_seconds",
    "Push gateway response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

push_failure_counter = Counter(
    "push_gateway_failures_total",
    "Failed push gateway deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_sweep(summary: SweepSummary) -> None:
    """Record sweep counts for monitoring reminder volume and write health"""
    sweep_counter.labels(outcome="completed").inc()
    obligations_checked_counter.inc(summary.obligations_checked)
    reminder_write_failures_counter.inc(summary.write_failures)

    for record in summary.created:
        reminders_created_counter.labels(
            kind=record.obligation_kind.value,
            notification_type=record.notification_type,
        ).inc()


def record_sweep_failure() -> None:
    sweep_counter.labels(outcome="failed").inc()
