"""
Prometheus metrics for job lifecycle monitoring.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

registry = CollectorRegistry()


def get_registry() -> CollectorRegistry:
    """Get the metrics registry."""
    return registry


JOBS_CREATED = Counter(
    "jobs_created_total",
    "Total number of jobs created",
    ["zone", "has_conflict"],
    registry=registry,
)

JOB_STATUS_TRANSITIONS = Counter(
    "job_status_transitions_total",
    "Job status transition attempts",
    ["from_status", "to_status", "result"],
    registry=registry,
)

TECHNICIAN_ASSIGNMENTS = Counter(
    "technician_assignments_total",
    "Technician assignment changes",
    ["action", "has_conflict"],
    registry=registry,
)

SCHEDULE_CONFLICT_CHECKS = Counter(
    "schedule_conflict_checks_total",
    "Schedule conflict checks performed",
    ["result"],
    registry=registry,
)

NOTIFICATIONS_ENQUEUED = Counter(
    "notifications_enqueued_total",
    "Customer notifications handed to the task queue",
    ["kind", "result"],
    registry=registry,
)

NOTIFICATIONS_DELIVERED = Counter(
    "notifications_delivered_total",
    "Customer notification delivery attempts",
    ["kind", "status"],
    registry=registry,
)

API_REQUESTS = Counter(
    "api_requests_total",
    "Total number of API requests",
    ["method", "endpoint", "status_code"],
    registry=registry,
)

API_REQUEST_DURATION = Histogram(
    "api_request_duration_seconds",
    "Time spent processing API requests",
    ["method", "endpoint"],
    buckets=[0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
    registry=registry,
)

ERRORS_TOTAL = Counter(
    "errors_total",
    "Total number of errors",
    ["error_type", "component"],
    registry=registry,
)


def record_job_creation(zone: str, has_conflict: bool):
    """Record job creation metric."""
    JOBS_CREATED.labels(zone=zone or "none", has_conflict=str(has_conflict).lower()).inc()


def record_status_transition(from_status: str, to_status: str, result: str):
    """Record a status transition attempt ('success' or 'rejected')."""
    JOB_STATUS_TRANSITIONS.labels(
        from_status=from_status, to_status=to_status, result=result
    ).inc()


def record_technician_assignment(action: str, has_conflict: bool = False):
    """Record technician assign/unassign metric."""
    TECHNICIAN_ASSIGNMENTS.labels(
        action=action, has_conflict=str(has_conflict).lower()
    ).inc()


def record_conflict_check(has_conflict: bool):
    """Record conflict check outcome."""
    SCHEDULE_CONFLICT_CHECKS.labels(
        result="conflict" if has_conflict else "clear"
    ).inc()


def record_notification_enqueued(kind: str, result: str):
    """Record notification enqueue metric."""
    NOTIFICATIONS_ENQUEUED.labels(kind=kind, result=result).inc()


def record_notification_delivery(kind: str, status: str):
    """Record notification delivery metric."""
    NOTIFICATIONS_DELIVERED.labels(kind=kind, status=status).inc()


def record_api_request(method: str, endpoint: str, status_code: int, duration: float):
    """Record API request count and duration."""
    API_REQUESTS.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
    API_REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)


def record_error(error_type: str, component: str):
    """Record error metric."""
    ERRORS_TOTAL.labels(error_type=error_type, component=component).inc()


def get_metrics():
    """Get all metrics in Prometheus format."""
    return generate_latest(registry)


def get_metrics_content_type():
    """Get the content type for metrics."""
    return CONTENT_TYPE_LATEST
