"""
Prometheus metrics for monitoring.

Metrics collected:
- HTTP request duration (histogram)
- HTTP request count by status code (counter)
- Active requests (gauge)
- Note, quota, auth and plan business counters
"""

from prometheus_client import Counter, Gauge, Histogram, Info


# Application info
app_info = Info("notes_app", "Notes application information")

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests in progress",
    ["method", "endpoint"],
)

# Business metrics
notes_created_total = Counter(
    "notes_created_total",
    "Total notes created",
    ["plan"],
)

notes_deleted_total = Counter(
    "notes_deleted_total",
    "Total notes deleted",
)

note_quota_rejections_total = Counter(
    "note_quota_rejections_total",
    "Note creations rejected by the free-plan quota",
)

auth_attempts_total = Counter(
    "auth_attempts_total",
    "Login attempts by outcome",
    ["outcome"],
)

tenant_upgrades_total = Counter(
    "tenant_upgrades_total",
    "Tenant plan upgrade requests",
    ["result"],
)
