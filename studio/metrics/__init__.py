# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Prometheus metrics for the studio portal."""
from prometheus_client import Counter, Gauge, Histogram

# ── HTTP ──
REQUEST_COUNT = Counter(
    "studio_http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "studio_http_request_duration_seconds", "HTTP request latency", ["method", "endpoint"]
)
HTTP_ERRORS = Counter(
    "studio_http_errors_total", "Total HTTP errors", ["method", "endpoint", "status"]
)

# ── Contact intake & email ──
CONTACTS_RECEIVED = Counter(
    "studio_contacts_received_total",
    "Contact messages received",
    ["source"],
)
EMAILS_SENT = Counter(
    "studio_emails_sent_total",
    "Email delivery attempts by provider and outcome",
    ["provider", "status"],
)
EMAIL_SEND_DURATION = Histogram(
    "studio_email_send_duration_seconds",
    "Time spent delivering one email including fallback",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
UNREAD_CONTACTS = Gauge(
    "studio_unread_contacts",
    "Contact messages not yet read by an admin",
)

# ── Projects & crew ──
PROJECT_STATUS_CHANGES = Counter(
    "studio_project_status_changes_total",
    "Project status transitions",
    ["from_status", "to_status"],
)
PROJECTS_TOTAL = Gauge("studio_projects", "Projects currently stored")
CREW_MEMBERS_TOTAL = Gauge("studio_crew_members", "Crew members currently stored")

# ── Availability ──
AVAILABILITY_SLOTS_CREATED = Counter(
    "studio_availability_slots_created_total",
    "Availability slots created",
    ["type"],
)
AVAILABILITY_CONFLICTS = Counter(
    "studio_availability_conflicts_total",
    "Slot writes rejected because of an overlapping slot",
)

# ── Analytics ──
ANALYTICS_EVENTS = Counter(
    "studio_analytics_events_total",
    "Analytics events recorded",
    ["event_type"],
)
SUMMARIES_ROLLED_UP = Counter(
    "studio_analytics_summaries_total",
    "Daily analytics summaries computed",
)
QR_SCANS = Counter(
    "studio_qr_scans_total",
    "QR code scans recorded",
    ["source"],
)

# ── Templates & build ──
TEMPLATES_APPLIED = Counter(
    "studio_templates_applied_total",
    "Task templates applied to projects",
    ["category"],
)
BUILD_TRIGGERS = Counter(
    "studio_build_triggers_total",
    "Static site rebuild requests",
    ["status"],
)
