from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "moodjournal_requests_total",
    "Total HTTP requests processed by the mood journal",
    ("method", "path", "status"),
)

REQUEST_LATENCY = Histogram(
    "moodjournal_request_latency_seconds",
    "HTTP request latency in seconds",
    ("method", "path"),
)

REQUEST_ERRORS = Counter(
    "moodjournal_request_errors_total",
    "HTTP requests resulting in server errors",
    ("method", "path", "status"),
)

API_COUNTER = Counter(
    "moodjournal_api_hits_total",
    "API hits per endpoint",
    ("endpoint",),
)

JOURNAL_WRITES = Counter(
    "moodjournal_journal_writes_total",
    "Journal entries saved, split by create or update",
    ("result",),
)

ANALYTICS_REPORTS = Counter(
    "moodjournal_analytics_reports_total",
    "Analytics reports computed per time range",
    ("time_range",),
)

ANALYTICS_LATENCY = Histogram(
    "moodjournal_analytics_compute_seconds",
    "Time spent deriving analytics from journal entries",
)

__all__ = [
    "ANALYTICS_LATENCY",
    "ANALYTICS_REPORTS",
    "API_COUNTER",
    "JOURNAL_WRITES",
    "REQUEST_COUNT",
    "REQUEST_ERRORS",
    "REQUEST_LATENCY",
]
