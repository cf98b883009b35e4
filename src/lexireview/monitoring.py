"""Monitoring configuration for the review engine."""
from prometheus_client import Counter, start_http_server

from lexireview.config import settings

# Review metrics
sessions_started = Counter(
    "lexireview_sessions_started_total",
    "Total number of review sessions started",
)

sessions_refused = Counter(
    "lexireview_sessions_refused_total",
    "Total number of review sessions refused for lack of vocabulary",
)

answers_recorded = Counter(
    "lexireview_answers_recorded_total",
    "Total number of quiz answers recorded",
    ["result"],
)

# Word management metrics
words_saved = Counter(
    "lexireview_words_saved_total",
    "Total number of words saved to vocabularies",
)

# Store metrics
store_errors = Counter(
    "lexireview_store_errors_total",
    "Total number of word store errors",
    ["operation"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)


def setup_monitoring() -> bool:
    """Start the metrics server when enabled in settings."""
    if not settings.monitoring.enabled:
        return False
    start_monitoring(settings.monitoring.port)
    return True
