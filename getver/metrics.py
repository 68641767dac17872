"""Prometheus metrics for getver.

Provides crawl and candidate metrics in Prometheus format.
Metrics are exposed at the /metrics/prometheus endpoint.
"""

import time

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST

# ============ Metrics Definitions ============

CRAWL_TOTAL = Counter(
    'getver_crawls_total',
    'Total number of version discovery crawls',
    ['status']  # status: success/empty/error
)

CRAWL_DURATION = Histogram(
    'getver_crawl_duration_seconds',
    'Time spent crawling and ranking one site',
    buckets=[0.5, 1, 2, 5, 10, 20, 30, 60, 120]
)

PAGES_EXAMINED = Counter(
    'getver_pages_examined_total',
    'Pages handed to the candidate collector'
)

FETCH_ERRORS = Counter(
    'getver_fetch_errors_total',
    'Page fetches that failed and yielded an empty body',
    ['error_type']  # timeout, connection, other
)

CANDIDATES_ACCEPTED = Counter(
    'getver_candidates_accepted_total',
    'Words accepted by the candidate classifier'
)

CANDIDATES_REJECTED = Counter(
    'getver_candidates_rejected_total',
    'Words rejected by the candidate classifier',
    ['rule']
)

ACTIVE_CRAWLS = Gauge(
    'getver_active_crawls',
    'Number of currently running crawls'
)


# ============ Helper Functions ============

def record_crawl(status: str, duration: float):
    """Record one finished crawl.

    Args:
        status: 'success', 'empty' or 'error'
        duration: Crawl duration in seconds
    """
    CRAWL_TOTAL.labels(status=status).inc()
    CRAWL_DURATION.observe(duration)


def record_fetch_error(error_type: str):
    FETCH_ERRORS.labels(error_type=error_type).inc()


def record_rejection(rule: str):
    CANDIDATES_REJECTED.labels(rule=rule).inc()


def track_active_crawl():
    """Context manager to track active crawl count."""
    class CrawlTracker:
        def __enter__(self):
            ACTIVE_CRAWLS.inc()
            self.start_time = time.time()
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            ACTIVE_CRAWLS.dec()
            return False

        @property
        def duration(self):
            return time.time() - self.start_time

    return CrawlTracker()


def get_metrics():
    """Get current metrics in Prometheus format.

    Returns:
        bytes: Prometheus-formatted metrics
    """
    return generate_latest()


def get_content_type():
    """Get Prometheus content type header value."""
    return CONTENT_TYPE_LATEST
