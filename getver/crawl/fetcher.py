"""HTTP transport for the crawler.

``fetch_page`` never raises: any network or protocol problem yields an empty
body so a failing page only ends its own crawl branch.
"""

import logging
from typing import Callable, Optional

import requests

from ..config import DEFAULT_TIMEOUT_MS, USER_AGENT
from ..logging_utils import log_suppressed
from ..metrics import record_fetch_error

logger = logging.getLogger('getver.crawl')

# fetch(url, timeout_seconds) -> body text
Fetcher = Callable[[str, float], str]


def classify_error(exc: BaseException) -> str:
    """Map a requests exception to a short metric label."""
    if isinstance(exc, requests.Timeout):
        return 'timeout'
    if isinstance(exc, requests.ConnectionError):
        return 'connection'
    if isinstance(exc, requests.exceptions.InvalidURL):
        return 'invalid_url'
    return 'other'


def fetch_page(url: str, timeout: float = DEFAULT_TIMEOUT_MS / 1000.0,
               session: Optional[requests.Session] = None,
               user_agent: str = USER_AGENT) -> str:
    """Return the body of ``url`` or an empty string.

    The body is returned whatever the status code, error pages can still
    mention the version.
    """
    getter = session.get if session is not None else requests.get
    try:
        resp = getter(url, timeout=timeout, headers={'User-Agent': user_agent})
        return resp.text
    except requests.RequestException as exc:
        record_fetch_error(classify_error(exc))
        log_suppressed(logger, exc, 'fetch')
        return ''
    except ValueError as exc:
        # urllib3 rejects some malformed URLs before requests wraps them
        record_fetch_error('invalid_url')
        log_suppressed(logger, exc, 'fetch')
        return ''


class SessionFetcher:
    """Fetcher sharing one pooled ``requests.Session`` across a crawl.

    Close it (or use it as a context manager) once the crawl has joined.
    """

    def __init__(self, user_agent: str = USER_AGENT):
        self.user_agent = user_agent
        self.session = requests.Session()

    def __call__(self, url: str, timeout: float) -> str:
        return fetch_page(url, timeout, session=self.session, user_agent=self.user_agent)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> 'SessionFetcher':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def make_fetcher(user_agent: str = USER_AGENT) -> SessionFetcher:
    return SessionFetcher(user_agent=user_agent)
