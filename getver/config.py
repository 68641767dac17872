"""Configuration settings for getver.

Every value can be overridden through a ``GETVER_*`` environment variable.
Invalid numbers fall back to the defaults below.
"""

import os
from dataclasses import dataclass
from typing import Optional

# Crawler settings
DEFAULT_TIMEOUT_MS = 10000
DEFAULT_CRAWL_DEPTH = 1
MAX_CRAWL_DEPTH = 3
DEFAULT_MAX_WORKERS = 8
DEFAULT_MAX_PAGES = 0  # 0 means unbounded
DEFAULT_SCHEME = 'http'
USER_AGENT = 'getver/0.3 (+version discovery crawler)'

# Candidate collection
MAX_COLLECTED_WORDS = 2048

# API settings
DEFAULT_RATE_LIMIT = '30 per minute'
VERSION = '0.3'


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    try:
        value = int(os.environ.get(name, str(default)))
    except ValueError:
        return default
    if value < minimum:
        return default
    return value


@dataclass(frozen=True)
class Settings:
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    crawl_depth: int = DEFAULT_CRAWL_DEPTH
    max_depth: int = MAX_CRAWL_DEPTH
    max_workers: int = DEFAULT_MAX_WORKERS
    max_words: int = MAX_COLLECTED_WORDS
    max_pages: int = DEFAULT_MAX_PAGES
    user_agent: str = USER_AGENT
    rate_limit: str = DEFAULT_RATE_LIMIT
    version: str = VERSION

    @property
    def timeout(self) -> float:
        """Per-request timeout in seconds."""
        return self.timeout_ms / 1000.0

    @property
    def page_limit(self) -> Optional[int]:
        return self.max_pages or None


def load_settings() -> Settings:
    """Build a :class:`Settings` snapshot from the current environment."""
    return Settings(
        timeout_ms=_env_int('GETVER_TIMEOUT_MS', DEFAULT_TIMEOUT_MS, minimum=1),
        crawl_depth=_env_int('GETVER_CRAWL_DEPTH', DEFAULT_CRAWL_DEPTH),
        max_depth=_env_int('GETVER_MAX_DEPTH', MAX_CRAWL_DEPTH),
        max_workers=_env_int('GETVER_MAX_WORKERS', DEFAULT_MAX_WORKERS, minimum=1),
        max_words=_env_int('GETVER_MAX_WORDS', MAX_COLLECTED_WORDS, minimum=1),
        max_pages=_env_int('GETVER_MAX_PAGES', DEFAULT_MAX_PAGES),
        user_agent=os.environ.get('GETVER_USER_AGENT', USER_AGENT),
        rate_limit=os.environ.get('GETVER_RATE_LIMIT', DEFAULT_RATE_LIMIT),
        version=os.environ.get('GETVER_VERSION', VERSION),
    )
