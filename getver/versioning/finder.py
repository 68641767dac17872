"""Version discovery entry point.

Usage:
    results = find_version_candidates('https://example.org', max_results=3, crawl_depth=2)

The site is crawled, every page body is tokenized and classified, and the
surviving candidates are ranked once the whole crawl has joined.
"""

import logging
from typing import List, Optional, Tuple

from ..config import DEFAULT_MAX_WORKERS, DEFAULT_SCHEME, DEFAULT_TIMEOUT_MS, MAX_COLLECTED_WORDS
from ..crawl import Fetcher, crawl_domain, make_fetcher
from ..exceptions import InvalidURLError, NotEnoughResultsError
from ..metrics import PAGES_EXAMINED, record_crawl, track_active_crawl
from .candidates import CandidateMap
from .ranker import rank
from .tokenizer import collect_candidates

logger = logging.getLogger('getver.versioning')


def normalize_root_url(url: str) -> Tuple[str, str]:
    """Return ``(url, default_scheme)`` for a user supplied site.

    ``example.org`` becomes ``http://example.org``; an ``https`` root makes
    relative links resolve to ``https`` as well.
    """
    url = (url or '').strip()
    if not url:
        raise InvalidURLError(url, 'Empty URL')
    if url.startswith('https'):
        return url, 'https'
    if '://' not in url:
        return f'{DEFAULT_SCHEME}://{url}', DEFAULT_SCHEME
    return url, DEFAULT_SCHEME


def find_version_candidates(
    root_url: str,
    max_results: int = 1,
    crawl_depth: int = 1,
    timeout: float = DEFAULT_TIMEOUT_MS / 1000.0,
    keep_letters: bool = False,
    *,
    fetch: Optional[Fetcher] = None,
    max_workers: Optional[int] = DEFAULT_MAX_WORKERS,
    max_pages: Optional[int] = None,
    max_words: int = MAX_COLLECTED_WORDS,
) -> List[str]:
    """Crawl ``root_url`` and return up to ``max_results`` likely versions.

    Args:
        root_url: Site to crawl; a missing scheme defaults to http
        max_results: Maximum number of results
        crawl_depth: 1 examines only the root page, 2 adds its sub pages, ...
        timeout: Per-request timeout in seconds
        keep_letters: Keep letters in candidates instead of stripping them
        fetch: Transport override, ``fetch(url, timeout) -> body``
        max_workers: Concurrent fetches; None uses the default
        max_pages: Optional cap on examined pages
        max_words: Stop collecting once this many distinct words are stored

    Returns:
        Ranked candidate words, best first
    """
    url, scheme = normalize_root_url(root_url)
    candidates = CandidateMap(max_words=max_words)

    def _examine(target: str, body: str, depth: int) -> None:
        PAGES_EXAMINED.inc()
        accepted = collect_candidates(body, depth, candidates, keep_letters=keep_letters)
        logger.debug('examined url=%s depth=%d accepted=%d', target, depth, accepted)

    # A fetcher created here owns its session and is closed after the crawl
    owned = fetch is None
    if owned:
        fetch = make_fetcher()
    with track_active_crawl() as tracker:
        try:
            ctx = crawl_domain(
                url, crawl_depth, _examine,
                fetch=fetch,
                timeout=timeout,
                max_workers=max_workers,
                default_scheme=scheme,
                max_pages=max_pages,
            )
        except Exception:
            record_crawl('error', tracker.duration)
            raise
        finally:
            if owned:
                fetch.close()
        results = rank(candidates, max_results)
        record_crawl('success' if results else 'empty', tracker.duration)
    logger.info('version candidates url=%s pages=%d candidates=%d results=%s',
                url, len(ctx.visited), len(candidates), results)
    return results


def sort_descending(results: List[str]) -> List[str]:
    """Reverse lexicographic order, as shown by ``--sort``."""
    return sorted(results, reverse=True)


def select_result(results: List[str], index: int) -> str:
    """Return the 1-based ``index``-th result."""
    if index < 1 or index > len(results):
        raise NotEnoughResultsError(index, len(results))
    return results[index - 1]
