"""Depth-limited, deduplicating same-site crawler.

Pages are visited breadth-first, one level per remaining depth value. Each
level runs on a bounded thread pool; ``crawl`` only returns once every page
of every level has been handled.
"""

import concurrent.futures
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Set
from urllib.parse import urlparse

from ..config import DEFAULT_MAX_WORKERS, DEFAULT_SCHEME, DEFAULT_TIMEOUT_MS
from .fetcher import Fetcher, fetch_page
from .links import get_sub_pages, same_domain

logger = logging.getLogger('getver.crawl')

# on_examine(url, body, depth)
ExamineFunc = Callable[[str, str, int], None]


class VisitedSet:
    """URLs examined during one crawl run."""

    def __init__(self):
        self._lock = threading.Lock()
        self._urls: Set[str] = set()

    def claim(self, url: str, limit: Optional[int] = None) -> bool:
        """Insert ``url`` if absent. True only for the caller that inserted it.

        With ``limit`` set, nothing is inserted once the set holds that many URLs.
        """
        with self._lock:
            if url in self._urls:
                return False
            if limit is not None and len(self._urls) >= limit:
                return False
            self._urls.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def snapshot(self) -> Set[str]:
        with self._lock:
            return set(self._urls)


@dataclass
class CrawlContext:
    """State owned by a single crawl run."""
    root_url: str
    ignore_subdomain: bool = True
    default_scheme: str = DEFAULT_SCHEME
    max_pages: Optional[int] = None
    visited: VisitedSet = field(default_factory=VisitedSet)

    def claim(self, url: str) -> bool:
        return self.visited.claim(url, limit=self.max_pages)


def _parse_host(url: str) -> Optional[tuple]:
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return parsed.scheme, parsed.netloc


class DomainCrawler:
    """Crawls one site with at most ``max_workers`` fetches in flight."""

    def __init__(self, fetch: Optional[Fetcher] = None,
                 timeout: float = DEFAULT_TIMEOUT_MS / 1000.0,
                 max_workers: Optional[int] = DEFAULT_MAX_WORKERS):
        self.fetch = fetch or fetch_page
        self.timeout = timeout
        self.max_workers = max(1, int(max_workers or DEFAULT_MAX_WORKERS))

    def crawl_one_page(self, ctx: CrawlContext, url: str, depth: int,
                       on_examine: ExamineFunc) -> List[str]:
        """Examine ``url`` once and return the same-site pages it links to."""
        parsed = _parse_host(url)
        if parsed is None:
            logger.warning('invalid url: %s', url)
            return []
        scheme, host = parsed
        # Only the task that inserts the URL examines it
        if not ctx.claim(url):
            return []
        body = self.fetch(url, self.timeout)
        logger.debug('examining url=%s depth=%d bytes=%d', url, depth, len(body))
        on_examine(url, body, depth)
        return same_domain(get_sub_pages(body, ctx.default_scheme), host,
                           ctx.ignore_subdomain, scheme=scheme)

    def _run_level(self, executor: concurrent.futures.Executor, ctx: CrawlContext,
                   urls: List[str], depth: int, on_examine: ExamineFunc) -> List[List[str]]:
        """Crawl ``urls`` concurrently, keeping at most ``max_workers`` queued.

        Results are returned in the order of ``urls``.
        """
        results: List[List[str]] = [[] for _ in urls]
        pending = {}
        queue = iter(enumerate(urls))

        def _submit_next() -> bool:
            for idx, url in queue:
                fut = executor.submit(self.crawl_one_page, ctx, url, depth, on_examine)
                pending[fut] = (idx, url)
                return True
            return False

        for _ in range(self.max_workers):
            if not _submit_next():
                break
        while pending:
            done, _ = concurrent.futures.wait(pending, return_when=concurrent.futures.FIRST_COMPLETED)
            for fut in done:
                idx, url = pending.pop(fut)
                try:
                    results[idx] = fut.result()
                except Exception:
                    # A failing page only ends its own branch
                    logger.exception('crawl task failed url=%s depth=%d', url, depth)
                _submit_next()
        return results

    def crawl(self, url: str, depth: int, on_examine: ExamineFunc,
              ignore_subdomain: bool = True, default_scheme: str = DEFAULT_SCHEME,
              max_pages: Optional[int] = None) -> CrawlContext:
        """Crawl from ``url`` until the depth budget is spent.

        ``depth`` is the remaining budget: 1 examines only ``url``, 2 also
        examines the pages it links to, and so on. 0 fetches nothing.
        """
        ctx = CrawlContext(root_url=url, ignore_subdomain=ignore_subdomain,
                           default_scheme=default_scheme, max_pages=max_pages)
        frontier = [url]
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers,
                                                   thread_name_prefix='getver-crawl') as executor:
            while depth > 0 and frontier:
                logger.debug('crawl level depth=%d pages=%d', depth, len(frontier))
                level = self._run_level(executor, ctx, frontier, depth, on_examine)
                frontier = _next_frontier((link for links in level for link in links), ctx.visited)
                depth -= 1
        logger.info('crawl finished root=%s pages=%d', url, len(ctx.visited))
        return ctx


def _next_frontier(links: Iterable[str], visited: VisitedSet) -> List[str]:
    seen: Set[str] = set()
    out: List[str] = []
    for link in links:
        if link in seen or link in visited:
            continue
        seen.add(link)
        out.append(link)
    return out


def crawl_domain(url: str, depth: int, on_examine: ExamineFunc,
                 fetch: Optional[Fetcher] = None,
                 timeout: float = DEFAULT_TIMEOUT_MS / 1000.0,
                 max_workers: Optional[int] = DEFAULT_MAX_WORKERS,
                 ignore_subdomain: bool = True,
                 default_scheme: str = DEFAULT_SCHEME,
                 max_pages: Optional[int] = None) -> CrawlContext:
    """Crawl ``url`` up to ``depth`` and run ``on_examine`` on every page once.

    Blocks until the whole crawl has completed.
    """
    crawler = DomainCrawler(fetch=fetch, timeout=timeout, max_workers=max_workers)
    return crawler.crawl(url, depth, on_examine, ignore_subdomain=ignore_subdomain,
                         default_scheme=default_scheme, max_pages=max_pages)
