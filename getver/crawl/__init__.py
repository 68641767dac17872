"""getver crawling package.

Modules:
- links: link extraction, page classification, same-domain filtering
- fetcher: HTTP transport that never raises
- crawler: bounded, deduplicating breadth-first crawler
"""

from .links import (
    ABSOLUTE_URL_RE,
    extract_links,
    get_sub_pages,
    link_is_page,
    same_domain,
    to_domain,
)
from .fetcher import Fetcher, SessionFetcher, fetch_page, make_fetcher
from .crawler import CrawlContext, DomainCrawler, VisitedSet, crawl_domain

__all__ = [
    # links.py exports
    'ABSOLUTE_URL_RE',
    'extract_links',
    'get_sub_pages',
    'link_is_page',
    'same_domain',
    'to_domain',
    # fetcher.py exports
    'Fetcher',
    'SessionFetcher',
    'fetch_page',
    'make_fetcher',
    # crawler.py exports
    'CrawlContext',
    'DomainCrawler',
    'VisitedSet',
    'crawl_domain',
]
