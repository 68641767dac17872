"""Link discovery and same-site filtering.

This is a lightweight scanner over raw page text, not an HTML parser:
``href=`` attribute values and bare absolute URLs are both collected.
"""

import re
from typing import List
from urllib.parse import urlparse

from ..config import DEFAULT_SCHEME

# Absolute http/https/ftp URL: host with at least one dot, optional path/query
ABSOLUTE_URL_RE = re.compile(
    r"(http|ftp|https)://([\w\-_]+(?:(?:\.[\w\-_]+)+))"
    r"([\w\-\.,@?^=%&amp;:/~\+#]*[\w\-\@?^=%&amp;/~\+#])?"
)

_HREF_MARKER = 'href='


def extract_links(text: str, default_scheme: str = DEFAULT_SCHEME) -> List[str]:
    """Return link targets found in ``text``.

    Relative ``href`` values come first and are returned starting with ``/``
    (protocol-relative ``//host`` values get ``default_scheme`` prepended).
    Every absolute URL in the text follows. Duplicates are kept.
    """
    found: List[str] = []
    # The text before the first marker is not an attribute value
    for fragment in text.split(_HREF_MARKER)[1:]:
        if not fragment:
            continue
        quote = fragment[0]
        value = fragment[1:].split(quote, 1)[0]
        if not value or ' ' in value or '://' in value:
            continue
        if value.startswith('//'):
            found.append(f'{default_scheme}:{value}')
        elif value.startswith('/'):
            found.append(value)
        else:
            found.append('/' + value)

    found.extend(m.group(0) for m in ABSOLUTE_URL_RE.finditer(text))
    return found


def link_is_page(link: str) -> bool:
    """Guess whether ``link`` points at a crawlable page rather than an asset."""
    if link.endswith('.html') or link.endswith('.htm'):
        return True
    if '?' in link:
        return False
    # The last path segment must not look like a file name
    if '/' in link:
        last = link[link.rindex('/'):]
        if '.' not in last:
            return True
    return False


def get_sub_pages(text: str, default_scheme: str = DEFAULT_SCHEME) -> List[str]:
    return [link for link in extract_links(text, default_scheme) if link_is_page(link)]


def to_domain(host: str, ignore_subdomain: bool) -> str:
    """Reduce ``a.b.c.d.com`` to ``d.com`` (ignore_subdomain) or ``c.d.com``.

    Hosts with at most one dot are returned unchanged.
    """
    if host.count('.') > 1:
        parts = host.split('.')
        keep = 2 if ignore_subdomain else 3
        return '.'.join(parts[-keep:])
    return host


def same_domain(links: List[str], host: str, ignore_subdomain: bool,
                scheme: str = DEFAULT_SCHEME) -> List[str]:
    """Keep links on the same domain (or subdomain) as ``host``.

    Relative links are resolved against ``scheme`` and ``host``. Links that
    fail to parse are dropped.
    """
    site = to_domain(host, ignore_subdomain)
    result: List[str] = []
    for link in links:
        try:
            netloc = urlparse(link).netloc
        except ValueError:
            continue
        if link.startswith('//'):
            result.append(f'{scheme}:{link}')
        elif link.startswith('/'):
            result.append(f'{scheme}://{host}{link}')
        elif netloc and to_domain(netloc, ignore_subdomain) == site:
            result.append(link)
    return result
