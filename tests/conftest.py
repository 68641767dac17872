import sys
import pathlib
import threading

import pytest

# Ensure project root is on sys.path so 'import getver' works when pytest runs from
# different working directories or when running individual tests.
_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from getver import create_app


class FakeSite:
    """In-memory fetcher: url -> body, unknown urls give an empty body."""

    def __init__(self, pages):
        self.pages = dict(pages)
        self.calls = []
        self.closed = False
        self._lock = threading.Lock()

    def __call__(self, url, timeout):
        with self._lock:
            self.calls.append(url)
        return self.pages.get(url, '')

    def close(self):
        self.closed = True

    def fetch_count(self, url):
        with self._lock:
            return self.calls.count(url)


@pytest.fixture
def fake_site():
    return FakeSite


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv('GETVER_RATE_LIMIT', '1000 per minute')
    app = create_app()
    app.testing = True
    return app.test_client()
