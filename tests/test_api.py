import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from getver import create_app


def _fake_find(results):
    calls = []

    def _find(url, max_results=1, crawl_depth=1, timeout=10.0, keep_letters=False, **kwargs):
        calls.append({'url': url, 'max_results': max_results, 'crawl_depth': crawl_depth,
                      'timeout': timeout, 'keep_letters': keep_letters})
        return list(results[:max_results])

    return _find, calls


def test_discover_returns_ranked_results(client, monkeypatch):
    find, calls = _fake_find(['3.2.1', '3.2'])
    monkeypatch.setattr('getver.routes.discover.find_version_candidates', find)
    r = client.get('/discover?url=example.com&n=2&depth=2&timeout=1500&nostrip=1')
    assert r.status_code == 200
    data = r.get_json()
    assert data['results'] == ['3.2.1', '3.2']
    assert data['count'] == 2
    assert calls[0] == {'url': 'example.com', 'max_results': 2, 'crawl_depth': 2,
                        'timeout': 1.5, 'keep_letters': True}


def test_discover_sort_and_selection(client, monkeypatch):
    find, calls = _fake_find(['1.0', '2.0', '1.5'])
    monkeypatch.setattr('getver.routes.discover.find_version_candidates', find)
    r = client.get('/discover?url=example.com&u=1&sort=1')
    assert r.status_code == 200
    assert r.get_json()['results'] == ['2.0']
    assert calls[0]['max_results'] == 2


def test_discover_not_enough_results(client, monkeypatch):
    find, _ = _fake_find(['1.0'])
    monkeypatch.setattr('getver.routes.discover.find_version_candidates', find)
    r = client.get('/discover?url=example.com&u=4')
    assert r.status_code == 404
    body = r.get_json()
    assert body['error'] is True
    assert body['error_code'] == 'NOT_ENOUGH_RESULTS'
    assert body['details'] == {'index': 4, 'available': 1}


def test_discover_validation_errors(client):
    r = client.get('/discover')
    assert r.status_code == 400
    assert r.get_json()['error_code'] == 'VALIDATION_ERROR'

    r = client.get('/discover?url=example.com&depth=9')
    assert r.status_code == 400
    assert r.get_json()['error_code'] == 'CRAWL_DEPTH_EXCEEDED'

    r = client.get('/discover?url=example.com&n=abc')
    assert r.status_code == 400


def test_discover_end_to_end(client, monkeypatch, fake_site):
    site = fake_site({'http://example.com': 'Version 3.2.1 released'})
    monkeypatch.setattr('getver.versioning.finder.make_fetcher', lambda: site)
    r = client.get('/discover?url=example.com')
    assert r.status_code == 200
    assert r.get_json()['results'] == ['3.2.1']


def test_health_and_version(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.get_json()['status'] == 'ok'
    r = client.get('/version')
    data = r.get_json()
    assert data['version'] == '0.3'
    assert data['limits']['max_depth'] == 3


def test_prometheus_endpoint(client):
    r = client.get('/metrics/prometheus')
    assert r.status_code == 200
    assert b'getver_crawls_total' in r.data


def test_rate_limit_applies_to_discover(monkeypatch):
    monkeypatch.setenv('GETVER_RATE_LIMIT', '2 per minute')
    find, _ = _fake_find(['1.0'])
    monkeypatch.setattr('getver.routes.discover.find_version_candidates', find)
    app = create_app()
    client = app.test_client()
    codes = [client.get('/discover?url=example.com').status_code for _ in range(3)]
    assert codes == [200, 200, 429]
    # system routes are exempt
    assert all(client.get('/health').status_code == 200 for _ in range(3))


def test_discover_without_results_is_not_found(client, monkeypatch):
    find, _ = _fake_find([])
    monkeypatch.setattr('getver.routes.discover.find_version_candidates', find)
    r = client.get('/discover?url=example.com&n=3')
    assert r.status_code == 404
    body = r.get_json()
    assert body['error_code'] == 'NO_RESULTS'
    assert body['details'] == {'url': 'example.com'}
