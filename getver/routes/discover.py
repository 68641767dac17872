from flask import Blueprint, request, jsonify, current_app
import logging, time

from ..exceptions import CrawlDepthError, GetverException, NoResultsError, ValidationError, error_response
from ..versioning import find_version_candidates, select_result, sort_descending

bp = Blueprint('discover', __name__)

logger = logging.getLogger('getver.api')

_TRUE = ('1', 'true', 'yes', 'on')


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw in (None, ''):
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f'{name} must be an integer', details={name: raw})


def _flag_arg(name: str) -> bool:
    return str(request.args.get(name, '')).lower() in _TRUE


@bp.route('/discover', methods=['GET'])
def discover():
    settings = current_app.config['GETVER_SETTINGS']
    start = time.time()
    try:
        url = (request.args.get('url') or '').strip()
        if not url:
            raise ValidationError('url parameter required')
        retrieve = _int_arg('n', 1)
        selection = _int_arg('u', 0) or None
        depth = _int_arg('depth', settings.crawl_depth)
        timeout_ms = _int_arg('timeout', settings.timeout_ms)
        if depth > settings.max_depth:
            raise CrawlDepthError(depth, settings.max_depth)
        if retrieve < 1 or timeout_ms < 1 or depth < 0:
            raise ValidationError('n and timeout must be positive, depth non-negative',
                                  details={'n': retrieve, 'timeout': timeout_ms, 'depth': depth})
        if selection is not None:
            retrieve = selection + 1

        results = find_version_candidates(
            url,
            max_results=retrieve,
            crawl_depth=depth,
            timeout=timeout_ms / 1000.0,
            keep_letters=_flag_arg('nostrip'),
            max_workers=settings.max_workers,
            max_pages=settings.page_limit,
            max_words=settings.max_words,
        )
        if not results:
            raise NoResultsError(url)
        if _flag_arg('sort'):
            results = sort_descending(results)
        if selection is not None:
            results = [select_result(results, selection)]
    except GetverException as exc:
        logger.info('discover rejected url=%s code=%s', request.args.get('url'), exc.error_code)
        body, status = error_response(exc)
        return jsonify(body), status

    elapsed = round(time.time() - start, 3)
    logger.info('discover url=%s results=%d duration=%.3fs', url, len(results), elapsed)
    return jsonify({'url': url, 'results': results, 'count': len(results), 'duration': elapsed})
