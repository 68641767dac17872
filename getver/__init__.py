import logging
import os

from flask import Flask, Response
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .config import VERSION, load_settings

__version__ = VERSION


def create_app():
    settings = load_settings()
    app = Flask(__name__)
    app.config['GETVER_SETTINGS'] = settings
    app.config['GETVER_VERSION'] = settings.version

    # Logging configuration
    from .logging_utils import configure_logging
    configure_logging()
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    log = logging.getLogger('getver.api')
    log.info('Logging initialized at level %s', logging.getLevelName(logging.getLogger().level))

    # Rate limiting: every /discover call triggers a full crawl
    storage_uri = os.environ.get('GETVER_RATE_LIMIT_STORAGE', 'memory://')
    limiter = Limiter(key_func=get_remote_address, app=app,
                      default_limits=[settings.rate_limit], storage_uri=storage_uri)
    app.extensions['limiter'] = limiter

    # register blueprints
    from .routes.discover import bp as discover_bp
    from .routes.system import system_bp
    app.register_blueprint(discover_bp)
    app.register_blueprint(system_bp)
    # Liveness probes should never be throttled
    limiter.exempt(system_bp)

    from .metrics import get_content_type, get_metrics

    @app.route('/metrics/prometheus')
    @limiter.exempt
    def _metrics_prometheus():
        return Response(get_metrics(), mimetype=get_content_type())

    rule_paths = sorted({r.rule for r in app.url_map.iter_rules()})
    log.info('Route map initialized count=%d routes=%s', len(rule_paths), rule_paths)
    return app
