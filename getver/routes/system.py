import time
from flask import Blueprint, jsonify, current_app

system_bp = Blueprint('system', __name__)

_START_TIME = time.time()


@system_bp.route('/health', methods=['GET'])
def health():
    # lightweight status; no crawling here
    uptime = time.time() - _START_TIME
    return jsonify({'status': 'ok', 'uptime_seconds': round(uptime, 2)})


@system_bp.route('/version', methods=['GET'])
def version():
    settings = current_app.config['GETVER_SETTINGS']
    uptime = time.time() - _START_TIME
    return jsonify({
        'version': settings.version,
        'uptime_seconds': round(uptime, 2),
        'limits': {
            'max_depth': settings.max_depth,
            'max_workers': settings.max_workers,
            'max_words': settings.max_words,
            'max_pages': settings.max_pages,
        },
    })
