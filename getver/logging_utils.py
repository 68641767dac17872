import logging
import os
import threading
import time
from typing import Dict, Optional, Tuple

_SuppressionKey = Tuple[str, str, int]
_SuppressionState = Dict[str, float | int]

_SUPPRESSION_LOCK = threading.Lock()
_SUPPRESSION_STATE: Dict[_SuppressionKey, _SuppressionState] = {}

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def configure_logging(default_level: str = 'INFO', level_name: Optional[str] = None) -> int:
    """Configure root logging from ``GETVER_LOG_LEVEL`` / ``GETVER_LOG_FILE``.

    ``level_name`` wins over the environment when given. Returns the numeric
    level that was applied.
    """
    name = (level_name or os.environ.get('GETVER_LOG_LEVEL', default_level)).upper()
    level = getattr(logging, name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    # Optional rotating file handler for persistent logs
    log_file = os.environ.get('GETVER_LOG_FILE')
    if log_file:
        try:
            from logging.handlers import RotatingFileHandler
            max_bytes = int(os.environ.get('GETVER_LOG_MAX_BYTES', str(5 * 1024 * 1024)))
            backup = int(os.environ.get('GETVER_LOG_BACKUP_COUNT', '5'))
            fh = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup)
            fh.setLevel(level)
            fh.setFormatter(logging.Formatter(LOG_FORMAT))
            logging.getLogger().addHandler(fh)
            logging.getLogger(__name__).info(
                'RotatingFileHandler attached path=%s max_bytes=%d backups=%d',
                log_file, max_bytes, backup)
        except (OSError, ValueError):
            logging.getLogger(__name__).warning('failed attaching RotatingFileHandler for %s', log_file)
    # requests/urllib3 connection chatter is not useful at INFO
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    return level


def log_suppressed(
    logger: logging.Logger,
    exc: Exception,
    context: str,
    *,
    level: int = logging.DEBUG,
    sample: int = 5,
    cooldown: float = 120.0,
) -> int:
    """Emit a throttled log entry for repeated soft-failures.

    Parameters
    ----------
    logger: logging.Logger
        Target logger to write into.
    exc: Exception
        Exception instance that triggered the suppression log.
    context: str
        Identifier so repeated failures of the same kind (for example
        ``fetch``) are aggregated.
    level: int
        Logging level; defaults to ``DEBUG``.
    sample: int
        Emit the first ``sample`` occurrences before throttling kicks in.
    cooldown: float
        Minimum seconds between emissions once the initial sample budget is
        exhausted.

    Returns
    -------
    int
        Total number of times this ``context`` has requested logging (including
        suppressed writes).
    """
    now = time.time()
    key: _SuppressionKey = (logger.name, context, level)
    with _SUPPRESSION_LOCK:
        state = _SUPPRESSION_STATE.setdefault(key, {'count': 0, 'last_emit': 0.0})
        state['count'] = int(state['count']) + 1
        count = int(state['count'])
        last_emit = float(state.get('last_emit', 0.0))
        should_emit = count <= sample or (now - last_emit) >= cooldown
        if should_emit:
            state['last_emit'] = now
    if should_emit:
        logger.log(level, '%s err=%s (suppressed=%d)', context, exc, max(0, count - 1))
    return count


def get_suppressed_snapshot() -> Dict[str, Dict[str, float | int]]:
    """Return a shallow copy of suppression counters."""
    with _SUPPRESSION_LOCK:
        snapshot: Dict[str, Dict[str, float | int]] = {}
        for (logger_name, context, level), state in _SUPPRESSION_STATE.items():
            key = f'{logger_name}:{context}:{level}'
            snapshot[key] = {
                'count': int(state.get('count', 0)),
                'last_emit': float(state.get('last_emit', 0.0)),
            }
    return snapshot


def reset_suppressed_state() -> None:
    """Clear suppression counters. Useful for unit tests."""
    with _SUPPRESSION_LOCK:
        _SUPPRESSION_STATE.clear()
