import logging
import re
import sys

LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Loggers that would otherwise log every backend round trip
QUIET_LOGGERS = ('httpx', 'httpcore')
# uvicorn installs its own handlers; route them through ours instead
UVICORN_LOGGERS = ('uvicorn', 'uvicorn.error', 'uvicorn.access')

_BEARER = re.compile(r'(Bearer\s+)[A-Za-z0-9\-_.=]+')


class RedactTokenFilter(logging.Filter):
    """Masks bearer tokens so backend JWTs never reach the log"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if 'Bearer' in message:
            record.msg = _BEARER.sub(r'\1***', message)
            record.args = None
        return True


class _LevelColorFormatter(logging.Formatter):
    _COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    _RESET = '\033[0m'

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        color = self._COLORS.get(record.levelno)
        return f"{color}{line}{self._RESET}" if color else line


def setup_logging(level: int | str = logging.INFO, stream=None) -> logging.Handler:
    """Install the service's console handler on the root logger and return it."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    stream = stream or sys.stdout
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.addFilter(RedactTokenFilter())

    formatter_class = _LevelColorFormatter if stream.isatty() else logging.Formatter
    handler.setFormatter(formatter_class(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler
