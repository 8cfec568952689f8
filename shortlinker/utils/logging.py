"""JSON logging for the lambda handlers

`initialize_logging()` runs on import of each lambda package, so every record
a handler emits goes to stdout as one JSON object. Fields passed through
`extra=` (shortcode, event, statusCode, durationMs, ...) become top-level keys:

    {"timestamp": "2025-10-15T12:00:00.000Z", "level": "INFO",
     "logger": "shortlinker.lambdas.redirect_url.app",
     "message": "Redirecting client to target URL. Responding with 307.",
     "shortcode": "1", "event": "REDIRECT_SUCCESS", "durationMs": 1.204}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shortlinker.constants import ENV


# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', logging.INFO, '', 0, '', None, None))) | {'message', 'asctime', 'taskName'}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update({key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS})

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    """Route the root logger to stdout through JsonFormatter at LOG_LEVEL (default INFO)"""
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper(),
                'handlers': ['stdout'],
            },
        }
    )
