import os

# ============================================
# Worker Configuration
# ============================================

# number of judge worker threads started by `worker.py`
JUDGE_WORKERS = int(os.getenv('JUDGE_WORKERS', '2'))
# seconds a worker blocks on the queue before checking for shutdown
JUDGE_QUEUE_POLL = int(os.getenv('JUDGE_QUEUE_POLL', '5'))

# ============================================
# Logging Configuration
# ============================================

LOG_DIR = os.getenv('LOG_DIR', 'logs')

LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')
LOG_CONSOLE_LEVEL = os.getenv('LOG_CONSOLE_LEVEL', LOG_LEVEL)
# judge workers log from several threads, keep their names in the log
LOG_FORMAT = ('[%(asctime)s] %(levelname)s [%(threadName)s] '
              '%(name)s:%(lineno)d: %(message)s')

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': LOG_FORMAT,
        },
    },
    'loggers': {
        # too verbose for a judge log
        'pymongo': {
            'level': 'WARNING'
        },
        'mongoengine': {
            'level': 'WARNING'
        },
        'flask.app': {
            'level': LOG_LEVEL,
            'handlers': ['console', 'file'],
            'propagate': False,
        },
        'judge.worker': {
            'level': LOG_LEVEL,
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stderr',
            'formatter': 'default',
            'level': LOG_CONSOLE_LEVEL,
        },
        'file': {
            'class': 'logging.FileHandler',
            'filename': os.path.join(LOG_DIR, 'judge-debug.log'),
            'formatter': 'default',
            'encoding': 'utf-8',
        },
    },
    'root': {
        'level': LOG_LEVEL,
        'handlers': ['console', 'file'],
    },
}
