# gunicorn.conf.py
# Gunicorn configuration file
#   gunicorn --chdir backend app:app

import logging
import os

# Logging
accesslog = '-'  # Log to stdout
errorlog = '-'   # Log to stderr
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()

# Server socket
bind = f"0.0.0.0:{os.environ.get('PORT', '5001')}"

# Worker configuration
# Each request runs several iTunes calls back to back; sync workers are fine
workers = int(os.environ.get('WEB_CONCURRENCY', '2'))
worker_class = 'sync'
timeout = 60

# Server mechanics
daemon = False
pidfile = None
umask = 0
user = None
group = None
tmp_upload_dir = None


# Hooks
def post_worker_init(worker):
    """
    Called after a worker has been forked and initialized.
    """
    logger = logging.getLogger(__name__)
    logger.info(f"=== Worker initialized in PID {os.getpid()} ===")
