# Entry point for Celery workers:
#   celery -A celery_worker.celery worker --loglevel=info
import os

from waktusolat import create_app
from waktusolat.celery_utils import celery  # noqa: F401
from waktusolat import tasks  # noqa: F401  (register tasks)

app = create_app(os.environ.get('FLASK_CONFIG') or 'default')
