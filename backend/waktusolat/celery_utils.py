"""
Celery application for schedule ingestion.

Tasks run inside the Flask app context, and a beat entry refreshes next
year's schedules for every zone once a year.
"""
from celery import Celery
from celery.schedules import crontab

celery = Celery(__name__, include=['waktusolat.tasks'])

PREFETCH_ENTRY = 'prefetch-next-year-schedules'


def init_celery(app):
    """
    Configures the shared Celery instance from the Flask app.

    Args:
        app (Flask): The configured Flask application instance.

    Returns:
        Celery: The configured Celery instance.
    """
    celery.conf.update(
        broker_url=app.config['CELERY_BROKER_URL'],
        result_backend=app.config['CELERY_RESULT_BACKEND'],
        timezone=app.config['ZONE_TIMEZONE'],
        beat_schedule={
            PREFETCH_ENTRY: {
                'task': 'tasks.fetch_year_for_all_zones',
                'schedule': crontab(**app.config['PREFETCH_SCHEDULE']),
            },
        },
    )

    class ContextTask(celery.Task):
        def __call__(self, *args, **kwargs):
            with app.app_context():
                return self.run(*args, **kwargs)

    celery.Task = ContextTask
    return celery
