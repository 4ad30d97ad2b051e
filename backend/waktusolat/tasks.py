"""
Celery tasks that keep the prayer time store populated from JAKIM e-solat.
"""
from flask import current_app

from .celery_utils import celery
from .metrics import BACKGROUND_TASK_DURATION_SECONDS, BACKGROUND_TASK_RUNS_TOTAL


@celery.task(name='tasks.fetch_zone_month')
def fetch_zone_month(zone, year, month):
    """
    Fetches one month for one zone from e-solat and stores it.
    Failures are logged, counted and re-raised so Celery records them.
    """
    with BACKGROUND_TASK_DURATION_SECONDS.labels(task_name='fetch_zone_month').time():
        current_app.logger.info(f"[CELERY TASK] Fetching zone '{zone}' for {year}-{month:02d}.")
        try:
            from .services.ingestion_service import ingest_zone_month

            written = ingest_zone_month(zone, year, month)
            result_message = f"Stored {written} days for {zone} {year}-{month:02d}."
            current_app.logger.info(f"[CELERY TASK] {result_message}")
            BACKGROUND_TASK_RUNS_TOTAL.labels(task_name='fetch_zone_month', status='success').inc()
            return result_message
        except Exception as e:
            current_app.logger.error(f"[CELERY TASK] Fetch failed for zone '{zone}' {year}-{month:02d}: {e}", exc_info=True)
            BACKGROUND_TASK_RUNS_TOTAL.labels(task_name='fetch_zone_month', status='failure').inc()
            raise


@celery.task(name='tasks.fetch_year_for_all_zones')
def fetch_year_for_all_zones(year=None):
    """
    Dispatches one fetch_zone_month task per zone per month of `year`.
    Without a year (the yearly beat run) it prefetches next year.
    Returns the number of tasks dispatched.
    """
    from .services.gazetteer import get_gazetteer
    from .utils.time_utils import current_date

    if year is None:
        year = current_date(current_app.config['ZONE_TIMEZONE']).year + 1

    dispatched = 0
    for zone in get_gazetteer():
        for month in range(1, 13):
            fetch_zone_month.delay(zone.code, year, month)
            dispatched += 1

    current_app.logger.info(f"[CELERY TASK] Dispatched {dispatched} fetch tasks for {year}.")
    BACKGROUND_TASK_RUNS_TOTAL.labels(task_name='fetch_year_for_all_zones', status='success').inc()
    return dispatched
