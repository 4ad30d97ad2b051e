# waktusolat/services/schedule_service.py
"""
Month schedule resolution.

Turns a zone code and an optional requested (year, month) into a complete,
validated month of prayer records. The requested month may overflow 1-12;
it is normalized onto the calendar before the store is queried. A month is
served whole or not at all.
"""
import datetime
from dataclasses import dataclass
from typing import List, Optional

from flask import current_app

from ..errors import ScheduleIntegrityError, ScheduleNotFoundError
from ..metrics import SCHEDULE_LOOKUPS_TOTAL
from ..utils.time_utils import NormalizedPeriod, current_date, days_in_month, month_abbr, normalize_period
from . import schedule_store
from .schedule_store import PrayerRecord


@dataclass(frozen=True)
class MonthSchedule:
    zone: str
    requested_year: int
    requested_month: int
    period: NormalizedPeriod
    records: List[PrayerRecord]


def resolve_month_schedule(zone_code: str, year: Optional[int] = None, month: Optional[int] = None) -> MonthSchedule:
    """
    Resolves the full month schedule for a zone.

    Missing year or month values default to the current date in the
    configured zone timezone.

    Raises:
        ScheduleNotFoundError: if the store has no records for the zone and
            normalized period (this also covers unknown zone codes).
        ScheduleIntegrityError: if the stored month is not exactly one
            record per day in date order.
    """
    if year is None or month is None:
        today = current_date(current_app.config['ZONE_TIMEZONE'])
        year = today.year if year is None else year
        month = today.month if month is None else month

    period = normalize_period(year, month)
    current_app.logger.info(f"Resolving schedule for zone '{zone_code}': requested {year}/{month}, normalized {period.year}/{period.month}.")

    # No calendar date, hence no stored data, exists outside these years.
    if not datetime.MINYEAR <= period.year <= datetime.MAXYEAR:
        records = []
    else:
        records = schedule_store.fetch_month(zone_code, period.year, period.month)
    if not records:
        SCHEDULE_LOOKUPS_TOTAL.labels(status='not_found').inc()
        current_app.logger.warning(f"No stored prayer times for zone '{zone_code}' in {period.year}-{period.month:02d}.")
        raise ScheduleNotFoundError(zone_code, period.year, month_abbr(period.month))

    _check_month_integrity(zone_code, period, records)
    SCHEDULE_LOOKUPS_TOTAL.labels(status='found').inc()

    return MonthSchedule(
        zone=zone_code,
        requested_year=year,
        requested_month=month,
        period=period,
        records=records,
    )


def _check_month_integrity(zone_code: str, period: NormalizedPeriod, records: List[PrayerRecord]) -> None:
    """Every day of the month must be present exactly once and in order."""
    expected_days = days_in_month(period.year, period.month)
    if len(records) != expected_days:
        current_app.logger.error(
            f"Schedule integrity violation for zone '{zone_code}' {period.year}-{period.month:02d}: "
            f"expected {expected_days} days, store returned {len(records)}."
        )
        raise ScheduleIntegrityError(
            f"Expected {expected_days} records for {zone_code} {period.year}-{period.month:02d}, got {len(records)}."
        )

    for day, record in enumerate(records, start=1):
        expected_date = datetime.date(period.year, period.month, day)
        if record.date != expected_date:
            current_app.logger.error(
                f"Schedule integrity violation for zone '{zone_code}': record {day} is dated {record.date}, expected {expected_date}."
            )
            raise ScheduleIntegrityError(
                f"Records for {zone_code} {period.year}-{period.month:02d} are not contiguous at day {day}."
            )
