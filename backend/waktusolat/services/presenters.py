# waktusolat/services/presenters.py
"""
Wire projections of a resolved MonthSchedule.

v1 mirrors the legacy e-solat response shape with formatted local times.
v2 reports absolute instants (epoch seconds) per prayer. On a rollover
request v2 echoes the requested year and month number while naming the
normalized month (year=2025, month_number=13, month='JAN'); clients depend
on this mixed shape, so it is kept as is.
"""
from typing import Any, Dict

from ..utils.time_utils import (
    format_date_long,
    format_time_hms,
    month_abbr,
    to_epoch,
    weekday_name,
)
from .schedule_service import MonthSchedule
from .schedule_store import PRAYER_FIELDS


def present_v1(schedule: MonthSchedule) -> Dict[str, Any]:
    prayer_time = []
    for record in schedule.records:
        entry = {
            'hijri': record.hijri,
            'date': format_date_long(record.date),
            'day': weekday_name(record.date),
        }
        entry.update({name: format_time_hms(value) for name, value in record.prayer_times().items()})
        prayer_time.append(entry)

    return {
        'status': 'OK!',
        'zone': schedule.zone,
        'periodType': 'month',
        'prayerTime': prayer_time,
    }


def present_v2(schedule: MonthSchedule, tz_name: str) -> Dict[str, Any]:
    prayers = []
    for record in schedule.records:
        entry = {'day': record.date.day, 'hijri': record.hijri}
        for name in PRAYER_FIELDS:
            entry[name] = to_epoch(record.date, getattr(record, name), tz_name)
        prayers.append(entry)

    return {
        'zone': schedule.zone,
        'year': schedule.requested_year,
        'month': month_abbr(schedule.period.month).upper(),
        'month_number': schedule.requested_month,
        'prayers': prayers,
    }
