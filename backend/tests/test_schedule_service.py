import datetime

import pytest
from freezegun import freeze_time

from waktusolat.errors import ScheduleIntegrityError, ScheduleNotFoundError
from waktusolat.models import PrayerTime
from waktusolat.services.schedule_service import resolve_month_schedule


def test_resolves_full_month_in_date_order(seed_month):
    seed_month("KDH01", 2025, 5)

    schedule = resolve_month_schedule("KDH01", 2025, 5)

    assert schedule.zone == "KDH01"
    assert schedule.period == (2025, 5)
    assert len(schedule.records) == 31
    assert [r.date.day for r in schedule.records] == list(range(1, 32))


def test_month_overflow_rolls_into_next_year(seed_month):
    """
    GIVEN January 2026 is stored
    WHEN month 13 of 2025 is requested
    THEN January 2026 is served and the raw request is kept for echoing
    """
    seed_month("PNG01", 2026, 1)

    schedule = resolve_month_schedule("PNG01", 2025, 13)

    assert schedule.period == (2026, 1)
    assert schedule.requested_year == 2025
    assert schedule.requested_month == 13
    assert schedule.records[0].date == datetime.date(2026, 1, 1)


def test_month_zero_rolls_back_to_december(seed_month):
    seed_month("PNG01", 2025, 12)

    schedule = resolve_month_schedule("PNG01", 2026, 0)

    assert schedule.period == (2025, 12)
    assert len(schedule.records) == 31


def test_not_found_message_uses_normalized_period(db):
    with pytest.raises(ScheduleNotFoundError) as excinfo:
        resolve_month_schedule("SGR01", 2025, 13)
    assert excinfo.value.message == "No data found for zone: SGR01 for Jan/2026"


def test_unknown_zone_is_not_found(seed_month):
    seed_month("SGR01", 2026, 1)
    with pytest.raises(ScheduleNotFoundError) as excinfo:
        resolve_month_schedule("ASD01", 2026, 1)
    assert excinfo.value.message == "No data found for zone: ASD01 for Jan/2026"


def test_other_zones_do_not_leak_into_month(seed_month):
    seed_month("SGR01", 2026, 1)
    seed_month("SGR02", 2026, 1)

    schedule = resolve_month_schedule("SGR02", 2026, 1)

    assert {r.zone for r in schedule.records} == {"SGR02"}
    assert len(schedule.records) == 31


def test_truncated_month_is_an_integrity_error(seed_month):
    seed_month("SGR01", 2026, 1, days=30)
    with pytest.raises(ScheduleIntegrityError):
        resolve_month_schedule("SGR01", 2026, 1)


def test_missing_day_is_an_integrity_error(seed_month, db):
    seed_month("SGR01", 2026, 1)
    PrayerTime.query.filter_by(zone="SGR01", date=datetime.date(2026, 1, 15)).delete()
    db.session.commit()

    with pytest.raises(ScheduleIntegrityError):
        resolve_month_schedule("SGR01", 2026, 1)


def test_leap_february_needs_twenty_nine_days(seed_month):
    seed_month("JHR01", 2028, 2)
    schedule = resolve_month_schedule("JHR01", 2028, 2)
    assert len(schedule.records) == 29


@freeze_time("2026-01-15 04:00:00")
def test_defaults_to_current_month_in_zone_timezone(seed_month):
    seed_month("WLY01", 2026, 1)

    schedule = resolve_month_schedule("WLY01")

    assert schedule.period == (2026, 1)
    assert schedule.requested_year == 2026
    assert schedule.requested_month == 1


@freeze_time("2026-05-31 17:30:00")
def test_current_month_follows_local_date_not_utc(seed_month):
    """17:30 UTC on 31 May is already 1 June in Kuala Lumpur."""
    seed_month("WLY01", 2026, 6)

    schedule = resolve_month_schedule("WLY01")

    assert schedule.period == (2026, 6)


@freeze_time("2026-06-10 04:00:00")
def test_missing_year_defaults_to_current_year(seed_month):
    seed_month("WLY01", 2026, 3)

    schedule = resolve_month_schedule("WLY01", month=3)

    assert schedule.period == (2026, 3)
    assert schedule.requested_year == 2026


@pytest.mark.parametrize("year, month, expected", [
    (9999, 13, "No data found for zone: SGR01 for Jan/10000"),
    (1, 0, "No data found for zone: SGR01 for Dec/0"),
])
def test_period_outside_calendar_years_is_not_found(db, mocker, year, month, expected):
    fetch = mocker.patch('waktusolat.services.schedule_store.fetch_month')

    with pytest.raises(ScheduleNotFoundError) as excinfo:
        resolve_month_schedule("SGR01", year, month)

    assert excinfo.value.message == expected
    fetch.assert_not_called()
