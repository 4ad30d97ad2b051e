import datetime
from unittest.mock import MagicMock

import pytest
import requests
from freezegun import freeze_time

from waktusolat.errors import UpstreamFetchError
from waktusolat.models import PrayerTime
from waktusolat.services.api_adapters.esolat_adapter import ESolatAdapter
from waktusolat.services.ingestion_service import ingest_zone_month
from waktusolat.services.schedule_store import PrayerRecord
from waktusolat.utils.time_utils import days_in_month, format_date_long, weekday_name

BASE_URL = "https://www.e-solat.gov.my/index.php"


def _esolat_entry(date):
    return {
        "hijri": "1447-07-11",
        "date": format_date_long(date),
        "day": weekday_name(date),
        "imsak": "06:04:00",
        "fajr": "06:14:00",
        "syuruk": "07:26:00",
        "dhuhr": "13:24:00",
        "asr": "16:46:00",
        "maghrib": "19:18:00",
        "isha": "20:33:00",
    }


def _month_dates(year, month):
    return [datetime.date(year, month, day) for day in range(1, days_in_month(year, month) + 1)]


def _mock_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class FakeAdapter:
    def __init__(self, dates):
        self.dates = dates
        self.calls = []

    def fetch_month(self, zone, year, month):
        self.calls.append((zone, year, month))
        return [
            PrayerRecord(zone=zone, date=d, hijri="1447-07-11", fajr=datetime.time(6, 14), syuruk=datetime.time(7, 26),
                         dhuhr=datetime.time(13, 24), asr=datetime.time(16, 46), maghrib=datetime.time(19, 18),
                         isha=datetime.time(20, 33))
            for d in self.dates
        ]


# --- e-solat adapter ---

def test_esolat_adapter_requests_month_range(db, mocker):
    dates = _month_dates(2026, 1)
    # Upstream order is not trusted.
    payload = {"status": "OK!", "prayerTime": [_esolat_entry(d) for d in reversed(dates)]}
    mock_post = mocker.patch('waktusolat.services.api_adapters.esolat_adapter.requests.post',
                             return_value=_mock_response(payload))

    records = ESolatAdapter(BASE_URL, timeout=5).fetch_month("PNG01", 2026, 1)

    mock_post.assert_called_once_with(
        BASE_URL,
        params={"r": "esolatApi/takwimsolat", "period": "duration", "zone": "PNG01"},
        data={"datestart": "2026-01-01", "dateend": "2026-01-31"},
        timeout=5,
    )
    assert [r.date for r in records] == dates
    assert records[0].zone == "PNG01"
    assert records[0].fajr == datetime.time(6, 14)
    assert records[0].isha == datetime.time(20, 33)


def test_esolat_adapter_timeout(db, mocker):
    mocker.patch('waktusolat.services.api_adapters.esolat_adapter.requests.post',
                 side_effect=requests.exceptions.Timeout())
    with pytest.raises(UpstreamFetchError, match="Timeout"):
        ESolatAdapter(BASE_URL).fetch_month("PNG01", 2026, 1)


def test_esolat_adapter_http_error(db, mocker):
    response = _mock_response({})
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("503")
    mocker.patch('waktusolat.services.api_adapters.esolat_adapter.requests.post', return_value=response)
    with pytest.raises(UpstreamFetchError):
        ESolatAdapter(BASE_URL).fetch_month("PNG01", 2026, 1)


def test_esolat_adapter_error_status(db, mocker):
    mocker.patch('waktusolat.services.api_adapters.esolat_adapter.requests.post',
                 return_value=_mock_response({"status": "NO RECORD!", "prayerTime": None}))
    with pytest.raises(UpstreamFetchError, match="NO RECORD!"):
        ESolatAdapter(BASE_URL).fetch_month("PNG01", 2026, 1)


def test_esolat_adapter_malformed_entry(db, mocker):
    entry = _esolat_entry(datetime.date(2026, 1, 1))
    entry["fajr"] = "soon"
    mocker.patch('waktusolat.services.api_adapters.esolat_adapter.requests.post',
                 return_value=_mock_response({"status": "OK!", "prayerTime": [entry]}))
    with pytest.raises(UpstreamFetchError, match="Malformed"):
        ESolatAdapter(BASE_URL).fetch_month("PNG01", 2026, 1)


# --- ingestion ---

def test_ingest_zone_month_stores_complete_month(db):
    adapter = FakeAdapter(_month_dates(2026, 1))

    written = ingest_zone_month("PNG01", 2026, 1, adapter=adapter)

    assert written == 31
    assert adapter.calls == [("PNG01", 2026, 1)]
    assert PrayerTime.query.filter_by(zone="PNG01").count() == 31


def test_ingest_zone_month_refuses_incomplete_month(db):
    adapter = FakeAdapter(_month_dates(2026, 1)[:-1])

    with pytest.raises(UpstreamFetchError, match="Incomplete"):
        ingest_zone_month("PNG01", 2026, 1, adapter=adapter)
    assert PrayerTime.query.filter_by(zone="PNG01").count() == 0


def test_ingest_zone_month_uses_configured_adapter(db, mocker):
    adapter = FakeAdapter(_month_dates(2026, 2))
    mocker.patch('waktusolat.services.ingestion_service.get_selected_api_adapter', return_value=adapter)

    assert ingest_zone_month("SGR01", 2026, 2) == 28


# --- Celery tasks ---

def test_fetch_zone_month_task(db, mocker):
    from waktusolat import tasks

    mock_ingest = mocker.patch('waktusolat.services.ingestion_service.ingest_zone_month', return_value=31)

    result = tasks.fetch_zone_month("PNG01", 2026, 1)

    mock_ingest.assert_called_once_with("PNG01", 2026, 1)
    assert result == "Stored 31 days for PNG01 2026-01."


def test_fetch_zone_month_task_reraises(db, mocker):
    from waktusolat import tasks

    mocker.patch('waktusolat.services.ingestion_service.ingest_zone_month',
                 side_effect=UpstreamFetchError("upstream down"))

    with pytest.raises(UpstreamFetchError):
        tasks.fetch_zone_month("PNG01", 2026, 1)


def test_fetch_year_for_all_zones_dispatches_every_month(db, mocker):
    from waktusolat import tasks

    mock_task = mocker.patch('waktusolat.tasks.fetch_zone_month')

    dispatched = tasks.fetch_year_for_all_zones(2027)

    assert dispatched == 720
    assert mock_task.delay.call_count == 720
    mock_task.delay.assert_any_call("SGR01", 2027, 12)


# --- import script ---

def test_import_script_collects_failures(app, mocker):
    from scripts import import_prayer_times as script

    mocker.patch.object(script, 'create_app', return_value=app)
    mock_ingest = mocker.patch.object(
        script, 'ingest_zone_month',
        side_effect=[31, UpstreamFetchError("boom"), 31, 28]
    )

    failures = script.import_prayer_times(2026, zone_codes=["PNG01", "SGR01"], months=[1, 2], pause=None)

    assert failures == [("PNG01", 2)]
    assert mock_ingest.call_count == 4


def test_import_script_rejects_unknown_zone(app, mocker):
    from scripts import import_prayer_times as script

    mocker.patch.object(script, 'create_app', return_value=app)
    mock_ingest = mocker.patch.object(script, 'ingest_zone_month')

    failures = script.import_prayer_times(2026, zone_codes=["ASD01"], pause=None)

    assert failures == [("ASD01", None)]
    mock_ingest.assert_not_called()


@freeze_time("2026-12-31 17:00:00")
def test_fetch_year_for_all_zones_defaults_to_next_local_year(db, mocker):
    """17:00 UTC on 31 December is already 1 January 2027 in Kuala Lumpur."""
    from waktusolat import tasks

    mock_task = mocker.patch('waktusolat.tasks.fetch_zone_month')

    tasks.fetch_year_for_all_zones()

    mock_task.delay.assert_any_call("JHR01", 2028, 1)
    assert {c.args[1] for c in mock_task.delay.call_args_list} == {2028}


def test_celery_beat_prefetches_next_year(app):
    from waktusolat.celery_utils import PREFETCH_ENTRY, celery

    entry = celery.conf.beat_schedule[PREFETCH_ENTRY]
    assert entry['task'] == 'tasks.fetch_year_for_all_zones'
    assert entry['schedule'].month_of_year == {12}
    assert entry['schedule'].day_of_month == {1}
    assert celery.conf.timezone == app.config['ZONE_TIMEZONE']
