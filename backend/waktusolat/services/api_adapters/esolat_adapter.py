# waktusolat/services/api_adapters/esolat_adapter.py

import datetime

import requests
from flask import current_app

from ...errors import UpstreamFetchError
from ...metrics import UPSTREAM_REQUEST_DURATION_SECONDS, UPSTREAM_REQUESTS_TOTAL
from ...utils.time_utils import days_in_month, parse_date_long, parse_time_hms
from ..schedule_store import PRAYER_FIELDS, PrayerRecord
from .base_adapter import BaseScheduleAdapter


class ESolatAdapter(BaseScheduleAdapter):
    """
    Adapter for JAKIM's e-solat `takwimsolat` API.

    A month is requested with `period=duration` and an explicit date range,
    because `period=month` only ever returns the current month.
    """

    adapter_name = "ESolatAdapter"

    def fetch_month(self, zone, year, month):
        first_day = datetime.date(year, month, 1)
        last_day = datetime.date(year, month, days_in_month(year, month))
        current_app.logger.info(f"ESolatAdapter: Fetching {zone} for {year}-{month:02d}")

        params = {"r": "esolatApi/takwimsolat", "period": "duration", "zone": zone}
        form = {"datestart": first_day.isoformat(), "dateend": last_day.isoformat()}

        try:
            with UPSTREAM_REQUEST_DURATION_SECONDS.labels(adapter_name=self.adapter_name).time():
                response = requests.post(self.base_url, params=params, data=form, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            UPSTREAM_REQUESTS_TOTAL.labels(adapter_name=self.adapter_name, status='timeout').inc()
            current_app.logger.error(f"ESolatAdapter: Timeout fetching {zone} for {year}-{month:02d}.")
            raise UpstreamFetchError(f"Timeout fetching {zone} for {year}-{month:02d}") from e
        except requests.exceptions.RequestException as e:
            UPSTREAM_REQUESTS_TOTAL.labels(adapter_name=self.adapter_name, status='error').inc()
            current_app.logger.error(f"ESolatAdapter: RequestException for {zone} {year}-{month:02d}: {e}", exc_info=True)
            raise UpstreamFetchError(f"Request failed for {zone} {year}-{month:02d}: {e}") from e
        except ValueError as e:
            UPSTREAM_REQUESTS_TOTAL.labels(adapter_name=self.adapter_name, status='error').inc()
            current_app.logger.error(f"ESolatAdapter: Invalid JSON for {zone} {year}-{month:02d}: {e}")
            raise UpstreamFetchError(f"Invalid JSON for {zone} {year}-{month:02d}") from e

        if data.get("status") != "OK!" or not isinstance(data.get("prayerTime"), list):
            UPSTREAM_REQUESTS_TOTAL.labels(adapter_name=self.adapter_name, status='error').inc()
            current_app.logger.error(f"ESolatAdapter: API error for {zone} {year}-{month:02d}. Status: {data.get('status')}")
            raise UpstreamFetchError(f"Upstream returned status {data.get('status')!r} for {zone} {year}-{month:02d}")

        UPSTREAM_REQUESTS_TOTAL.labels(adapter_name=self.adapter_name, status='success').inc()
        records = [self._parse_entry(zone, entry) for entry in data["prayerTime"]]
        records.sort(key=lambda record: record.date)
        current_app.logger.info(f"ESolatAdapter: Received {len(records)} days for {zone} {year}-{month:02d}.")
        return records

    @staticmethod
    def _parse_entry(zone, entry):
        try:
            return PrayerRecord(
                zone=zone,
                date=parse_date_long(entry["date"]),
                hijri=entry["hijri"],
                **{name: parse_time_hms(entry[name]) for name in PRAYER_FIELDS}
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamFetchError(f"Malformed e-solat entry for {zone}: {entry!r}") from e


def get_selected_api_adapter():
    """
    Instantiates and returns the upstream adapter based on configuration.
    """
    base_url = current_app.config.get('ESOLAT_API_BASE_URL')
    if not base_url:
        raise UpstreamFetchError("ESOLAT_API_BASE_URL is not configured.")
    return ESolatAdapter(base_url=base_url, timeout=current_app.config.get('ESOLAT_API_TIMEOUT', 30))
