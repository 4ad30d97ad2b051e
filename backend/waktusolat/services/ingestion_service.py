# waktusolat/services/ingestion_service.py
"""
Populates the schedule store from the upstream e-solat service.

A month is only written when the upstream returned exactly one record for
each day of that month; a partial month would later be rejected by the
schedule resolver, so it is refused here instead.
"""
import datetime

from flask import current_app

from ..errors import UpstreamFetchError
from ..utils.time_utils import days_in_month
from . import schedule_store
from .api_adapters.esolat_adapter import get_selected_api_adapter


def ingest_zone_month(zone, year, month, adapter=None):
    """
    Fetches one zone's month from upstream and stores it.

    Returns:
        int: number of rows written.

    Raises:
        UpstreamFetchError: if the upstream fails or returns an incomplete month.
    """
    adapter = adapter or get_selected_api_adapter()
    records = adapter.fetch_month(zone, year, month)

    expected_dates = [datetime.date(year, month, day) for day in range(1, days_in_month(year, month) + 1)]
    received_dates = [record.date for record in records]
    if received_dates != expected_dates:
        current_app.logger.error(
            f"Upstream month for '{zone}' {year}-{month:02d} is incomplete: "
            f"{len(received_dates)} of {len(expected_dates)} days."
        )
        raise UpstreamFetchError(f"Incomplete month from upstream for {zone} {year}-{month:02d}")

    return schedule_store.upsert_month(zone, records)
