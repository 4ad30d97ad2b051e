# waktusolat/services/schedule_store.py
"""
Read/write access to stored prayer time facts.

Reads go through an optional Redis read-through cache keyed per zone and
month. Redis problems are logged and bypassed so that a cache outage never
fails a request.
"""
import datetime
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from flask import current_app
from redis import exceptions as redis_exceptions
from sqlalchemy.exc import SQLAlchemyError

from .. import db
from ..extensions import redis_client
from ..metrics import CACHE_HITS, CACHE_MISSES
from ..models import PrayerTime
from ..utils.time_utils import days_in_month, format_time_hms, parse_time_hms

PRAYER_FIELDS = ('fajr', 'syuruk', 'dhuhr', 'asr', 'maghrib', 'isha')


@dataclass(frozen=True)
class PrayerRecord:
    """One day of prayer times for a zone. Times are zone-local civil times."""

    zone: str
    date: datetime.date
    hijri: str
    fajr: datetime.time
    syuruk: datetime.time
    dhuhr: datetime.time
    asr: datetime.time
    maghrib: datetime.time
    isha: datetime.time

    def prayer_times(self) -> Dict[str, datetime.time]:
        return {name: getattr(self, name) for name in PRAYER_FIELDS}

    def to_dict(self) -> Dict[str, Any]:
        data = {'zone': self.zone, 'date': self.date.isoformat(), 'hijri': self.hijri}
        data.update({name: format_time_hms(value) for name, value in self.prayer_times().items()})
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PrayerRecord':
        return cls(
            zone=data['zone'],
            date=datetime.date.fromisoformat(data['date']),
            hijri=data['hijri'],
            **{name: parse_time_hms(data[name]) for name in PRAYER_FIELDS}
        )

    @classmethod
    def from_model(cls, row: PrayerTime) -> 'PrayerRecord':
        return cls(
            zone=row.zone,
            date=row.date,
            hijri=row.hijri,
            **{name: getattr(row, name) for name in PRAYER_FIELDS}
        )


def month_cache_key(zone: str, year: int, month: int) -> str:
    return f"schedule:{zone}:{year}:{month}"


def fetch_month(zone: str, year: int, month: int) -> List[PrayerRecord]:
    """
    Returns the stored records for one zone and one calendar month, ordered
    by date, or an empty list when nothing is stored.
    """
    cache_enabled = current_app.config.get('SCHEDULE_CACHE_ENABLED', False)
    redis_key = month_cache_key(zone, year, month)

    if cache_enabled:
        cached = _cache_get_json(redis_key)
        if cached:
            CACHE_HITS.labels(zone=zone).inc()
            current_app.logger.debug(f"Redis Cache HIT for zone '{zone}', {year}-{month:02d}.")
            return [PrayerRecord.from_dict(item) for item in cached]
        CACHE_MISSES.labels(zone=zone).inc()
        current_app.logger.debug(f"Redis Cache MISS for zone '{zone}', {year}-{month:02d}.")

    first_day = datetime.date(year, month, 1)
    last_day = datetime.date(year, month, days_in_month(year, month))
    rows = PrayerTime.query.filter(
        PrayerTime.zone == zone,
        PrayerTime.date >= first_day,
        PrayerTime.date <= last_day
    ).order_by(PrayerTime.date.asc()).all()

    records = [PrayerRecord.from_model(row) for row in rows]

    if cache_enabled and records:
        _cache_set_json(
            redis_key,
            [record.to_dict() for record in records],
            ttl=current_app.config['REDIS_TTL_MONTH_SCHEDULE']
        )
    return records


def upsert_month(zone: str, records: List[PrayerRecord]) -> int:
    """
    Writes a zone's records, replacing any existing rows for the same dates,
    in a single transaction. Returns the number of rows written.
    """
    if not records:
        return 0

    dates = [record.date for record in records]
    try:
        existing = {
            row.date: row for row in PrayerTime.query.filter(
                PrayerTime.zone == zone,
                PrayerTime.date.in_(dates)
            ).all()
        }
        for record in records:
            row = existing.get(record.date)
            if row is None:
                row = PrayerTime(zone=zone, date=record.date)
                db.session.add(row)
            row.hijri = record.hijri
            for name, value in record.prayer_times().items():
                setattr(row, name, value)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"DB upsert failed for zone '{zone}': {e}", exc_info=True)
        raise

    months = {(d.year, d.month) for d in dates}
    for year, month in months:
        _cache_delete(month_cache_key(zone, year, month))

    current_app.logger.info(f"Stored {len(records)} prayer time rows for zone '{zone}'.")
    return len(records)


def _cache_get_json(key: str) -> Optional[Any]:
    """Helper function to safely get and deserialize a JSON object from Redis."""
    try:
        cached_data = redis_client.get(key)
        if cached_data:
            return json.loads(cached_data)
        return None
    except (redis_exceptions.RedisError, json.JSONDecodeError) as e:
        current_app.logger.error(f"Redis GET or JSON load failed for key {key}: {e}", exc_info=True)
        return None


def _cache_set_json(key: str, value: Any, ttl: int) -> None:
    """Helper function to safely serialize and set a JSON object in Redis."""
    try:
        redis_client.set(key, json.dumps(value), ex=ttl)
    except redis_exceptions.RedisError as e:
        current_app.logger.error(f"Redis SET failed for key {key}: {e}", exc_info=True)


def _cache_delete(key: str) -> None:
    if not current_app.config.get('SCHEDULE_CACHE_ENABLED', False):
        return
    try:
        redis_client.delete(key)
    except redis_exceptions.RedisError as e:
        current_app.logger.error(f"Redis DELETE failed for key {key}: {e}", exc_info=True)
