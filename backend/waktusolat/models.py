# waktusolat/models.py

from datetime import datetime
from . import db


class PrayerTime(db.Model):
    """
    Stores one day of official prayer times for a single JAKIM zone.

    Rows are facts imported from the upstream e-solat service. They are read
    one whole month at a time by the schedule store.
    """
    __tablename__ = 'prayer_time'

    # One row per zone per calendar day.
    __table_args__ = (db.UniqueConstraint('zone', 'date', name='uq_zone_date'),)

    id = db.Column(db.Integer, primary_key=True)

    # JAKIM zone code, e.g. 'SGR01'. Matched case-sensitively.
    zone = db.Column(db.String(10), nullable=False, index=True)

    # Gregorian calendar day the times belong to.
    date = db.Column(db.Date, nullable=False, index=True)

    # Islamic calendar date as 'YYYY-MM-DD'.
    hijri = db.Column(db.String(10), nullable=False)

    # Zone-local civil times (see ZONE_TIMEZONE).
    fajr = db.Column(db.Time, nullable=False)
    syuruk = db.Column(db.Time, nullable=False)
    dhuhr = db.Column(db.Time, nullable=False)
    asr = db.Column(db.Time, nullable=False)
    maghrib = db.Column(db.Time, nullable=False)
    isha = db.Column(db.Time, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<PrayerTime Zone:{self.zone} Date:{self.date}>'
