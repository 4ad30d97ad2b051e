# waktusolat/schemas.py

from marshmallow import Schema, fields


class MessageSchema(Schema):
    message = fields.Str(required=True)


class ErrorSchema(Schema):
    error = fields.Str(required=True)


class PeriodArgsSchema(Schema):
    """Optional ?year=&month= query. month may be any integer and rolls over."""
    year = fields.Int()
    month = fields.Int()


# --- Legacy v1 ---

class PrayerTimeV1Schema(Schema):
    hijri = fields.Str(required=True)
    date = fields.Str(required=True)
    day = fields.Str(required=True)
    fajr = fields.Str(required=True)
    syuruk = fields.Str(required=True)
    dhuhr = fields.Str(required=True)
    asr = fields.Str(required=True)
    maghrib = fields.Str(required=True)
    isha = fields.Str(required=True)


class SolatV1Schema(Schema):
    status = fields.Str(required=True)
    zone = fields.Str(required=True)
    periodType = fields.Str(required=True)
    prayerTime = fields.List(fields.Nested(PrayerTimeV1Schema), required=True)


# --- v2 ---

class PrayerTimeV2Schema(Schema):
    day = fields.Int(required=True)
    hijri = fields.Str(required=True)
    fajr = fields.Int(required=True)
    syuruk = fields.Int(required=True)
    dhuhr = fields.Int(required=True)
    asr = fields.Int(required=True)
    maghrib = fields.Int(required=True)
    isha = fields.Int(required=True)


class SolatV2Schema(Schema):
    zone = fields.Str(required=True)
    year = fields.Int(required=True)
    month = fields.Str(required=True)
    month_number = fields.Int(required=True)
    prayers = fields.List(fields.Nested(PrayerTimeV2Schema), required=True)


# --- Zones ---

class ZoneSchema(Schema):
    """Serializes a gazetteer Zone as {jakimCode, negeri, daerah}."""
    jakimCode = fields.Str(attribute="code", dump_only=True)
    negeri = fields.Str(attribute="state_name", dump_only=True)
    daerah = fields.Str(attribute="district_label", dump_only=True)


class ZoneLocationSchema(Schema):
    zone = fields.Function(lambda location: location.zone.code)
    state = fields.Str()
    district = fields.Str()
