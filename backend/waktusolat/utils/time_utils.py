import calendar
import datetime
from collections import namedtuple
from zoneinfo import ZoneInfo

NormalizedPeriod = namedtuple('NormalizedPeriod', ['year', 'month'])

# Fixed English abbreviations, independent of the process locale.
MONTH_ABBR_EN = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']
WEEKDAY_NAMES_EN = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']
MONTH_NAMES_MS = [
    'Januari', 'Februari', 'Mac', 'April', 'Mei', 'Jun',
    'Julai', 'Ogos', 'September', 'Oktober', 'November', 'Disember'
]


def normalize_period(year, raw_month):
    """
    Maps a requested (year, month) onto a valid calendar month.

    The month may be any integer. Values outside 1-12 roll across year
    boundaries using floor division, so month 13 is January of the next
    year and month 0 is December of the previous year.

    Args:
        year (int): The requested year.
        raw_month (int): The requested month, unbounded.

    Returns:
        NormalizedPeriod: (year, month) with month in 1..12.
    """
    year_offset, month_index = divmod(raw_month - 1, 12)
    return NormalizedPeriod(year + year_offset, month_index + 1)


def days_in_month(year, month):
    return calendar.monthrange(year, month)[1]


def month_abbr(month):
    """English three-letter abbreviation, e.g. 'Jan'."""
    return MONTH_ABBR_EN[month - 1]


def month_name_ms(month):
    """Malay month name as printed on the schedule, e.g. 'Januari'."""
    return MONTH_NAMES_MS[month - 1]


def current_date(tz_name):
    """Today's date in the given civil timezone."""
    return datetime.datetime.now(ZoneInfo(tz_name)).date()


def to_epoch(date_obj, time_obj, tz_name):
    """Absolute instant (epoch seconds) for a civil date and time in tz_name."""
    local_dt = datetime.datetime.combine(date_obj, time_obj, tzinfo=ZoneInfo(tz_name))
    return int(local_dt.timestamp())


def format_time_hms(time_obj):
    return time_obj.strftime("%H:%M:%S")


def format_date_long(date_obj):
    """DD-Mon-YYYY with an English month abbreviation, e.g. 01-May-2025."""
    return f"{date_obj.day:02d}-{month_abbr(date_obj.month)}-{date_obj.year}"


def format_date_numeric(date_obj):
    """DD-MM-YYYY, e.g. 01-01-2026."""
    return date_obj.strftime("%d-%m-%Y")


def weekday_name(date_obj):
    return WEEKDAY_NAMES_EN[date_obj.weekday()]


def parse_time_hms(time_str):
    """
    Parses an HH:MM:SS (or HH:MM) string into a datetime.time object.
    Raises ValueError if the string matches neither format.
    """
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.datetime.strptime(time_str.strip(), fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized time string: {time_str!r}")


def parse_date_long(date_str):
    """Parses DD-Mon-YYYY (English abbreviation) into a datetime.date."""
    day_str, mon_str, year_str = date_str.strip().split('-')
    month = MONTH_ABBR_EN.index(mon_str.capitalize()) + 1
    return datetime.date(int(year_str), month, int(day_str))
