"""
Display formatting for optional record fields

By default presence is decided by truthiness, so ``None`` and empty or false
values share one placeholder. With ``strict=True`` only ``None`` counts as
missing.
"""

import pandas as pd

UNKNOWN_DATE = 'Unknown date'
INVALID_DATE = 'Invalid Date'
NO_TRANSCRIPT = 'None'
NO_LOCATION = 'Not provided'
NO_CONFIDENCE = 'n/a'
NO_NOTES = '–'
CORRECT_YES = '✅ Yes'
CORRECT_NO = '❌ No'
CORRECT_UNKNOWN = '❔ Unknown'


def is_present(value, strict=False):
    if strict:
        return value is not None
    return bool(value)


def format_timestamp(value, timezone='UTC'):
    """Render an ISO timestamp as M/D/YYYY, h:mm:ss AM/PM in ``timezone``"""
    if not value:
        return UNKNOWN_DATE
    ts = pd.to_datetime(value, utc=True, errors='coerce')
    if pd.isna(ts):
        return INVALID_DATE
    ts = ts.tz_convert(timezone)
    hour = ts.hour % 12 or 12
    meridiem = 'AM' if ts.hour < 12 else 'PM'
    return f"{ts.month}/{ts.day}/{ts.year}, {hour}:{ts.minute:02d}:{ts.second:02d} {meridiem}"


def format_confidence(value):
    """Confidence is missing only when null; zero is a real score"""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_was_correct(value, strict=False):
    if strict and value is None:
        return CORRECT_UNKNOWN
    return CORRECT_YES if value else CORRECT_NO


def format_raw(value):
    """Unlabelled fields render their value as-is and nothing when missing"""
    if value is None:
        return ''
    return str(value)
