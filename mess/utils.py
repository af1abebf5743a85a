import logging
from datetime import date, datetime, timedelta

import pytz
from dateutil import parser
from django.conf import settings

logger = logging.getLogger(__name__)

MESS_TZ = pytz.timezone(getattr(settings, "MESS_TIME_ZONE", "Asia/Kolkata"))


def mess_today():
    return datetime.now(MESS_TZ).date()


def resolve_date_keyword(date_str, default=None):
    """
    Turn "today", "tomorrow", "2025-04-10" or fuzzy input like "10 Apr"
    into a date in the mess time zone. Returns ``default`` for empty input
    and raises ValueError for input that cannot be read as a date.
    """
    if isinstance(date_str, date):
        return date_str
    if not date_str or not isinstance(date_str, str):
        return default

    date_str = date_str.strip().lower()
    today = mess_today()

    if date_str == "today":
        return today
    if date_str == "tomorrow":
        return today + timedelta(days=1)

    # First try strict YYYY-MM-DD
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        pass

    try:
        return parser.parse(date_str, dayfirst=True, default=datetime(today.year, 1, 1)).date()
    except (ValueError, OverflowError):
        logger.info("Unrecognized date string: %s", date_str)
        raise ValueError(f"Could not understand the date '{date_str}'.")


def friendly_date_string(date_obj):
    """
    Given a date object, returns a string like '19th July, 2025'.
    """
    day = date_obj.day
    suffix = "th" if 11 <= day <= 13 else {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix} {date_obj.strftime('%B, %Y')}"
