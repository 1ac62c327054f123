from typing import List, Optional, Union
from datetime import date, datetime, time, timedelta

from zein_bus.bookings.schemas import SelectableDate

DEFAULT_WINDOW_DAYS = 7
DEFAULT_CUTOFF_HOUR = 18
FRIDAY = 4  # date.weekday()

# Monday first, matching date.weekday()
ARABIC_WEEKDAYS = [
    "الاثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت", "الأحد"
]
ARABIC_MONTHS = [
    "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
    "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر"
]

def parse_start_date(value: Union[date, datetime, str, None]) -> Optional[date]:
    """Window start from a date, datetime or ISO string; None when unset or unreadable"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None

def parse_cutoff_time(value: Union[time, str, None]) -> Optional[time]:
    """End-of-day cutoff from "HH:MM"; an unreadable hour becomes 18:00"""
    if value is None:
        return None
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    text = value.strip()
    if not text:
        return None

    parts = text.split(":")
    hour_text = parts[0].strip()
    minute_text = parts[1].strip()[:2] if len(parts) > 1 else ""

    hour = int(hour_text) if hour_text.isdigit() and int(hour_text) <= 23 else DEFAULT_CUTOFF_HOUR
    minute = int(minute_text) if minute_text.isdigit() and int(minute_text) <= 59 else 0
    return time(hour=hour, minute=minute)

def format_day_label(day: date) -> str:
    """Arabic display label, e.g. "السبت، 18 أكتوبر" """
    return f"{ARABIC_WEEKDAYS[day.weekday()]}، {day.day} {ARABIC_MONTHS[day.month - 1]}"

def is_past_cutoff(now: datetime, cutoff: Optional[time]) -> bool:
    if cutoff is None:
        return False
    naive_now = now.replace(tzinfo=None)
    return naive_now > datetime.combine(naive_now.date(), cutoff)

def generate_available_days(
    start_date: Union[date, datetime, str, None],
    days_count: Optional[int],
    cancel_friday: bool = False,
    end_of_day_cutoff: Union[time, str, None] = None,
    now: Optional[datetime] = None
) -> List[SelectableDate]:
    """Bookable days in the window [start_date, start_date + days_count].

    Both ends are inclusive. Days before today are dropped (today itself
    is kept), Fridays are dropped when cancel_friday is set, and once the
    cutoff has passed today and tomorrow are dropped as well.
    """
    window_start = parse_start_date(start_date)
    if window_start is None:
        return []

    if days_count is None:
        days_count = DEFAULT_WINDOW_DAYS
    window_end = window_start + timedelta(days=days_count)

    now = now or datetime.now()
    today = now.date()
    tomorrow = today + timedelta(days=1)
    past_cutoff = is_past_cutoff(now, parse_cutoff_time(end_of_day_cutoff))

    available_days = []
    current = window_start
    while current <= window_end:
        day = current
        current += timedelta(days=1)

        if day < today:
            continue
        if cancel_friday and day.weekday() == FRIDAY:
            continue
        if past_cutoff and day in (today, tomorrow):
            continue

        available_days.append(SelectableDate(
            value=day.isoformat(),
            label=format_day_label(day)
        ))

    return available_days
