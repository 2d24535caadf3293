from datetime import datetime, timedelta, date
from typing import Optional, Tuple

WEEK_START_DAYS = {
    "monday": 0,
    "sunday": 6,
}


def utc_today() -> date:
    """Current calendar date in UTC, the clock every "today" check uses."""
    return datetime.utcnow().date()


def start_of_week(day: date, week_start: str = "monday") -> date:
    """First day of the week containing ``day``.

    ``week_start`` is ``"monday"`` (ISO work week) or ``"sunday"``.
    """
    try:
        first_weekday = WEEK_START_DAYS[week_start.lower()]
    except KeyError:
        raise ValueError(f"Unknown week start: {week_start}")
    offset = (day.weekday() - first_weekday) % 7
    return day - timedelta(days=offset)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def get_date_range(filter_type: str, today: Optional[date] = None) -> Tuple[date, date]:
    """
    Returns (start_date, end_date) for filter types.

    Supported filter types:
    - 'today': Current day
    - 'yesterday': Previous day
    - 'this_week' or 'current_week': Monday to Sunday of current week
    - 'last_week': Monday to Sunday of previous week
    - 'this_month': First to last day of current month
    - 'last_month': First to last day of previous month
    """
    today = today or utc_today()

    if filter_type == 'today':
        return (today, today)

    elif filter_type == 'yesterday':
        yesterday = today - timedelta(days=1)
        return (yesterday, yesterday)

    elif filter_type == 'this_week' or filter_type == 'current_week':
        start = start_of_week(today)
        end = start + timedelta(days=6)  # Sunday
        return (start, end)

    elif filter_type == 'last_week':
        start = start_of_week(today) - timedelta(days=7)
        end = start + timedelta(days=6)
        return (start, end)

    elif filter_type == 'this_month':
        start = start_of_month(today)
        if today.month == 12:
            end = today.replace(day=31)
        else:
            next_month = today.replace(month=today.month + 1, day=1)
            end = next_month - timedelta(days=1)
        return (start, end)

    elif filter_type == 'last_month':
        last_of_last_month = start_of_month(today) - timedelta(days=1)
        start = last_of_last_month.replace(day=1)
        return (start, last_of_last_month)

    else:
        raise ValueError(f"Unknown filter type: {filter_type}")
