# utils.py
from config import DAYS_PER_MONTH

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def month_of_day(day_of_year: int) -> int:
    """Month index 0..11 for a day of the modelled year (30.42-day months)."""
    return min(int(day_of_year / DAYS_PER_MONTH), 11)


def hour_to_calendar(hour: int) -> tuple[int, int, int, int]:
    """
    Split an hour index of the modelled year into
    (day_of_year, month, hour_of_day, day_of_week).

    The year starts on day_of_week 0 (Sunday); there are no real dates.
    """
    day_of_year = hour // 24
    return day_of_year, month_of_day(day_of_year), hour % 24, day_of_year % 7
