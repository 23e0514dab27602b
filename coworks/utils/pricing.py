import calendar
from datetime import date, datetime, time

SUPPORTED_DURATIONS = (1, 3, 6, 12)  # months

# hour picker runs 08:00 .. 21:00
OPENING_HOUR = 8
CLOSING_HOUR = 21


def calculate_total_amount(price_per_month: float, duration: int) -> float:
    """Total for a monthly booking, computed once at creation time."""
    return round(price_per_month * duration, 2)


def to_minor_units(amount: float) -> int:
    """Rupees -> paise for the gateway order and checkout widget"""
    return int(round(amount * 100))


def add_months(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def booking_window(booking_date: date, start_hour: int, duration: int):
    """
    Return (start_time, end_time, total_hours) for a booking that starts at
    `start_hour` on `booking_date` and lasts `duration` calendar months.
    """
    start_time = datetime.combine(booking_date, time(hour=start_hour))
    end_time = add_months(start_time, duration)
    total_hours = (end_time - start_time).total_seconds() / 3600
    return start_time, end_time, total_hours
