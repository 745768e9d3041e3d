"""
Daily seat utilization.

    utilization(day) = booked seat-hours / (total seats * operating hours) * 100

capped at 100. Each booking counts towards the calendar date it starts on,
including bookings that run past midnight.
"""

from datetime import date, timedelta
from typing import Dict, Iterable, Iterator

from app.schemas.report import BookingInterval

DEFAULT_OPERATING_HOURS_PER_DAY = 12


def iter_dates(start_date: date, end_date: date) -> Iterator[date]:
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def booked_hours_by_date(
    bookings: Iterable[BookingInterval], start_date: date, end_date: date
) -> Dict[date, float]:
    hours = {day: 0.0 for day in iter_dates(start_date, end_date)}
    for booking in bookings:
        day = booking.start_time.date()
        if day not in hours:
            continue
        hours[day] += max(0.0, (booking.end_time - booking.start_time).total_seconds() / 3600)
    return hours


def compute_daily_utilization(
    bookings: Iterable[BookingInterval],
    total_seats: int,
    start_date: date,
    end_date: date,
    operating_hours_per_day: int = DEFAULT_OPERATING_HOURS_PER_DAY,
) -> Dict[date, float]:
    """Percent of available seat-hours booked, per date in [start_date, end_date]."""
    booked = booked_hours_by_date(bookings, start_date, end_date)
    available_hours = total_seats * operating_hours_per_day
    if available_hours <= 0:
        return {day: 0.0 for day in booked}

    return {
        day: max(0.0, min(100.0, hours / available_hours * 100))
        for day, hours in booked.items()
    }


def average_utilization(daily_utilization: Dict[date, float]) -> float:
    """Mean over every day in the range, zero days included."""
    if not daily_utilization:
        return 0.0
    return sum(daily_utilization.values()) / len(daily_utilization)
