from datetime import date, datetime

import pytest

from app.models.booking import BookingStatus
from app.schemas.report import BookingInterval
from app.services.utilization import (
    average_utilization,
    booked_hours_by_date,
    compute_daily_utilization,
    iter_dates,
)


def interval(start: datetime, end: datetime, seat_id: int = 1) -> BookingInterval:
    return BookingInterval(seat_id=seat_id, start_time=start, end_time=end, status=BookingStatus.CONFIRMED)


DAY = date(2024, 3, 4)


def test_iter_dates_is_inclusive():
    assert list(iter_dates(date(2024, 2, 28), date(2024, 3, 1))) == [
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ]


def test_single_day_range_has_one_entry():
    assert list(compute_daily_utilization([], 5, DAY, DAY)) == [DAY]


def test_utilization_is_capped_at_one_hundred():
    # 20 booked hours against 1 seat * 12 operating hours
    bookings = [
        interval(datetime(2024, 3, 4, 6), datetime(2024, 3, 4, 16)),
        interval(datetime(2024, 3, 4, 8), datetime(2024, 3, 4, 18)),
    ]
    assert compute_daily_utilization(bookings, 1, DAY, DAY) == {DAY: 100.0}


def test_fractional_hours_count():
    bookings = [interval(datetime(2024, 3, 4, 9), datetime(2024, 3, 4, 10, 30))]
    assert compute_daily_utilization(bookings, 1, DAY, DAY)[DAY] == pytest.approx(12.5)


def test_hall_without_seats_reports_zero_every_day():
    bookings = [interval(datetime(2024, 3, 4, 9), datetime(2024, 3, 4, 12))]
    daily = compute_daily_utilization(bookings, 0, DAY, date(2024, 3, 6))
    assert daily == {date(2024, 3, 4): 0.0, date(2024, 3, 5): 0.0, date(2024, 3, 6): 0.0}


def test_booking_across_midnight_counts_toward_start_date():
    bookings = [interval(datetime(2024, 3, 4, 22), datetime(2024, 3, 5, 4))]
    hours = booked_hours_by_date(bookings, DAY, date(2024, 3, 5))
    assert hours == {date(2024, 3, 4): 6.0, date(2024, 3, 5): 0.0}


def test_bookings_starting_outside_the_range_are_ignored():
    bookings = [
        interval(datetime(2024, 3, 3, 23), datetime(2024, 3, 4, 2)),
        interval(datetime(2024, 3, 5, 9), datetime(2024, 3, 5, 10)),
    ]
    assert booked_hours_by_date(bookings, DAY, DAY) == {DAY: 0.0}


def test_end_before_start_contributes_nothing():
    bookings = [interval(datetime(2024, 3, 4, 12), datetime(2024, 3, 4, 10))]
    assert booked_hours_by_date(bookings, DAY, DAY) == {DAY: 0.0}


def test_operating_hours_are_configurable():
    bookings = [interval(datetime(2024, 3, 4, 9), datetime(2024, 3, 4, 13))]
    daily = compute_daily_utilization(bookings, 2, DAY, DAY, operating_hours_per_day=8)
    assert daily[DAY] == pytest.approx(25.0)


def test_average_includes_days_without_bookings():
    # 2 seats * 12h = 24 available; 12h booked on the first day -> 50%
    bookings = [
        interval(datetime(2024, 3, 4, 8), datetime(2024, 3, 4, 14), seat_id=1),
        interval(datetime(2024, 3, 4, 8), datetime(2024, 3, 4, 14), seat_id=2),
    ]
    daily = compute_daily_utilization(bookings, 2, DAY, date(2024, 3, 5))
    assert daily == {date(2024, 3, 4): 50.0, date(2024, 3, 5): 0.0}
    assert average_utilization(daily) == pytest.approx(25.0)


def test_average_of_nothing_is_zero():
    assert average_utilization({}) == 0.0
