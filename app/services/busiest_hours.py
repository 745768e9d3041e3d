from collections import Counter
from datetime import date
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from app.models.booking import REPORTABLE_STATUSES
from app.repositories.booking_repository import BookingRepository
from app.schemas.report import BookingInterval, HourCount


def count_booking_starts(
    bookings: Iterable[BookingInterval], start_date: date, end_date: date
) -> Dict[int, int]:
    """Hour of day -> number of confirmed bookings starting in that hour.

    Hours are pooled across every day of the range; hours with no booking
    starts are left out.
    """
    counts = Counter(
        booking.start_time.hour
        for booking in bookings
        if booking.status in REPORTABLE_STATUSES
        and start_date <= booking.start_time.date() <= end_date
    )
    return dict(sorted(counts.items()))


def rank_busiest_hours(histogram: Dict[int, int]) -> List[HourCount]:
    """Busiest first; equal counts ordered by the earlier hour."""
    ranked = sorted(histogram.items(), key=lambda item: (-item[1], item[0]))
    return [HourCount(hour=hour, count=count) for hour, count in ranked]


def compute_busiest_hours(db: Session, hall_id: int, start_date: date, end_date: date) -> Dict[int, int]:
    bookings = BookingRepository(db).load_bookings_in_range(hall_id, start_date, end_date)
    return count_booking_starts(bookings, start_date, end_date)
