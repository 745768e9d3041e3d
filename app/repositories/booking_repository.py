from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.booking import Booking, REPORTABLE_STATUSES
from app.models.seat import Seat
from app.schemas.report import BookingInterval


def _day_bounds(start_date: date, end_date: date) -> Tuple[datetime, datetime]:
    """[start_date 00:00, end_date + 1 day 00:00), so the end date is inclusive."""
    return (
        datetime.combine(start_date, time.min),
        datetime.combine(end_date + timedelta(days=1), time.min),
    )


class BookingRepository:
    """Read-only queries over bookings, scoped to one hall."""

    def __init__(self, db: Session):
        self.db = db

    def _confirmed_in_range(self, hall_id: int, start_date: date, end_date: date):
        range_start, range_end = _day_bounds(start_date, end_date)
        return (
            self.db.query(Booking)
            .join(Seat, Seat.id == Booking.seat_id)
            .filter(
                Seat.hall_id == hall_id,
                Booking.status.in_(REPORTABLE_STATUSES),
                Booking.start_time >= range_start,
                Booking.start_time < range_end,
            )
        )

    def load_bookings_in_range(self, hall_id: int, start_date: date, end_date: date) -> List[BookingInterval]:
        rows = self._confirmed_in_range(hall_id, start_date, end_date).order_by(Booking.start_time).all()
        return [BookingInterval.model_validate(row) for row in rows]

    def sum_confirmed_revenue(self, hall_id: int, start_date: date, end_date: date) -> Decimal:
        total = (
            self._confirmed_in_range(hall_id, start_date, end_date)
            .with_entities(func.coalesce(func.sum(Booking.amount), 0))
            .scalar()
        )
        return Decimal(str(total or 0))
