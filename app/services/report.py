"""
Hall performance reports.

``assemble_report`` is pure: it turns bookings that are already filtered to
confirmed status, the seat total and the confirmed revenue into a
UtilizationReport. ``ReportService`` does the loading around it.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Sequence

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidDateRangeError
from app.models.hall import StudyHall
from app.models.user import User
from app.repositories.booking_repository import BookingRepository
from app.repositories.hall_repository import HallRepository
from app.repositories.seat_repository import SeatRepository
from app.schemas.report import BookingInterval, UtilizationReport, UtilizationReportResponse
from app.services.busiest_hours import count_booking_starts, rank_busiest_hours
from app.services.ownership import get_owned_hall
from app.services.utilization import (
    DEFAULT_OPERATING_HOURS_PER_DAY,
    average_utilization,
    compute_daily_utilization,
)

logger = logging.getLogger(__name__)


def check_date_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise InvalidDateRangeError()


def assemble_report(
    hall: StudyHall,
    start_date: date,
    end_date: date,
    total_seats: int,
    bookings: Sequence[BookingInterval],
    confirmed_revenue: Decimal,
    operating_hours_per_day: int = DEFAULT_OPERATING_HOURS_PER_DAY,
) -> UtilizationReport:
    check_date_range(start_date, end_date)

    daily = compute_daily_utilization(
        bookings, total_seats, start_date, end_date, operating_hours_per_day
    )
    return UtilizationReport(
        hall_id=hall.id,
        hall_name=hall.hall_name,
        start_date=start_date,
        end_date=end_date,
        total_revenue=confirmed_revenue,
        daily_utilization=daily,
        average_utilization=average_utilization(daily),
        busiest_hours=count_booking_starts(bookings, start_date, end_date),
        total_bookings=len(bookings),
        total_seats=total_seats,
    )


def to_response(report: UtilizationReport) -> UtilizationReportResponse:
    return UtilizationReportResponse(
        **report.model_dump(),
        ranked_busiest_hours=rank_busiest_hours(report.busiest_hours),
    )


class ReportService:
    def __init__(self, db: Session, operating_hours_per_day: int = DEFAULT_OPERATING_HOURS_PER_DAY):
        self.operating_hours_per_day = operating_hours_per_day
        self.halls = HallRepository(db)
        self.seats = SeatRepository(db)
        self.bookings = BookingRepository(db)

    def aggregate(self, hall_id: int, start_date: date, end_date: date, owner: User) -> UtilizationReport:
        """Load one consistent snapshot of the hall's data and assemble the report."""
        logger.debug("Aggregating report data for hall: %s, period: %s to %s", hall_id, start_date, end_date)
        check_date_range(start_date, end_date)
        hall = get_owned_hall(self.halls, hall_id, owner)

        total_seats = self.seats.count_for_hall(hall_id)
        bookings = self.bookings.load_bookings_in_range(hall_id, start_date, end_date)
        revenue = self.bookings.sum_confirmed_revenue(hall_id, start_date, end_date)

        report = assemble_report(
            hall, start_date, end_date, total_seats, bookings, revenue, self.operating_hours_per_day
        )
        logger.debug(
            "Report data aggregated - Revenue: %s, Avg Utilization: %.2f%%, Total Bookings: %d",
            report.total_revenue, report.average_utilization, report.total_bookings,
        )
        return report
