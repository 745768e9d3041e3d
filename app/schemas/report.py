from typing import Dict, List
from pydantic import BaseModel
from decimal import Decimal
from datetime import date, datetime

from app.models.booking import BookingStatus


# Read-only view of a booking as the reporting code needs it
class BookingInterval(BaseModel):
    seat_id: int
    start_time: datetime
    end_time: datetime
    status: BookingStatus

    class Config:
        from_attributes = True
        frozen = True


class HourCount(BaseModel):
    hour: int
    count: int


class UtilizationReport(BaseModel):
    hall_id: int
    hall_name: str
    start_date: date
    end_date: date
    total_revenue: Decimal
    daily_utilization: Dict[date, float]     # date -> percent [0, 100]
    average_utilization: float
    busiest_hours: Dict[int, int]            # hour of day [0, 23] -> booking starts
    total_bookings: int
    total_seats: int

    class Config:
        frozen = True


# GET /owner/reports/{hall_id}/summary
class UtilizationReportResponse(UtilizationReport):
    ranked_busiest_hours: List[HourCount]
