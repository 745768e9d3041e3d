from app.schemas.common import ErrorResponse
from app.schemas.shift import Weekday, Shift, DayHours, ShiftConfigRequest, ShiftConfigResponse
from app.schemas.seat import (
    Seat, SeatSpec, SeatConfigRequest, SeatConfigResponse,
    SeatStatusUpdate, BulkSeatStatusUpdate, SeatMaintenanceStatus, BulkUpdateStatusResponse,
)
from app.schemas.report import BookingInterval, HourCount, UtilizationReport, UtilizationReportResponse
