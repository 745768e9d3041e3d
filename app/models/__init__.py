from app.models.user import User, UserRole
from app.models.hall import StudyHall
from app.models.seat import Seat, SeatStatus, MaintenanceReason
from app.models.booking import Booking, BookingStatus
