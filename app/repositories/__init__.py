from app.repositories.hall_repository import HallRepository
from app.repositories.seat_repository import SeatRepository
from app.repositories.booking_repository import BookingRepository
