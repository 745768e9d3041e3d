
from app.db.session import Base
from app.models.user import User
from app.models.hall import StudyHall
from app.models.seat import Seat
from app.models.booking import Booking
