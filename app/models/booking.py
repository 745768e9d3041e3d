import enum
from sqlalchemy import Column, Integer, DateTime, Numeric, ForeignKey, func, Enum as SAEnum
from sqlalchemy.orm import relationship
from app.db.session import Base

class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

# Statuses that count towards revenue and utilization reports
REPORTABLE_STATUSES = (BookingStatus.CONFIRMED,)

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    seat_id = Column(Integer, ForeignKey("seats.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    # Local wall-clock times, stored timezone-naive
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    status = Column(SAEnum(BookingStatus, native_enum=False), nullable=False, default=BookingStatus.PENDING, index=True)
    amount = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    seat = relationship("Seat", back_populates="bookings")
    user = relationship("User")
