import enum
from sqlalchemy import (
    Column, String, Boolean, Integer, Numeric, ForeignKey, DateTime, UniqueConstraint, func,
    Enum as SAEnum,
)
from sqlalchemy.orm import relationship
from app.db.session import Base

class SeatStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    MAINTENANCE = "MAINTENANCE"
    BOOKED = "BOOKED"
    LOCKED = "LOCKED"

class MaintenanceReason(str, enum.Enum):
    CLEANING = "Cleaning"
    REPAIR = "Repair"
    INSPECTION = "Inspection"
    OTHER = "Other"

class Seat(Base):
    __tablename__ = "seats"
    __table_args__ = (
        UniqueConstraint("hall_id", "seat_number", name="uq_seats_hall_seat_number"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    hall_id = Column(Integer, ForeignKey("study_halls.id"), nullable=False, index=True)
    seat_number = Column(String(50), nullable=False)
    x_coord = Column(Integer, nullable=False)
    y_coord = Column(Integer, nullable=False)
    status = Column(SAEnum(SeatStatus, native_enum=False), nullable=False, default=SeatStatus.AVAILABLE)
    custom_price = Column(Numeric(6, 2), nullable=True)
    is_ladies_only = Column(Boolean, nullable=False, default=False)

    # Maintenance metadata, only populated while status == MAINTENANCE
    maintenance_reason = Column(String(20), nullable=True)
    maintenance_started = Column(DateTime, nullable=True)
    maintenance_until = Column(DateTime, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    hall = relationship("StudyHall", back_populates="seats")
    bookings = relationship("Booking", back_populates="seat")
