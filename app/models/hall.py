from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, JSON, func
from sqlalchemy.orm import relationship
from app.db.session import Base

class StudyHall(Base):
    __tablename__ = "study_halls"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    hall_name = Column(String(255), nullable=False)
    seat_count = Column(Integer, nullable=False, default=0)
    # {"monday": {"open": "06:00", "close": "22:00", "shifts": [...]}, ...}
    opening_hours = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    owner = relationship("User", back_populates="halls")
    seats = relationship("Seat", back_populates="hall", cascade="all, delete-orphan")
