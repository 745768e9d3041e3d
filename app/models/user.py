import enum
from sqlalchemy import Column, String, Integer, DateTime, func, Enum as SAEnum
from sqlalchemy.orm import relationship
from app.db.session import Base

class UserRole(str, enum.Enum):
    STUDENT = "STUDENT"
    OWNER = "OWNER"
    ADMIN = "ADMIN"

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=True)
    role = Column(SAEnum(UserRole, native_enum=False), nullable=False, default=UserRole.STUDENT)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    halls = relationship("StudyHall", back_populates="owner")
