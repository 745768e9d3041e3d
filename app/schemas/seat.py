from typing import Annotated, Optional, List
from pydantic import BaseModel, Field, field_validator
from decimal import Decimal
from datetime import datetime

from app.models.seat import SeatStatus


# One entry of the layout editor payload
class SeatSpec(BaseModel):
    id: Optional[int] = None
    seat_number: Annotated[str, Field(min_length=1, max_length=50, pattern=r"^[A-Za-z0-9]+$")]
    x_coord: Annotated[int, Field(ge=0, le=800)]
    y_coord: Annotated[int, Field(ge=0, le=600)]
    status: SeatStatus = SeatStatus.AVAILABLE
    custom_price: Optional[Annotated[Decimal, Field(ge=Decimal("50.00"), le=Decimal("1000.00"), decimal_places=2)]] = None
    is_ladies_only: bool = False

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        # Clients send "available" / "maintenance"; stored values are upper-case
        if isinstance(v, str):
            return v.upper()
        return v


class Seat(BaseModel):
    id: int
    hall_id: int
    seat_number: str
    x_coord: int
    y_coord: int
    status: SeatStatus
    custom_price: Optional[Decimal] = None
    is_ladies_only: bool = False
    maintenance_reason: Optional[str] = None
    maintenance_started: Optional[datetime] = None
    maintenance_until: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Seat layout save (POST /owner/seats/config/{hall_id})
class SeatConfigRequest(BaseModel):
    seats: List[SeatSpec]


class SeatConfigResponse(BaseModel):
    success: bool
    message: str
    seats: List[Seat] = []
    seat_count: Optional[int] = None


# --- Maintenance status ---

class SeatStatusUpdate(BaseModel):
    status: SeatStatus
    maintenance_reason: Optional[str] = None
    maintenance_until: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        # Clients send "available" / "maintenance"; stored values are upper-case
        if isinstance(v, str):
            return v.upper()
        return v


class BulkSeatStatusUpdate(SeatStatusUpdate):
    seat_ids: List[int]


class SeatMaintenanceStatus(BaseModel):
    id: int
    seat_number: str
    status: SeatStatus
    maintenance_reason: Optional[str] = None
    maintenance_started: Optional[datetime] = None
    maintenance_until: Optional[datetime] = None

    class Config:
        from_attributes = True


class BulkUpdateStatusResponse(BaseModel):
    updated_count: int
    failed_seats: List[int] = []
    seats: List[SeatMaintenanceStatus]
