from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_owner
from app.models.user import User
from app.schemas.seat import (
    BulkSeatStatusUpdate,
    BulkUpdateStatusResponse,
    SeatMaintenanceStatus,
    SeatStatusUpdate,
)
from app.services.seat_status import SeatStatusManager

router = APIRouter(prefix="/owner/seats", tags=["Owner - Seat Status"])


# Declared before /{seat_id}/status so "bulk-status" is never read as a seat id
@router.patch("/bulk-status", response_model=BulkUpdateStatusResponse)
def bulk_update_seat_status(
    data: BulkSeatStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_owner),
):
    """
    Move several seats to one status.

    All seats must exist and belong to halls you own; otherwise nothing is changed.
    """
    seats = SeatStatusManager(db).bulk_update_status(
        data.seat_ids,
        current_user,
        data.status,
        maintenance_reason=data.maintenance_reason,
        maintenance_until=data.maintenance_until,
    )
    return BulkUpdateStatusResponse(
        updated_count=len(seats),
        failed_seats=[],
        seats=[SeatMaintenanceStatus.model_validate(s) for s in seats],
    )


@router.patch("/{seat_id}/status", response_model=SeatMaintenanceStatus)
def update_seat_status(
    seat_id: int,
    data: SeatStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_owner),
):
    """`maintenance` needs a `maintenance_reason` (Cleaning, Repair, Inspection, Other); `available` clears it."""
    return SeatStatusManager(db).update_status(
        seat_id,
        current_user,
        data.status,
        maintenance_reason=data.maintenance_reason,
        maintenance_until=data.maintenance_until,
    )
