from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_owner
from app.core.config import settings
from app.models.user import User
from app.repositories.hall_repository import HallRepository
from app.schemas.seat import Seat as SeatSchema, SeatConfigRequest, SeatConfigResponse
from app.services.ownership import get_owned_hall
from app.services.seat_layout import LayoutLimits, SeatLayoutManager

router = APIRouter(prefix="/owner/seats/config", tags=["Owner - Seat Layout"])


def _manager(db: Session) -> SeatLayoutManager:
    return SeatLayoutManager(db, limits=LayoutLimits.from_settings(settings))


# ---------------------------------------------------------------------------
# Whole-layout save / read
# ---------------------------------------------------------------------------


@router.post("/{hall_id}", response_model=SeatConfigResponse)
def save_seat_configuration(
    hall_id: int,
    data: SeatConfigRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_owner),
):
    """Replace every seat of the hall with the submitted layout."""
    get_owned_hall(HallRepository(db), hall_id, current_user)

    seats = _manager(db).replace_seats(hall_id, data.seats)
    return SeatConfigResponse(
        success=True,
        message="Seat configuration saved successfully",
        seats=[SeatSchema.model_validate(s) for s in seats],
        seat_count=len(seats),
    )


@router.get("/{hall_id}", response_model=List[SeatSchema])
def get_seat_configuration(
    hall_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_owner),
):
    get_owned_hall(HallRepository(db), hall_id, current_user)
    return _manager(db).get_seats(hall_id)


# ---------------------------------------------------------------------------
# Single seat delete
# ---------------------------------------------------------------------------


@router.delete("/{hall_id}/seats/{seat_id}", response_model=SeatConfigResponse)
def delete_seat(
    hall_id: int,
    seat_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_owner),
):
    get_owned_hall(HallRepository(db), hall_id, current_user)

    seat_count = _manager(db).delete_seat(hall_id, seat_id)
    return SeatConfigResponse(
        success=True,
        message="Seat deleted successfully",
        seat_count=seat_count,
    )
