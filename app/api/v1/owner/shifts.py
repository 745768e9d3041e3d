from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_owner
from app.models.user import User
from app.schemas.shift import ShiftConfigRequest, ShiftConfigResponse
from app.services.shift_config import ShiftConfigurationService

router = APIRouter(prefix="/owner/halls", tags=["Owner - Shifts"])


@router.post("/{hall_id}/shifts", response_model=ShiftConfigResponse)
def save_shift_configuration(
    hall_id: int,
    data: ShiftConfigRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_owner),
):
    """
    Save the hall's weekly opening hours and shifts.

    The submitted map replaces the stored one as a whole. Per day:
    - `open` must be before `close` (24-hour `HH:mm`)
    - every shift must start before it ends and sit inside `open`–`close`
    - shifts must not overlap; back-to-back shifts (`12:00` end, `12:00` start) are fine
    """
    saved = ShiftConfigurationService(db).save(hall_id, data.opening_hours, current_user)
    return ShiftConfigResponse(
        success=True,
        message="Shift configuration saved successfully",
        opening_hours=saved,
    )


@router.get("/{hall_id}/shifts")
def get_shift_configuration(
    hall_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_owner),
):
    """Stored opening hours, or the 06:00–22:00 default template (not saved) when none exist."""
    opening_hours = ShiftConfigurationService(db).get(hall_id, current_user)
    return {day.value: hours.model_dump() for day, hours in opening_hours.items()}
