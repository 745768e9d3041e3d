"""
Seat maintenance-state transitions.

    -> MAINTENANCE   needs a reason; stamps maintenance_started
    -> AVAILABLE     clears every maintenance field
    -> BOOKED/LOCKED status only (driven by the booking flow)
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.exceptions import (
    EmptySeatSelectionError,
    InvalidMaintenanceReasonError,
    MissingMaintenanceReasonError,
    SeatNotFoundError,
    SomeSeatsNotFoundError,
)
from app.models.seat import MaintenanceReason, Seat, SeatStatus
from app.models.user import User
from app.repositories.seat_repository import SeatRepository
from app.services.ownership import ensure_hall_owner

logger = logging.getLogger(__name__)

MAINTENANCE_REASONS = tuple(reason.value for reason in MaintenanceReason)


def _check_reason(status: SeatStatus, reason: Optional[str]) -> Optional[str]:
    if status != SeatStatus.MAINTENANCE:
        return None
    if not reason:
        raise MissingMaintenanceReasonError()
    if reason not in MAINTENANCE_REASONS:
        raise InvalidMaintenanceReasonError(reason, MAINTENANCE_REASONS)
    return reason


def apply_transition(
    seat: Seat,
    status: SeatStatus,
    reason: Optional[str],
    until: Optional[datetime],
    now: datetime,
) -> Seat:
    """Mutate ``seat`` in place. ``reason`` must already be checked."""
    if status == SeatStatus.MAINTENANCE:
        seat.status = SeatStatus.MAINTENANCE
        seat.maintenance_reason = reason
        seat.maintenance_started = now
        seat.maintenance_until = until
    elif status == SeatStatus.AVAILABLE:
        seat.status = SeatStatus.AVAILABLE
        seat.maintenance_reason = None
        seat.maintenance_started = None
        seat.maintenance_until = None
    else:
        seat.status = status
    return seat


class SeatStatusManager:
    def __init__(self, db: Session, clock: Callable[[], datetime] = datetime.now):
        self.db = db
        self.clock = clock
        self.seats = SeatRepository(db)

    def update_status(
        self,
        seat_id: int,
        owner: User,
        status: SeatStatus,
        maintenance_reason: Optional[str] = None,
        maintenance_until: Optional[datetime] = None,
    ) -> Seat:
        logger.debug("Updating status for seat %s", seat_id)
        status = SeatStatus(status)
        reason = _check_reason(status, maintenance_reason)

        seat = self.seats.get(seat_id)
        if not seat:
            raise SeatNotFoundError(seat_id)
        ensure_hall_owner(seat.hall, owner)

        try:
            apply_transition(seat, status, reason, maintenance_until, self.clock())
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(seat)
        logger.info("Updated seat %s to status: %s", seat_id, status.value)
        return seat

    def bulk_update_status(
        self,
        seat_ids: Sequence[int],
        owner: User,
        status: SeatStatus,
        maintenance_reason: Optional[str] = None,
        maintenance_until: Optional[datetime] = None,
    ) -> List[Seat]:
        """Transition several seats at once.

        Every seat is resolved and ownership-checked before any is touched, so
        a missing or foreign seat leaves all of them unchanged.
        """
        # Repeated ids in one request refer to the same seat
        requested = list(dict.fromkeys(seat_ids))
        if not requested:
            raise EmptySeatSelectionError()

        status = SeatStatus(status)
        logger.debug("Bulk updating %d seats to status: %s", len(requested), status.value)
        reason = _check_reason(status, maintenance_reason)

        seats = self.seats.get_many(requested)
        if len(seats) != len(requested):
            raise SomeSeatsNotFoundError(len(requested), len(seats))

        for seat in seats:
            ensure_hall_owner(seat.hall, owner)

        now = self.clock()
        try:
            for seat in seats:
                apply_transition(seat, status, reason, maintenance_until, now)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        for seat in seats:
            self.db.refresh(seat)
        logger.info("Bulk updated %d seats to status: %s", len(seats), status.value)
        return seats
