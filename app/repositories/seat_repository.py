from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.models.seat import Seat


class SeatRepository:
    """Data access for seats. Callers own commit/rollback."""

    def __init__(self, db: Session):
        self.db = db

    def list_for_hall(self, hall_id: int) -> List[Seat]:
        return (
            self.db.query(Seat)
            .filter(Seat.hall_id == hall_id)
            .order_by(Seat.seat_number, Seat.id)
            .all()
        )

    def count_for_hall(self, hall_id: int) -> int:
        return self.db.query(func.count(Seat.id)).filter(Seat.hall_id == hall_id).scalar() or 0

    def get(self, seat_id: int) -> Optional[Seat]:
        return (
            self.db.query(Seat)
            .options(joinedload(Seat.hall))
            .filter(Seat.id == seat_id)
            .first()
        )

    def get_many(self, seat_ids: Iterable[int]) -> List[Seat]:
        seat_ids = list(seat_ids)
        if not seat_ids:
            return []
        return (
            self.db.query(Seat)
            .options(joinedload(Seat.hall))
            .filter(Seat.id.in_(seat_ids))
            .order_by(Seat.id)
            .all()
        )

    def replace_seat_set(self, hall_id: int, seats: List[Seat]) -> List[Seat]:
        """Delete every seat of the hall, then insert ``seats``.

        Both statements are flushed inside the caller's transaction; nothing is
        visible to other sessions until the caller commits.
        """
        self.db.query(Seat).filter(Seat.hall_id == hall_id).delete(synchronize_session="fetch")
        self.db.flush()

        for seat in seats:
            seat.hall_id = hall_id
        self.db.add_all(seats)
        self.db.flush()
        return seats

    def delete_from_hall(self, seat_id: int, hall_id: int) -> int:
        deleted = (
            self.db.query(Seat)
            .filter(Seat.id == seat_id, Seat.hall_id == hall_id)
            .delete(synchronize_session="fetch")
        )
        self.db.flush()
        return deleted
