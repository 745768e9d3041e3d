from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.models.hall import StudyHall


class HallRepository:
    """Data access for study halls and their stored opening hours."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, hall_id: int) -> Optional[StudyHall]:
        return self.db.query(StudyHall).filter(StudyHall.id == hall_id).first()

    def get_for_update(self, hall_id: int) -> Optional[StudyHall]:
        # Row lock on PostgreSQL; a no-op on SQLite
        return (
            self.db.query(StudyHall)
            .filter(StudyHall.id == hall_id)
            .with_for_update()
            .first()
        )

    def load_day_hours(self, hall_id: int) -> Optional[Dict[str, Any]]:
        hall = self.get(hall_id)
        return hall.opening_hours if hall else None

    def save_day_hours(self, hall: StudyHall, opening_hours: Dict[str, Any]) -> None:
        # Whole-map replacement; the JSON column is never patched in place
        hall.opening_hours = opening_hours
        self.db.add(hall)
        self.db.flush()

    def set_seat_count(self, hall_id: int, seat_count: int) -> None:
        (
            self.db.query(StudyHall)
            .filter(StudyHall.id == hall_id)
            .update({"seat_count": seat_count}, synchronize_session="fetch")
        )
