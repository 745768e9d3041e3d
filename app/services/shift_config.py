import logging
import uuid
from typing import Dict, Mapping

from sqlalchemy.orm import Session

from app.models.user import User
from app.repositories.hall_repository import HallRepository
from app.schemas.shift import DayHours, Shift, Weekday
from app.services.ownership import get_owned_hall
from app.services.shift_validator import WeekSchedule, validate_opening_hours

logger = logging.getLogger(__name__)


def default_opening_hours() -> Dict[Weekday, DayHours]:
    """Template shown to owners who have not saved opening hours yet."""
    return {
        Weekday.monday: DayHours(
            open="06:00",
            close="22:00",
            shifts=[
                Shift(id=str(uuid.uuid4()), name="Morning", start_time="06:00", end_time="12:00"),
                Shift(id=str(uuid.uuid4()), name="Afternoon", start_time="12:00", end_time="18:00"),
                Shift(id=str(uuid.uuid4()), name="Evening", start_time="18:00", end_time="22:00"),
            ],
        )
    }


class ShiftConfigurationService:
    def __init__(self, db: Session):
        self.db = db
        self.halls = HallRepository(db)

    def save(self, hall_id: int, opening_hours: Mapping[Weekday, DayHours], owner: User) -> Dict[Weekday, DayHours]:
        """Validate and store the full week, replacing whatever was saved before."""
        logger.debug("Saving shift configuration for hall: %s, user: %s", hall_id, owner.id)
        hall = get_owned_hall(self.halls, hall_id, owner)

        schedule = validate_opening_hours(opening_hours)

        try:
            self.halls.save_day_hours(hall, schedule.to_dict())
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Saved shift configuration for hall: %s", hall_id)
        return dict(schedule.items())

    def get(self, hall_id: int, owner: User) -> Dict[Weekday, DayHours]:
        logger.debug("Fetching shift configuration for hall: %s, user: %s", hall_id, owner.id)
        hall = get_owned_hall(self.halls, hall_id, owner)

        schedule = WeekSchedule.from_dict(hall.opening_hours)
        if not schedule:
            logger.debug("No shifts configured for hall: %s, returning defaults", hall_id)
            return default_opening_hours()

        return dict(schedule.items())
