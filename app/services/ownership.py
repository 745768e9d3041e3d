import logging

from app.core.exceptions import ForbiddenError, HallNotFoundError
from app.models.hall import StudyHall
from app.models.user import User
from app.repositories.hall_repository import HallRepository

logger = logging.getLogger(__name__)


def ensure_hall_owner(hall: StudyHall, owner: User) -> None:
    if hall.owner_id != owner.id:
        logger.warning("Unauthorized access attempt: user %s tried to access hall %s", owner.id, hall.id)
        raise ForbiddenError()


def get_owned_hall(halls: HallRepository, hall_id: int, owner: User) -> StudyHall:
    """Load a hall and check the caller owns it (404 before 403)."""
    hall = halls.get(hall_id)
    if not hall:
        raise HallNotFoundError(hall_id)
    ensure_hall_owner(hall, owner)
    return hall
