"""
Seat layout management: wholesale replacement of a hall's seat set, listing
and single-seat deletion, with the hall's ``seat_count`` kept in step.
"""

import logging
import re
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterator, List, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.exceptions import (
    DuplicateSeatNumberError,
    EmptySeatListError,
    HallNotFoundError,
    InvalidDataError,
    InvalidSeatSpecError,
    SeatNotFoundError,
)
from app.models.seat import Seat, SeatStatus
from app.repositories.hall_repository import HallRepository
from app.repositories.seat_repository import SeatRepository
from app.schemas.seat import SeatSpec

logger = logging.getLogger(__name__)

_SEAT_NUMBER = re.compile(r"^[A-Za-z0-9]+$")


@dataclass(frozen=True)
class LayoutLimits:
    x_max: int = 800
    y_max: int = 600
    price_min: Decimal = Decimal("50.00")
    price_max: Decimal = Decimal("1000.00")
    seat_number_max_length: int = 50

    @classmethod
    def from_settings(cls, settings: Settings) -> "LayoutLimits":
        return cls(
            x_max=settings.SEAT_X_MAX,
            y_max=settings.SEAT_Y_MAX,
            price_min=settings.SEAT_PRICE_MIN,
            price_max=settings.SEAT_PRICE_MAX,
            seat_number_max_length=settings.SEAT_NUMBER_MAX_LENGTH,
        )


class HallLockRegistry:
    """One lock per hall id, created on first use.

    Locks are never evicted, so the registry holds one entry per hall id
    written since startup.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}

    def lock_for(self, hall_id: int) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(hall_id, threading.Lock())

    @contextmanager
    def hold(self, hall_id: int) -> Iterator[None]:
        with self.lock_for(hall_id):
            yield


# Shared by every SeatLayoutManager in the process
hall_locks = HallLockRegistry()


def find_duplicate_seat_numbers(specs: Sequence[SeatSpec]) -> List[str]:
    seen = set()
    duplicates = set()
    for spec in specs:
        if spec.seat_number in seen:
            duplicates.add(spec.seat_number)
        seen.add(spec.seat_number)
    return sorted(duplicates)


def check_seat_spec(spec: SeatSpec, limits: LayoutLimits) -> None:
    """Re-check the bounds the request schema already enforces.

    Specs built with ``model_construct`` or by internal callers skip pydantic
    validation, so nothing out of range reaches the database.
    """
    number = spec.seat_number
    if not isinstance(number, str) or not number:
        raise InvalidSeatSpecError(str(number), "seat number is required")
    if len(number) > limits.seat_number_max_length:
        raise InvalidSeatSpecError(
            number, f"seat number must be at most {limits.seat_number_max_length} characters"
        )
    if not _SEAT_NUMBER.match(number):
        raise InvalidSeatSpecError(number, "seat number must be alphanumeric")

    if not isinstance(spec.x_coord, int) or not 0 <= spec.x_coord <= limits.x_max:
        raise InvalidSeatSpecError(number, f"x coordinate must be between 0 and {limits.x_max}")
    if not isinstance(spec.y_coord, int) or not 0 <= spec.y_coord <= limits.y_max:
        raise InvalidSeatSpecError(number, f"y coordinate must be between 0 and {limits.y_max}")

    if spec.status is not None:
        try:
            SeatStatus(spec.status)
        except ValueError:
            raise InvalidSeatSpecError(number, f"unknown status {spec.status!r}") from None

    price = spec.custom_price
    if price is not None:
        price = Decimal(str(price))
        if not price.is_finite() or not limits.price_min <= price <= limits.price_max:
            raise InvalidSeatSpecError(
                number, f"custom price must be between {limits.price_min} and {limits.price_max}"
            )
        if price.as_tuple().exponent < -2:
            raise InvalidSeatSpecError(number, "custom price must have at most 2 decimal places")


def check_seat_specs(specs: Sequence[SeatSpec], limits: LayoutLimits) -> None:
    if not specs:
        raise EmptySeatListError()

    duplicates = find_duplicate_seat_numbers(specs)
    if duplicates:
        raise DuplicateSeatNumberError(duplicates)

    for spec in specs:
        check_seat_spec(spec, limits)


def _to_seat(spec: SeatSpec) -> Seat:
    return Seat(
        seat_number=spec.seat_number,
        x_coord=spec.x_coord,
        y_coord=spec.y_coord,
        status=SeatStatus(spec.status) if spec.status else SeatStatus.AVAILABLE,
        custom_price=spec.custom_price,
        is_ladies_only=bool(spec.is_ladies_only),
    )


class SeatLayoutManager:
    def __init__(
        self,
        db: Session,
        limits: LayoutLimits = LayoutLimits(),
        locks: HallLockRegistry = hall_locks,
    ):
        self.db = db
        self.limits = limits
        self.locks = locks
        self.halls = HallRepository(db)
        self.seats = SeatRepository(db)

    def replace_seats(self, hall_id: int, specs: Sequence[SeatSpec]) -> List[Seat]:
        """Swap the hall's whole seat set for ``specs`` in one transaction.

        The new set is validated in full before anything is written. On any
        failure the transaction is rolled back and the previously committed
        seats and seat_count stay as they were.
        """
        logger.debug("Replacing seat layout for hall %s with %d seat(s)", hall_id, len(specs))
        check_seat_specs(specs, self.limits)

        with self.locks.hold(hall_id):
            try:
                hall = self.halls.get_for_update(hall_id)
                if not hall:
                    raise HallNotFoundError(hall_id)

                new_seats = [_to_seat(spec) for spec in specs]
                self.seats.replace_seat_set(hall_id, new_seats)
                self.halls.set_seat_count(hall_id, len(new_seats))
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                logger.error("Data integrity violation while saving seats for hall %s", hall_id, exc_info=True)
                raise InvalidDataError() from exc
            except Exception:
                self.db.rollback()
                raise

        logger.info("Saved %d seats for hall %s", len(new_seats), hall_id)
        return self.seats.list_for_hall(hall_id)

    def get_seats(self, hall_id: int) -> List[Seat]:
        if not self.halls.get(hall_id):
            raise HallNotFoundError(hall_id)
        return self.seats.list_for_hall(hall_id)

    def delete_seat(self, hall_id: int, seat_id: int) -> int:
        """Remove one seat and return the hall's recomputed seat count."""
        logger.debug("Deleting seat %s from hall %s", seat_id, hall_id)

        with self.locks.hold(hall_id):
            try:
                if not self.halls.get_for_update(hall_id):
                    raise HallNotFoundError(hall_id)
                if not self.seats.delete_from_hall(seat_id, hall_id):
                    raise SeatNotFoundError(seat_id)

                seat_count = self.seats.count_for_hall(hall_id)
                self.halls.set_seat_count(hall_id, seat_count)
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                logger.error("Data integrity violation while deleting seat %s", seat_id, exc_info=True)
                raise InvalidDataError("Seat could not be deleted") from exc
            except Exception:
                self.db.rollback()
                raise

        logger.info("Deleted seat %s from hall %s, new count: %d", seat_id, hall_id, seat_count)
        return seat_count
