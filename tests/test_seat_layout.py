import threading
from contextlib import contextmanager
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import (
    DuplicateSeatNumberError,
    EmptySeatListError,
    HallNotFoundError,
    InvalidDataError,
    InvalidSeatSpecError,
    SeatNotFoundError,
)
from app.models.hall import StudyHall
from app.models.seat import Seat, SeatStatus
from app.schemas.seat import SeatSpec
from app.services.seat_layout import (
    HallLockRegistry,
    LayoutLimits,
    SeatLayoutManager,
    check_seat_spec,
    find_duplicate_seat_numbers,
)
from tests.conftest import make_hall, make_seat


def spec(number: str, x: int = 10, y: int = 10, **kwargs) -> SeatSpec:
    return SeatSpec(seat_number=number, x_coord=x, y_coord=y, **kwargs)


def stored_numbers(db, hall_id: int):
    db.expire_all()
    return [s.seat_number for s in db.query(Seat).filter(Seat.hall_id == hall_id).order_by(Seat.seat_number)]


def stored_count(db, hall_id: int) -> int:
    db.expire_all()
    return db.query(StudyHall).filter(StudyHall.id == hall_id).one().seat_count


class TestSpecChecks:
    def test_duplicates_are_reported_once_and_sorted(self):
        specs = [spec("B2"), spec("A1"), spec("B2"), spec("A1"), spec("B2"), spec("C3")]
        assert find_duplicate_seat_numbers(specs) == ["A1", "B2"]

    @pytest.mark.parametrize("fields, message", [
        ({"x_coord": 801}, "x coordinate"),
        ({"x_coord": -1}, "x coordinate"),
        ({"y_coord": 601}, "y coordinate"),
        ({"seat_number": "A-1"}, "alphanumeric"),
        ({"seat_number": "A" * 51}, "at most 50"),
        ({"seat_number": ""}, "required"),
        ({"custom_price": Decimal("49.99")}, "custom price"),
        ({"custom_price": Decimal("1000.01")}, "custom price"),
        ({"custom_price": Decimal("75.505")}, "2 decimal places"),
        ({"status": "BROKEN"}, "unknown status"),
    ])
    def test_unvalidated_specs_are_still_bounded(self, fields, message):
        values = {"seat_number": "A1", "x_coord": 0, "y_coord": 0, "status": SeatStatus.AVAILABLE,
                  "custom_price": None, "is_ladies_only": False}
        values.update(fields)
        with pytest.raises(InvalidSeatSpecError) as exc:
            check_seat_spec(SeatSpec.model_construct(**values), LayoutLimits())
        assert message in exc.value.message

    def test_boundary_values_pass(self):
        check_seat_spec(spec("Z9", x=800, y=600, custom_price=Decimal("1000.00")), LayoutLimits())
        check_seat_spec(spec("Z9", x=0, y=0, custom_price=Decimal("50")), LayoutLimits())

    def test_limits_follow_settings(self):
        from app.core.config import Settings

        limits = LayoutLimits.from_settings(Settings(SEAT_X_MAX=400))
        assert limits.x_max == 400
        with pytest.raises(InvalidSeatSpecError):
            check_seat_spec(spec("A1", x=500), limits)


class TestReplaceSeats:
    def test_saves_layout_and_seat_count(self, db, hall):
        seats = SeatLayoutManager(db).replace_seats(hall.id, [spec("A1"), spec("A2"), spec("B1", status="maintenance")])

        assert [s.seat_number for s in seats] == ["A1", "A2", "B1"]
        assert seats[2].status == SeatStatus.MAINTENANCE
        assert all(s.hall_id == hall.id for s in seats)
        assert stored_count(db, hall.id) == 3

    def test_replaces_the_previous_set_entirely(self, db, hall):
        make_seat(db, hall, "OLD1")
        make_seat(db, hall, "A1")

        SeatLayoutManager(db).replace_seats(hall.id, [spec("A1"), spec("N2")])

        assert stored_numbers(db, hall.id) == ["A1", "N2"]
        assert stored_count(db, hall.id) == 2

    def test_duplicate_numbers_leave_existing_layout_untouched(self, db, hall):
        manager = SeatLayoutManager(db)
        manager.replace_seats(hall.id, [spec("X1"), spec("X2")])

        with pytest.raises(DuplicateSeatNumberError) as exc:
            manager.replace_seats(hall.id, [spec("A1"), spec("A2"), spec("A1")])

        assert exc.value.duplicates == ["A1"]
        assert stored_numbers(db, hall.id) == ["X1", "X2"]
        assert stored_count(db, hall.id) == 2

    def test_empty_list_rejected(self, db, hall):
        with pytest.raises(EmptySeatListError):
            SeatLayoutManager(db).replace_seats(hall.id, [])

    def test_unknown_hall(self, db):
        with pytest.raises(HallNotFoundError):
            SeatLayoutManager(db).replace_seats(12345, [spec("A1")])

    def test_database_rejection_rolls_back(self, db, hall, monkeypatch):
        manager = SeatLayoutManager(db)
        manager.replace_seats(hall.id, [spec("K1")])

        def reject(*args, **kwargs):
            raise IntegrityError("INSERT INTO seats", {}, Exception("duplicate key"))

        monkeypatch.setattr(manager.halls, "set_seat_count", reject)

        with pytest.raises(InvalidDataError):
            manager.replace_seats(hall.id, [spec("K2"), spec("K3")])

        assert stored_numbers(db, hall.id) == ["K1"]
        assert stored_count(db, hall.id) == 1

    def test_seats_listed_by_number(self, db, hall):
        manager = SeatLayoutManager(db)
        manager.replace_seats(hall.id, [spec("C1"), spec("A2"), spec("B7"), spec("A10")])

        assert [s.seat_number for s in manager.get_seats(hall.id)] == ["A10", "A2", "B7", "C1"]

    def test_halls_do_not_share_seats(self, db, hall, owner):
        annex = make_hall(db, owner, name="Annex")
        manager = SeatLayoutManager(db)
        manager.replace_seats(hall.id, [spec("A1")])
        manager.replace_seats(annex.id, [spec("A1"), spec("A2")])

        assert stored_numbers(db, hall.id) == ["A1"]
        assert stored_numbers(db, annex.id) == ["A1", "A2"]


class TestDeleteSeat:
    def test_delete_recounts(self, db, hall):
        manager = SeatLayoutManager(db)
        seats = manager.replace_seats(hall.id, [spec("A1"), spec("A2"), spec("A3")])
        doomed = seats[1].id

        assert manager.delete_seat(hall.id, doomed) == 2
        assert stored_numbers(db, hall.id) == ["A1", "A3"]
        assert stored_count(db, hall.id) == 2

    def test_unknown_seat(self, db, hall):
        with pytest.raises(SeatNotFoundError):
            SeatLayoutManager(db).delete_seat(hall.id, 999)

    def test_seat_of_another_hall_is_not_deleted(self, db, hall, owner):
        other = make_seat(db, make_hall(db, owner, name="Annex"), "Z1")
        other_id = other.id

        with pytest.raises(SeatNotFoundError):
            SeatLayoutManager(db).delete_seat(hall.id, other_id)

        db.expire_all()
        assert db.get(Seat, other_id) is not None


class TestHallLockRegistry:
    def test_one_lock_per_hall(self):
        registry = HallLockRegistry()
        assert registry.lock_for(1) is registry.lock_for(1)
        assert registry.lock_for(1) is not registry.lock_for(2)

    def test_holds_one_entry_per_hall_id(self):
        registry = HallLockRegistry()
        for _ in range(50):
            for hall_id in (1, 2, 3):
                with registry.hold(hall_id):
                    pass
        assert sorted(registry._locks) == [1, 2, 3]

    def test_hold_serializes_writers(self):
        registry = HallLockRegistry()
        events = []

        def writer(name):
            with registry.hold(1):
                events.append(f"{name}-in")
                events.append(f"{name}-out")

        threads = [threading.Thread(target=writer, args=(n,)) for n in ("a", "b", "c")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Each writer's enter/exit pair is contiguous
        pairs = [events[i:i + 2] for i in range(0, len(events), 2)]
        assert all(p[0].split("-")[0] == p[1].split("-")[0] for p in pairs)

    def test_lock_released_after_failure(self):
        registry = HallLockRegistry()
        with pytest.raises(RuntimeError):
            with registry.hold(3):
                raise RuntimeError("boom")
        assert not registry.lock_for(3).locked()


class RecordingLocks(HallLockRegistry):
    """Registry that records every hall id it is asked to hold."""

    def __init__(self):
        super().__init__()
        self.held = []

    @contextmanager
    def hold(self, hall_id):
        self.held.append(hall_id)
        with super().hold(hall_id):
            yield


class TestLayoutWritesTakeHallLock:
    def test_replace_runs_inside_the_hall_lock(self, db, hall, monkeypatch):
        locks = RecordingLocks()
        manager = SeatLayoutManager(db, locks=locks)
        seen = []

        original = manager.seats.replace_seat_set

        def replace_seat_set(hall_id, seats):
            seen.append(locks.lock_for(hall_id).locked())
            return original(hall_id, seats)

        monkeypatch.setattr(manager.seats, "replace_seat_set", replace_seat_set)
        manager.replace_seats(hall.id, [spec("A1")])

        assert locks.held == [hall.id]
        assert seen == [True]
        assert not locks.lock_for(hall.id).locked()

    def test_delete_runs_inside_the_hall_lock(self, db, hall, monkeypatch):
        locks = RecordingLocks()
        manager = SeatLayoutManager(db, locks=locks)
        seat_id = manager.replace_seats(hall.id, [spec("A1"), spec("A2")])[0].id
        seen = []

        original = manager.seats.delete_from_hall

        def delete_from_hall(seat_id, hall_id):
            seen.append(locks.lock_for(hall_id).locked())
            return original(seat_id, hall_id)

        monkeypatch.setattr(manager.seats, "delete_from_hall", delete_from_hall)
        manager.delete_seat(hall.id, seat_id)

        assert locks.held == [hall.id, hall.id]
        assert seen == [True]

    def test_invalid_layout_never_takes_the_lock(self, db, hall):
        locks = RecordingLocks()
        with pytest.raises(EmptySeatListError):
            SeatLayoutManager(db, locks=locks).replace_seats(hall.id, [])
        assert locks.held == []
