"""Unit tests for the seat allocation engine."""

import random

import pytest

from carpool.domain import allocation
from carpool.domain.entities import VehicleDetails
from carpool.domain.exceptions import (
    ApplicantIndexError,
    InvalidSeatCount,
    SeatsExhausted,
    VehicleNotFound,
)
from tests.conftest import applicant, make_vehicle, sequential_ids

DETAILS = VehicleDetails(
    owner_name="Aarav Sharma",
    owner_flat="A-101",
    make="Toyota",
    model="Innova",
    destination="Airport T2",
    notes="7:30am",
    seats=1,
)


class TestRegister:
    def test_new_vehicle_has_empty_queues(self):
        fleet = allocation.register((), DETAILS, id_factory=lambda: "v1")
        (vehicle,) = fleet
        assert vehicle.id == "v1"
        assert vehicle.seats == 1
        assert vehicle.applicants == ()
        assert vehicle.passengers == ()
        assert vehicle.owner_id == "owner-v1"

    def test_prepends_most_recent_first(self):
        ids = sequential_ids()
        fleet = allocation.register((), DETAILS, id_factory=ids)
        fleet = allocation.register(fleet, DETAILS, id_factory=ids)
        assert [v.id for v in fleet] == ["v2", "v1"]

    def test_keeps_explicit_owner_id(self):
        details = VehicleDetails(owner_name="A", owner_flat="1", owner_id="resident-9")
        (vehicle,) = allocation.register((), details, id_factory=lambda: "v1")
        assert vehicle.owner_id == "resident-9"

    def test_skips_ids_already_in_use(self):
        existing = (make_vehicle("v1"),)
        fleet = allocation.register(existing, DETAILS, id_factory=sequential_ids())
        assert [v.id for v in fleet] == ["v2", "v1"]

    def test_default_ids_are_unique(self):
        fleet = ()
        for _ in range(20):
            fleet = allocation.register(fleet, DETAILS)
        assert len({v.id for v in fleet}) == 20

    def test_zero_capacity_is_allowed(self):
        details = VehicleDetails(owner_name="A", owner_flat="1", seats=0)
        (vehicle,) = allocation.register((), details, id_factory=lambda: "v1")
        assert vehicle.seats == 0

    def test_negative_capacity_rejected(self):
        details = VehicleDetails(owner_name="A", owner_flat="1", seats=-1)
        with pytest.raises(InvalidSeatCount):
            allocation.register((), details)

    def test_input_collection_untouched(self):
        existing = [make_vehicle("v1")]
        allocation.register(existing, DETAILS, id_factory=lambda: "v9")
        assert existing == [make_vehicle("v1")]


class TestEdit:
    def test_replaces_fields_and_keeps_queues(self):
        vehicle = make_vehicle(
            "v1",
            seats=1,
            applicants=(applicant("Y", "2"),),
            passengers=(applicant("X", "1"),),
        )
        fleet = allocation.edit((vehicle,), "v1", DETAILS)
        (edited,) = fleet
        assert edited.make == "Toyota"
        assert edited.destination == "Airport T2"
        assert edited.owner_name == "Aarav Sharma"
        assert edited.seats == 1
        assert edited.id == "v1"
        assert edited.owner_id == "owner-v1"
        assert edited.applicants == vehicle.applicants
        assert edited.passengers == vehicle.passengers

    def test_lowering_seats_keeps_passengers(self):
        vehicle = make_vehicle(
            "v1", seats=2, passengers=(applicant("X", "1"), applicant("Z", "3"))
        )
        details = VehicleDetails(owner_name="A", owner_flat="1", seats=0)
        (edited,) = allocation.edit((vehicle,), "v1", details)
        assert edited.seats == 0
        assert len(edited.passengers) == 2

    def test_negative_seats_rejected(self):
        details = VehicleDetails(owner_name="A", owner_flat="1", seats=-2)
        with pytest.raises(InvalidSeatCount):
            allocation.edit((make_vehicle("v1"),), "v1", details)

    def test_unknown_vehicle(self):
        with pytest.raises(VehicleNotFound):
            allocation.edit((make_vehicle("v1"),), "nope", DETAILS)

    def test_position_preserved(self):
        fleet = (make_vehicle("v3"), make_vehicle("v2"), make_vehicle("v1"))
        edited = allocation.edit(fleet, "v2", DETAILS)
        assert [v.id for v in edited] == ["v3", "v2", "v1"]


class TestApply:
    def test_appends_in_arrival_order(self):
        fleet = (make_vehicle("v1"),)
        fleet = allocation.apply(fleet, "v1", applicant("X", "1"))
        fleet = allocation.apply(fleet, "v1", applicant("Y", "2"))
        assert [a.name for a in fleet[0].applicants] == ["X", "Y"]

    def test_duplicate_is_silent_noop(self):
        fleet = allocation.apply((make_vehicle("v1"),), "v1", applicant("A", "1"))
        again = allocation.apply(fleet, "v1", applicant("A", "1"))
        assert again == fleet
        assert len(again[0].applicants) == 1

    def test_same_name_other_flat_is_distinct(self):
        fleet = allocation.apply((make_vehicle("v1"),), "v1", applicant("A", "1"))
        fleet = allocation.apply(fleet, "v1", applicant("A", "2"))
        assert len(fleet[0].applicants) == 2

    def test_allowed_when_seats_exhausted(self):
        fleet = allocation.apply((make_vehicle("v1", seats=0),), "v1", applicant("A", "1"))
        assert len(fleet[0].applicants) == 1

    def test_reapply_after_decline_is_fresh(self):
        fleet = allocation.apply((make_vehicle("v1"),), "v1", applicant("A", "1"))
        fleet = allocation.decline(fleet, "v1", 0)
        fleet = allocation.apply(fleet, "v1", applicant("A", "1"))
        assert [a.key for a in fleet[0].applicants] == [("A", "1")]

    def test_seated_passenger_cannot_queue_again(self):
        fleet = (make_vehicle("v1", seats=2, passengers=(applicant("A", "1"),)),)
        assert allocation.apply(fleet, "v1", applicant("A", "1")) == fleet

    def test_unknown_vehicle(self):
        with pytest.raises(VehicleNotFound):
            allocation.apply((), "v1", applicant("A", "1"))

    def test_other_vehicles_untouched(self):
        other = make_vehicle("v2")
        fleet = allocation.apply((make_vehicle("v1"), other), "v1", applicant("A", "1"))
        assert fleet[1] is other


class TestApprove:
    def test_moves_applicant_to_passengers(self):
        vehicle = make_vehicle(
            "v1",
            seats=3,
            applicants=(applicant("X", "1"), applicant("Y", "2"), applicant("Z", "3")),
            passengers=(applicant("P", "9"),),
        )
        (approved,) = allocation.approve((vehicle,), "v1", 1)
        assert approved.seats == 2
        assert [a.name for a in approved.applicants] == ["X", "Z"]
        assert [p.name for p in approved.passengers] == ["P", "Y"]

    def test_rejected_when_no_seats_left(self):
        fleet = (make_vehicle("v1", seats=0, applicants=(applicant("X", "1"),)),)
        snapshot = tuple(fleet)
        with pytest.raises(SeatsExhausted, match="No seats left"):
            allocation.approve(fleet, "v1", 0)
        assert fleet == snapshot

    def test_last_seat_can_be_taken(self):
        fleet = (make_vehicle("v1", seats=1, applicants=(applicant("X", "1"),)),)
        (vehicle,) = allocation.approve(fleet, "v1", 0)
        assert vehicle.seats == 0

    @pytest.mark.parametrize("index", [-1, 1, 5])
    def test_index_out_of_range(self, index):
        fleet = (make_vehicle("v1", applicants=(applicant("X", "1"),)),)
        with pytest.raises(ApplicantIndexError):
            allocation.approve(fleet, "v1", index)

    def test_index_checked_before_seats(self):
        fleet = (make_vehicle("v1", seats=0),)
        with pytest.raises(ApplicantIndexError):
            allocation.approve(fleet, "v1", 0)

    def test_unknown_vehicle(self):
        with pytest.raises(VehicleNotFound):
            allocation.approve((make_vehicle("v1"),), "v2", 0)


class TestDecline:
    def test_removes_only_the_applicant(self):
        vehicle = make_vehicle(
            "v1",
            seats=2,
            applicants=(applicant("X", "1"), applicant("Y", "2")),
            passengers=(applicant("P", "9"),),
        )
        (declined,) = allocation.decline((vehicle,), "v1", 0)
        assert [a.name for a in declined.applicants] == ["Y"]
        assert declined.seats == 2
        assert declined.passengers == vehicle.passengers

    def test_index_out_of_range(self):
        with pytest.raises(ApplicantIndexError):
            allocation.decline((make_vehicle("v1"),), "v1", 0)

    def test_negative_index_does_not_wrap(self):
        fleet = (make_vehicle("v1", applicants=(applicant("X", "1"),)),)
        with pytest.raises(ApplicantIndexError):
            allocation.decline(fleet, "v1", -1)

    def test_unknown_vehicle(self):
        with pytest.raises(VehicleNotFound):
            allocation.decline((), "v1", 0)


class TestDelete:
    def test_removes_vehicle_with_queues(self):
        fleet = (
            make_vehicle("v2", passengers=(applicant("X", "1"),)),
            make_vehicle("v1"),
        )
        assert [v.id for v in allocation.delete(fleet, "v2")] == ["v1"]

    def test_unknown_id_is_noop(self):
        fleet = (make_vehicle("v1"),)
        assert allocation.delete(fleet, "missing") == fleet


class TestFindVehicle:
    def test_found(self):
        v = make_vehicle("v1")
        assert allocation.find_vehicle([v], "v1") is v

    def test_missing(self):
        with pytest.raises(VehicleNotFound):
            allocation.find_vehicle([], "v1")


# ── Scenario & invariants ─────────────────────────────────────────────


def test_single_seat_scenario():
    fleet = allocation.register((), DETAILS, id_factory=lambda: "v1")
    fleet = allocation.apply(fleet, "v1", applicant("X", "1"))
    fleet = allocation.apply(fleet, "v1", applicant("Y", "2"))

    fleet = allocation.approve(fleet, "v1", 0)
    (vehicle,) = fleet
    assert vehicle.seats == 0
    assert [a.name for a in vehicle.applicants] == ["Y"]
    assert [p.name for p in vehicle.passengers] == ["X"]

    with pytest.raises(SeatsExhausted):
        allocation.approve(fleet, "v1", 0)
    assert fleet[0] == vehicle


def _check_invariants(fleet, previous_passengers):
    assert len({v.id for v in fleet}) == len(fleet)
    for v in fleet:
        assert v.seats >= 0
        keys = [a.key for a in v.applicants]
        assert len(keys) == len(set(keys))
        assert not set(keys) & {p.key for p in v.passengers}
        assert len(v.passengers) >= previous_passengers.get(v.id, 0)


def test_invariants_hold_over_random_sequences():
    rng = random.Random(20240301)
    people = [applicant(f"P{i}", str(i % 3)) for i in range(6)]
    ids = sequential_ids()

    for _ in range(30):
        fleet = ()
        for _ in range(60):
            passengers = {v.id: len(v.passengers) for v in fleet}
            op = rng.choice(["register", "apply", "approve", "decline", "delete"])
            try:
                if op == "register" or not fleet:
                    details = VehicleDetails(
                        owner_name="O", owner_flat="1", seats=rng.randint(0, 3)
                    )
                    fleet = allocation.register(fleet, details, id_factory=ids)
                    continue
                target = rng.choice(fleet)
                if op == "apply":
                    fleet = allocation.apply(fleet, target.id, rng.choice(people))
                elif op == "approve":
                    fleet = allocation.approve(fleet, target.id, rng.randint(-1, 3))
                elif op == "decline":
                    fleet = allocation.decline(fleet, target.id, rng.randint(-1, 3))
                else:
                    fleet = allocation.delete(fleet, target.id)
            except (ApplicantIndexError, SeatsExhausted):
                pass
            _check_invariants(fleet, passengers)
