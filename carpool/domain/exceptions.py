"""Seat-allocation error taxonomy."""


class CarpoolError(Exception):
    """Base exception for all seat-allocation errors."""


class VehicleNotFound(CarpoolError):
    """Raised when the referenced vehicle id does not exist."""

    def __init__(self, vehicle_id: str):
        self.vehicle_id = vehicle_id
        super().__init__(f"Vehicle {vehicle_id!r} not found")


class ApplicantIndexError(CarpoolError):
    """Raised when an applicant index is stale or out of range."""

    def __init__(self, vehicle_id: str, index: int, size: int):
        self.vehicle_id = vehicle_id
        self.index = index
        self.size = size
        super().__init__(
            f"Applicant index {index} out of range for vehicle {vehicle_id!r} "
            f"({size} pending)"
        )


class SeatsExhausted(CarpoolError):
    """Raised when an approval would push the seat count below zero."""

    def __init__(self, vehicle_id: str):
        self.vehicle_id = vehicle_id
        super().__init__("No seats left")


class InvalidSeatCount(CarpoolError):
    """Raised when a registration or edit declares a negative seat count."""

    def __init__(self, seats: int):
        self.seats = seats
        super().__init__(f"Seat count must be >= 0, got {seats}")
