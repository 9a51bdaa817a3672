"""
Seed script -- populates the vehicle store with sample data for reviewers.

Run with:
    python seed.py

Creates:
  - 5 sample vehicles (mix of destinations and seat counts)
  - pending applicants on most of them
  - one vehicle with every seat already taken and a waiting list
"""

import asyncio

from carpool.api.app import build_store
from carpool.domain.entities import VehicleDetails
from carpool.services.carpool_service import CarpoolService


VEHICLES = [
    {"owner_name": "Aarav Sharma", "owner_flat": "A-101", "make": "Toyota", "model": "Innova", "destination": "Airport T2", "seats": 4, "notes": "Leaving 7:30am sharp"},
    {"owner_name": "Priya Patel", "owner_flat": "B-204", "make": "Honda", "model": "City", "destination": "MRT Downtown", "seats": 3},
    {"owner_name": "Rohan Mehta", "owner_flat": "C-310", "make": "Maruti", "model": "Ertiga", "destination": "Tech Park", "seats": 5, "notes": "Weekdays only"},
    {"owner_name": "Sneha Gupta", "owner_flat": "A-402", "make": "Hyundai", "model": "Creta", "destination": "Central Mall", "seats": 2},
    {"owner_name": "Vikram Singh", "owner_flat": "D-007", "make": "Kia", "model": "Carens", "destination": "MRT Downtown", "seats": 1},
]

APPLICANTS = [
    ("Ananya Reddy", "B-110"),
    ("Karan Joshi", "C-205"),
    ("Meera Nair", "D-301"),
]


async def seed():
    service = CarpoolService(await build_store())

    if await service.list_vehicles():
        print("Store already seeded. Skipping.")
        return

    registered = []
    for v in VEHICLES:
        registered.append(await service.register_vehicle(VehicleDetails(**v)))

    # Pending applicants on the first three vehicles
    for vehicle in registered[:3]:
        for name, flat in APPLICANTS[:2]:
            await service.apply_for_seat(vehicle.id, name, flat)

    # Single-seat vehicle: one passenger approved, two left waiting
    full = registered[-1]
    for name, flat in APPLICANTS:
        await service.apply_for_seat(full.id, name, flat)
    await service.approve_applicant(full.id, 0)

    print(f"Seeded {len(registered)} vehicles.")


if __name__ == "__main__":
    asyncio.run(seed())
