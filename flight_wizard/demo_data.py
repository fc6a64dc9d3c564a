"""Hardcoded demo inventory: flight catalog, seat map and taken seats.

Nothing here is persisted. The catalog is rebuilt on every call, and the
"already taken" seats are drawn from a PRNG seeded by the flight number
so the same flight always shows the same taken seats.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from .models import Flight, new_flight_id

# (number, origin, destination, hours after now + 1 day, seats available)
DEMO_ROUTES = [
    ("MP101", "LHR", "JFK", 3, 9),
    ("MP202", "LHR", "DXB", 5, 6),
    ("MP303", "LHR", "SIN", 7, 4),
]

SEAT_ROWS = range(1, 4)
SEAT_COLUMNS = ("A", "B", "C", "D")
TAKEN_SEATS_PER_FLIGHT = 2

SEED_START = 19
SEED_MULTIPLIER = 31
FALLBACK_FLIGHT_NUMBER = "MP"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def load_flights(
    now: Optional[datetime] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> list[Flight]:
    """Build the three demo flights departing tomorrow, each with a fresh id."""
    base_time = (now or utc_now()) + timedelta(days=1)
    make_id = id_factory or new_flight_id

    return [
        Flight(
            number=number,
            origin=origin,
            destination=destination,
            departure=base_time + timedelta(hours=offset),
            seats_available=seats,
            id=make_id(),
        )
        for number, origin, destination, offset, seats in DEMO_ROUTES
    ]


def seat_map() -> list[str]:
    """Seat labels row by row: 1A, 1B, ... 3D."""
    return [f"{row}{col}" for row in SEAT_ROWS for col in SEAT_COLUMNS]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def flight_seed(number: Optional[str]) -> int:
    """Polynomial hash of the flight number in signed 32-bit arithmetic."""
    acc = SEED_START
    for ch in number or FALLBACK_FLIGHT_NUMBER:
        acc = _to_int32(acc * SEED_MULTIPLIER + ord(ch))
    return acc


def pick_taken_seats(
    number: Optional[str],
    seats: list[str],
    count: int = TAKEN_SEATS_PER_FLIGHT,
) -> set[str]:
    """Draw up to `count` seats without replacement, seeded by flight number."""
    rnd = random.Random(flight_seed(number))
    candidates = list(seats)
    taken = set()
    for _ in range(count):
        if not candidates:
            break
        taken.add(candidates.pop(rnd.randrange(len(candidates))))
    return taken
