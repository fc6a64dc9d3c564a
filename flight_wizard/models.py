"""Data models for the flight-wizard booking flow."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class WizardState(Enum):
    """Steps of the booking wizard, in forward order."""
    INITIAL = "initial"
    FLIGHT_ENQUIRY = "flight_enquiry"
    SEAT_ENQUIRY = "seat_enquiry"
    RESERVATION = "reservation"
    CONFIRMATION = "confirmation"

    @property
    def label(self) -> str:
        return {
            "initial": "Start",
            "flight_enquiry": "Choose a flight",
            "seat_enquiry": "Choose a seat",
            "reservation": "Review details",
            "confirmation": "Booking confirmed",
        }[self.value]

    @property
    def step(self) -> int:
        return list(WizardState).index(self) + 1


def new_flight_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Flight:
    """A bookable demo flight."""
    number: str
    origin: str
    destination: str
    departure: datetime  # timezone-aware, UTC
    seats_available: int
    id: str = field(default_factory=new_flight_id)

    @property
    def route(self) -> str:
        return f"{self.origin} → {self.destination}"

    def departure_display(self) -> str:
        return self.departure.strftime("%Y-%m-%d %H:%M UTC")
