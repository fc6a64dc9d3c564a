"""Wizard session: the single source of truth for booking progress.

The session walks a linear path::

    INITIAL -> FLIGHT_ENQUIRY -> SEAT_ENQUIRY -> RESERVATION -> CONFIRMATION

Every forward step pushes the state it leaves onto a history stack, and
``back()`` pops one entry. Guarded operations return ``False`` instead
of raising when called from the wrong state or with an unknown choice;
nothing is mutated and no observer is notified in that case.

Observers are zero-argument callables. They run synchronously after
each accepted mutation and are expected to re-read the session. They
must not call back into the session from inside the notification.

Usage::

    session = WizardSession()

    @session.subscribe
    def redraw():
        print(session.state.label)

    session.start()
    session.pick_flight(session.flights[0].id)
    session.pick_seat("1A")
    session.confirm()
    print(session.confirmation_code)   # e.g. MP101-1A-4821
"""

import logging
import random
from datetime import datetime
from typing import Callable, Optional

from . import demo_data
from .models import Flight, WizardState

logger = logging.getLogger(__name__)

CONFIRMATION_SUFFIX_RANGE = (1000, 9999)  # inclusive

Observer = Callable[[], None]


class WizardSession:
    """In-memory booking wizard model with history-based back navigation."""

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        rng: Optional[random.Random] = None,
        id_factory: Optional[Callable[[], str]] = None,
        keep_reservations: bool = True,
    ):
        self._clock = clock or demo_data.utc_now
        self._rng = rng or random.Random()
        self._id_factory = id_factory
        self._keep_reservations = keep_reservations

        self._observers: list[Observer] = []
        self._history: list[WizardState] = []
        self._state = WizardState.INITIAL

        self._flights: list[Flight] = []
        self._seats: list[str] = []
        self._selected_flight: Optional[Flight] = None
        self._selected_seat: Optional[str] = None
        self._confirmation_code: Optional[str] = None

        # flight number -> seat labels already taken (upper-cased); one entry
        # per route, so ids regenerated by start() reuse the same set
        self._reserved_by_flight: dict[str, set[str]] = {}

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def flights(self) -> tuple[Flight, ...]:
        return tuple(self._flights)

    @property
    def seats(self) -> tuple[str, ...]:
        return tuple(self._seats)

    @property
    def selected_flight(self) -> Optional[Flight]:
        return self._selected_flight

    @property
    def selected_seat(self) -> Optional[str]:
        return self._selected_seat

    @property
    def confirmation_code(self) -> Optional[str]:
        return self._confirmation_code

    @property
    def history(self) -> tuple[WizardState, ...]:
        """Previously visited states, oldest first."""
        return tuple(self._history)

    @property
    def can_go_back(self) -> bool:
        return bool(self._history)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Observer) -> Observer:
        """Register a change callback. Returns it, so it works as a decorator."""
        self._observers.append(callback)
        return callback

    def unsubscribe(self, callback: Observer) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._observers):
            callback()

    def _push(self) -> None:
        self._history.append(self._state)

    def _enter(self, state: WizardState) -> None:
        logger.debug(f"Wizard {self._state.value} -> {state.value}")
        self._push()
        self._state = state

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> None:
        """INITIAL -> FLIGHT_ENQUIRY, loading a fresh flight catalog."""
        if self._state != WizardState.INITIAL:
            logger.debug(f"start() ignored in state {self._state.value}")
            return
        self._enter(WizardState.FLIGHT_ENQUIRY)
        self._load_flights()
        self._notify()

    def pick_flight(self, flight_id: str) -> bool:
        """FLIGHT_ENQUIRY -> SEAT_ENQUIRY. False for an unknown id or wrong state."""
        if self._state != WizardState.FLIGHT_ENQUIRY:
            logger.debug(f"pick_flight() rejected in state {self._state.value}")
            return False

        flight = self.find_flight(flight_id)
        if flight is None:
            logger.debug(f"pick_flight() rejected: unknown flight id {flight_id!r}")
            return False

        self._selected_flight = flight
        self._load_seats()
        self._enter(WizardState.SEAT_ENQUIRY)
        self._notify()
        return True

    def pick_seat(self, seat: str) -> bool:
        """SEAT_ENQUIRY -> RESERVATION. False for an unknown label or wrong state.

        Taken seats are not rejected here; callers check ``is_seat_taken``.
        """
        if self._state != WizardState.SEAT_ENQUIRY:
            logger.debug(f"pick_seat() rejected in state {self._state.value}")
            return False
        if seat not in self._seats:
            logger.debug(f"pick_seat() rejected: unknown seat {seat!r}")
            return False

        self._selected_seat = seat
        self._enter(WizardState.RESERVATION)
        self._notify()
        return True

    def confirm(self) -> bool:
        """RESERVATION -> CONFIRMATION, generating the confirmation code."""
        if self._state != WizardState.RESERVATION:
            logger.debug(f"confirm() rejected in state {self._state.value}")
            return False
        if self._selected_flight is None or self._selected_seat is None:
            logger.debug("confirm() rejected: flight or seat not selected")
            return False

        suffix = self._rng.randint(*CONFIRMATION_SUFFIX_RANGE)
        self._confirmation_code = (
            f"{self._selected_flight.number}-{self._selected_seat}-{suffix}"
        )
        self._enter(WizardState.CONFIRMATION)
        logger.info(f"Booking confirmed: {self._confirmation_code}")
        self._notify()
        return True

    def finish(self) -> None:
        """CONFIRMATION -> INITIAL via a full reset."""
        if self._state != WizardState.CONFIRMATION:
            logger.debug(f"finish() ignored in state {self._state.value}")
            return
        self.reset()
        self._notify()

    def back(self) -> None:
        """Return to the previous state. Selections are left as they are."""
        if not self._history:
            return
        previous = self._history.pop()
        logger.debug(f"Wizard back {self._state.value} -> {previous.value}")
        self._state = previous
        self._notify()

    def reset(self) -> None:
        """Clear history, selections and loaded lists; back to INITIAL."""
        self._history.clear()
        self._state = WizardState.INITIAL
        self._flights.clear()
        self._seats.clear()
        self._selected_flight = None
        self._selected_seat = None
        self._confirmation_code = None
        if not self._keep_reservations:
            self._reserved_by_flight.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_flight(self, flight_id: str) -> Optional[Flight]:
        for flight in self._flights:
            if flight.id == flight_id:
                return flight
        return None

    def is_seat_taken(self, seat: str) -> bool:
        """Whether the seat is marked taken on the selected flight."""
        if self._selected_flight is None:
            return False
        taken = self._reserved_by_flight.get(self._selected_flight.number)
        if taken is None:
            return False
        return seat.upper() in taken

    def taken_seats(self) -> frozenset[str]:
        if self._selected_flight is None:
            return frozenset()
        return frozenset(self._reserved_by_flight.get(self._selected_flight.number, ()))

    def available_seats(self) -> list[str]:
        return [s for s in self._seats if not self.is_seat_taken(s)]

    def snapshot(self) -> dict:
        """Plain-dict view of the session, suitable for JSON output."""
        flight = self._selected_flight
        return {
            "state": self._state.value,
            "step": self._state.step,
            "history": [s.value for s in self._history],
            "flights": [flight_to_dict(f) for f in self._flights],
            "seats": [
                {"label": s, "taken": self.is_seat_taken(s)} for s in self._seats
            ],
            "selected_flight": flight_to_dict(flight) if flight else None,
            "selected_seat": self._selected_seat,
            "confirmation_code": self._confirmation_code,
        }

    # ------------------------------------------------------------------
    # Demo data loading
    # ------------------------------------------------------------------

    def _load_flights(self) -> None:
        self._flights = demo_data.load_flights(
            now=self._clock(), id_factory=self._id_factory
        )
        logger.debug(f"Loaded {len(self._flights)} demo flights")

    def _load_seats(self) -> None:
        self._seats = demo_data.seat_map()

        flight = self._selected_flight
        if flight is None or flight.number in self._reserved_by_flight:
            return

        taken = demo_data.pick_taken_seats(flight.number, self._seats)
        self._reserved_by_flight[flight.number] = {s.upper() for s in taken}
        logger.debug(f"Simulated taken seats for {flight.number}: {sorted(taken)}")


def flight_to_dict(flight: Flight) -> dict:
    return {
        "id": flight.id,
        "number": flight.number,
        "origin": flight.origin,
        "destination": flight.destination,
        "departure": flight.departure.isoformat(),
        "seats_available": flight.seats_available,
    }
