"""Flight Wizard CLI - demo flight booking wizard."""

import json
import logging
from typing import Annotated, Optional

import typer

from . import demo_data
from .controller import WizardController
from .formatter import (
    console,
    print_flights,
    print_seat_map,
    print_session_json,
    print_state,
)
from .models import Flight, WizardState
from .session import WizardSession, flight_to_dict

app = typer.Typer(
    name="flight-wizard",
    help="✈ Demo flight booking wizard: flight → seat → review → confirm",
    rich_markup_mode="rich",
)

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)

BACK_KEYS = ("b", "back")
QUIT_KEYS = ("q", "quit")


def _find_by_number(flights, number: str) -> Optional[Flight]:
    for flight in flights:
        if flight.number.upper() == number.upper():
            return flight
    return None


def _ask(text: str) -> Optional[str]:
    """Prompt for a choice. Returns None for 'back', aborts on 'quit'."""
    answer = typer.prompt(f"{text} (b=back, q=quit)").strip()
    if answer.lower() in QUIT_KEYS:
        console.print("[dim]Booking cancelled.[/dim]")
        raise typer.Abort()
    if answer.lower() in BACK_KEYS:
        return None
    return answer


def _choose_flight(controller: WizardController, flight_no: Optional[str]) -> None:
    session = controller.model

    if flight_no:
        flight = _find_by_number(session.flights, flight_no)
        if flight is None:
            numbers = ", ".join(f.number for f in session.flights)
            console.print(f"[red]Unknown flight: {flight_no}. Choose from: {numbers}[/red]")
            raise typer.Exit(1)
        controller.pick_flight(flight.id)
        return

    answer = _ask("Flight #")
    if answer is None:
        controller.back()
        return

    flights = session.flights
    if answer.isdigit() and 1 <= int(answer) <= len(flights):
        controller.pick_flight(flights[int(answer) - 1].id)
        return

    flight = _find_by_number(flights, answer)
    if flight is None or not controller.pick_flight(flight.id):
        console.print(f"[red]Invalid choice: {answer}. Enter 1-{len(flights)} or a flight number.[/red]")


def _choose_seat(controller: WizardController, seat: Optional[str]) -> None:
    session = controller.model

    if seat:
        label = seat.upper()
        if label not in session.seats:
            console.print(f"[red]Unknown seat: {seat}. Seats run 1A to 3D.[/red]")
            raise typer.Exit(1)
        if session.is_seat_taken(label):
            console.print(f"[red]Seat {label} is already taken.[/red]")
            raise typer.Exit(1)
        controller.pick_seat(label)
        return

    answer = _ask("Seat")
    if answer is None:
        controller.back()
        return

    label = answer.upper()
    if session.is_seat_taken(label):
        console.print(f"[yellow]Seat {label} is already taken, pick another one.[/yellow]")
        return
    if not controller.pick_seat(label):
        console.print(f"[red]Invalid seat: {answer}.[/red]")


def _review(controller: WizardController, yes: bool) -> None:
    if yes or typer.confirm("Confirm this booking?", default=True):
        controller.confirm()
    else:
        controller.back()


@app.command()
def book(
    flight_no: Annotated[Optional[str], typer.Option("--flight", "-f", help="Flight number to book (e.g. MP202)")] = None,
    seat: Annotated[Optional[str], typer.Option("--seat", "-s", help="Seat label (e.g. 2C)")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Confirm without asking")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Book non-interactively and print the result as JSON (needs --flight and --seat)")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose logging")] = False,
):
    """
    🧭 Walk through the booking wizard.

    Examples:

      flight-wizard book

      flight-wizard book --flight MP202 --seat 2C --yes

      flight-wizard book -f MP101 -s 1C --json > booking.json
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # JSON output must be the only thing on stdout, so no prompts
    if as_json:
        if not flight_no or not seat:
            console.print("[red]--json needs --flight and --seat.[/red]")
            raise typer.Exit(1)
        yes = True

    session = WizardSession()
    controller = WizardController(session)

    def render():
        print_state(session)

    if not as_json:
        session.subscribe(render)

    started = False
    while session.state != WizardState.CONFIRMATION:
        state = session.state
        if state == WizardState.INITIAL:
            # Backing out of the flight list lands here
            if started and not typer.confirm("Start a new booking?", default=True):
                raise typer.Abort()
            controller.start()
            started = True
        elif state == WizardState.FLIGHT_ENQUIRY:
            _choose_flight(controller, flight_no)
            flight_no = None
        elif state == WizardState.SEAT_ENQUIRY:
            _choose_seat(controller, seat)
            seat = None
        elif state == WizardState.RESERVATION:
            _review(controller, yes)

    if as_json:
        print_session_json(session)

    session.unsubscribe(render)
    controller.finish()
    logger.debug(f"Wizard finished, state={session.state.value}")


@app.command()
def flights(
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
):
    """
    📋 List the demo flight catalog.
    """
    catalog = demo_data.load_flights()
    if as_json:
        print(json.dumps([flight_to_dict(f) for f in catalog], indent=2))
        return
    print_flights(catalog, title="Demo flights (departing tomorrow)")


@app.command()
def seats(
    flight_no: Annotated[str, typer.Argument(help="Flight number (e.g. MP101)")],
):
    """
    💺 Show the seat map for a demo flight.

    Example:

      flight-wizard seats MP303
    """
    session = WizardSession()
    session.start()

    flight = _find_by_number(session.flights, flight_no)
    if flight is None:
        numbers = ", ".join(f.number for f in session.flights)
        console.print(f"[red]Unknown flight: {flight_no}. Choose from: {numbers}[/red]")
        raise typer.Exit(1)

    session.pick_flight(flight.id)
    print_seat_map(session)
    free = session.available_seats()
    console.print(f"[dim]{len(free)} of {len(session.seats)} seats free.[/dim]")


def main():
    app()


if __name__ == "__main__":
    main()
