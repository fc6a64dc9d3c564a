"""Console rendering for the booking wizard."""

import json

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box
from rich.text import Text

from .models import Flight, WizardState
from .session import WizardSession

console = Console()

SEAT_STYLES = {
    "free": "green",
    "taken": "red strike",
    "selected": "bold black on yellow",
}


def print_header(session: WizardSession) -> None:
    state = session.state
    total = len(WizardState)
    console.print(
        f"\n[bold blue]✈  Step {state.step}/{total}  |  {state.label}[/bold blue]"
    )


def print_flights(flights: list[Flight], title: str = "Available flights") -> None:
    """Print the flight catalog as a rich table."""
    if not flights:
        console.print("[dim]No flights loaded.[/dim]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
        pad_edge=True,
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Flight", style="white", no_wrap=True)
    table.add_column("Route", no_wrap=True)
    table.add_column("Departs", no_wrap=True)
    table.add_column("Seats left", justify="right", style="bold")

    for i, flight in enumerate(flights, start=1):
        seats_style = "green" if flight.seats_available > 5 else "yellow"
        table.add_row(
            str(i),
            flight.number,
            flight.route,
            flight.departure_display(),
            Text(str(flight.seats_available), style=seats_style),
        )

    console.print(table)


def print_seat_map(session: WizardSession) -> None:
    """Print the seat grid of the selected flight, marking taken seats."""
    flight = session.selected_flight
    seats = session.seats
    if flight is None or not seats:
        console.print("[dim]No seat map loaded.[/dim]")
        return

    rows: dict[str, list[str]] = {}
    for label in seats:
        rows.setdefault(label[:-1], []).append(label)

    columns = [label[-1] for label in next(iter(rows.values()))]

    table = Table(
        title=f"{flight.number}  {flight.route}",
        box=box.SIMPLE_HEAVY,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Row", justify="right", style="dim")
    for col in columns:
        table.add_column(col, justify="center")

    for row, labels in rows.items():
        cells = []
        for label in labels:
            if label == session.selected_seat:
                style = SEAT_STYLES["selected"]
            elif session.is_seat_taken(label):
                style = SEAT_STYLES["taken"]
            else:
                style = SEAT_STYLES["free"]
            cells.append(Text(label, style=style))
        table.add_row(row, *cells)

    console.print(table)
    taken = sorted(session.taken_seats())
    if taken:
        console.print(f"[dim]Already taken: {', '.join(taken)}[/dim]")


def print_reservation(session: WizardSession) -> None:
    """Print the review panel for the chosen flight and seat."""
    flight = session.selected_flight
    if flight is None:
        console.print("[dim]Nothing to review.[/dim]")
        return

    body = (
        f"[bold]Flight:[/bold]  {flight.number}\n"
        f"[bold]Route:[/bold]   {flight.route}\n"
        f"[bold]Departs:[/bold] {flight.departure_display()}\n"
        f"[bold]Seat:[/bold]    {session.selected_seat or '–'}"
    )
    if session.selected_seat and session.is_seat_taken(session.selected_seat):
        body += "\n[yellow]⚠ This seat is marked as already taken.[/yellow]"

    console.print(Panel(body, title="Review your booking", border_style="cyan", expand=False))


def print_confirmation(session: WizardSession) -> None:
    code = session.confirmation_code or "–"
    console.print(
        Panel(
            f"[bold green]✅ Booking confirmed[/bold green]\n\n"
            f"Confirmation code: [bold]{code}[/bold]",
            border_style="green",
            expand=False,
        )
    )


def print_state(session: WizardSession) -> None:
    """Render whatever the current wizard step needs."""
    print_header(session)
    state = session.state
    if state == WizardState.INITIAL:
        console.print("[dim]Start a new booking.[/dim]")
    elif state == WizardState.FLIGHT_ENQUIRY:
        print_flights(list(session.flights))
    elif state == WizardState.SEAT_ENQUIRY:
        print_seat_map(session)
    elif state == WizardState.RESERVATION:
        print_reservation(session)
    elif state == WizardState.CONFIRMATION:
        print_confirmation(session)


def print_session_json(session: WizardSession) -> None:
    """Print the session snapshot as JSON."""
    print(json.dumps(session.snapshot(), indent=2))
