"""Tests for the flight-wizard command line."""

import json

import pytest
from typer.testing import CliRunner

from flight_wizard.cli import app
from flight_wizard.demo_data import pick_taken_seats, seat_map

runner = CliRunner()


@pytest.fixture
def free_seat():
    taken = pick_taken_seats("MP101", seat_map())
    return next(s for s in seat_map() if s not in taken)


@pytest.fixture
def taken_seat():
    return sorted(pick_taken_seats("MP101", seat_map()))[0]


def test_flights_table():
    result = runner.invoke(app, ["flights"])
    assert result.exit_code == 0
    for number in ("MP101", "MP202", "MP303"):
        assert number in result.output


def test_flights_json():
    result = runner.invoke(app, ["flights", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert [f["seats_available"] for f in data] == [9, 6, 4]


def test_seats_command():
    result = runner.invoke(app, ["seats", "mp202"])
    assert result.exit_code == 0
    assert "MP202" in result.output
    assert "10 of 12 seats free" in result.output


def test_seats_unknown_flight():
    result = runner.invoke(app, ["seats", "XX999"])
    assert result.exit_code == 1
    assert "Unknown flight" in result.output


def test_book_non_interactive_json(free_seat):
    result = runner.invoke(
        app, ["book", "--flight", "MP101", "--seat", free_seat, "--yes", "--json"]
    )
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["state"] == "confirmation"
    assert data["selected_seat"] == free_seat
    assert data["confirmation_code"].startswith(f"MP101-{free_seat}-")


def test_book_json_without_yes_is_pure_json(free_seat):
    """--json never prompts, so stdout stays parseable when redirected."""
    result = runner.invoke(
        app, ["book", "-f", "MP101", "-s", free_seat, "--json"], input="y\n"
    )
    assert result.exit_code == 0
    assert "Confirm this booking?" not in result.output
    data = json.loads(result.output)
    assert data["state"] == "confirmation"
    assert data["confirmation_code"].startswith(f"MP101-{free_seat}-")


@pytest.mark.parametrize("args", [
    ["book", "--json"],
    ["book", "--json", "-f", "MP101"],
])
def test_book_json_needs_flight_and_seat(args):
    result = runner.invoke(app, args)
    assert result.exit_code == 1
    assert "--json needs --flight and --seat" in result.output


def test_book_unknown_flight_option():
    result = runner.invoke(app, ["book", "--flight", "ZZ1"])
    assert result.exit_code == 1
    assert "Unknown flight" in result.output


def test_book_unknown_seat_option():
    result = runner.invoke(app, ["book", "-f", "MP101", "-s", "9Z"])
    assert result.exit_code == 1
    assert "Unknown seat" in result.output


def test_book_taken_seat_option(taken_seat):
    result = runner.invoke(app, ["book", "-f", "MP101", "-s", taken_seat])
    assert result.exit_code == 1
    assert "already taken" in result.output


def test_book_interactive(free_seat):
    result = runner.invoke(app, ["book"], input=f"1\n{free_seat}\ny\n")
    assert result.exit_code == 0
    assert "Choose a flight" in result.output
    assert "Review your booking" in result.output
    assert f"MP101-{free_seat}-" in result.output


def test_book_interactive_rejects_taken_seat(free_seat, taken_seat):
    result = runner.invoke(app, ["book"], input=f"1\n{taken_seat}\n{free_seat}\ny\n")
    assert result.exit_code == 0
    assert "already taken, pick another one" in result.output
    assert f"MP101-{free_seat}-" in result.output


def test_book_interactive_invalid_choices(free_seat):
    result = runner.invoke(app, ["book"], input=f"7\n1\n9Z\n{free_seat}\ny\n")
    assert result.exit_code == 0
    assert "Invalid choice: 7" in result.output
    assert "Invalid seat: 9Z" in result.output


def test_book_interactive_back_and_decline(free_seat):
    # seat -> back to flights -> pick MP101 again -> decline review -> back at seats
    user_input = f"2\nb\nMP101\n{free_seat}\nn\n{free_seat}\ny\n"
    result = runner.invoke(app, ["book"], input=user_input)
    assert result.exit_code == 0
    assert f"MP101-{free_seat}-" in result.output


def test_book_back_to_start(free_seat):
    result = runner.invoke(app, ["book"], input=f"b\ny\n1\n{free_seat}\ny\n")
    assert result.exit_code == 0
    assert "Start a new booking" in result.output
    assert f"MP101-{free_seat}-" in result.output


def test_book_quit():
    result = runner.invoke(app, ["book"], input="q\n")
    assert result.exit_code == 1
    assert "Booking cancelled" in result.output
