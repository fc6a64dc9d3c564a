"""Thin command surface over WizardSession for presentation layers."""

from .session import WizardSession


class WizardController:
    """Forwards user intents to the session and returns its results."""

    def __init__(self, model: WizardSession):
        self.model = model

    def start(self) -> None:
        self.model.start()

    def pick_flight(self, flight_id: str) -> bool:
        return self.model.pick_flight(flight_id)

    def pick_seat(self, seat: str) -> bool:
        return self.model.pick_seat(seat)

    def confirm(self) -> bool:
        return self.model.confirm()

    def finish(self) -> None:
        self.model.finish()

    def back(self) -> None:
        self.model.back()
