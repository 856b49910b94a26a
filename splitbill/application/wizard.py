"""Wizard navigation as an explicit finite-state machine.

The allocation engine never consults the wizard; it can be called from any
step. The wizard only decides which screen the presentation layer shows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

WizardStep = Literal["landing", "upload", "participants", "review", "assign", "results"]
WizardEvent = Literal[
    "start",
    "upload_parsed",
    "participants_done",
    "review_done",
    "split_computed",
    "back",
    "restart",
]

TRANSITIONS: dict[tuple[WizardStep, WizardEvent], WizardStep] = {
    ("landing", "start"): "upload",
    ("upload", "upload_parsed"): "participants",
    ("upload", "back"): "landing",
    ("participants", "participants_done"): "review",
    ("participants", "back"): "upload",
    ("review", "review_done"): "assign",
    ("review", "back"): "participants",
    ("assign", "split_computed"): "results",
    ("assign", "back"): "review",
    ("results", "back"): "assign",
    ("results", "restart"): "landing",
}


class InvalidTransition(RuntimeError):
    """Raised when an event is not allowed from the current step."""

    def __init__(self, step: WizardStep, event: WizardEvent) -> None:
        super().__init__(f"Cannot {event!r} from step {step!r}")
        self.step = step
        self.event = event


@dataclass
class Wizard:
    step: WizardStep = "landing"

    def can(self, event: WizardEvent) -> bool:
        return (self.step, event) in TRANSITIONS

    def fire(self, event: WizardEvent) -> WizardStep:
        target = TRANSITIONS.get((self.step, event))
        if target is None:
            raise InvalidTransition(self.step, event)
        self.step = target
        return target
