"""One bill being split: receipt, participants, assignments and wizard step."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from splitbill.application.wizard import Wizard
from splitbill.domain.allocation import NoItemsError, NoParticipantsError, compute_split, participant_totals
from splitbill.domain.assignment import AssignmentMap
from splitbill.domain.participants import ParticipantRoster
from splitbill.domain.receipt import Receipt
from splitbill.domain.settlement import ParticipantTotal, SettlementResult
from splitbill.runtime import get_logger

logger = get_logger(__name__)

SplitStatus = Literal["ok", "no_receipt", "no_items", "no_participants"]
StepStatus = Literal["ok", "no_receipt", "no_items", "no_participants", "wrong_step"]


@dataclass(frozen=True)
class SplitOutcome:
    """Outcome of computing the final split."""

    status: SplitStatus
    result: SettlementResult | None = None
    error: str | None = None


@dataclass
class BillSession:
    """Owns the editable state of a single bill and keeps it consistent.

    Removing an item or a participant re-indexes the assignment map in the
    same call, so callers never see claims pointing at the wrong slot.
    """

    receipt: Receipt | None = None
    roster: ParticipantRoster = field(default_factory=ParticipantRoster)
    assignments: AssignmentMap = field(default_factory=AssignmentMap)
    wizard: Wizard = field(default_factory=Wizard)

    # --- Receipt ---
    def load_receipt(self, receipt: Receipt | None) -> bool:
        """Replace the receipt and clear all claims; None leaves state untouched.

        While the wizard waits on the upload step, a loaded receipt moves it
        on to participants.
        """
        if receipt is None:
            logger.info("No receipt received; keeping previous state")
            return False
        self.receipt = receipt
        self.assignments.reset(len(receipt.items))
        if self.wizard.can("upload_parsed"):
            self.wizard.fire("upload_parsed")
        logger.debug("Loaded receipt with %d items", len(receipt.items))
        return True

    def _edit(self, applied: bool, what: str) -> bool:
        if not applied:
            logger.debug("Ignored invalid %s edit", what)
        return applied

    def set_item_name(self, index: int, name: str) -> bool:
        return self.receipt is not None and self._edit(self.receipt.set_item_name(index, name), "name")

    def set_item_quantity(self, index: int, value: object) -> bool:
        return self.receipt is not None and self._edit(self.receipt.set_item_quantity(index, value), "quantity")

    def set_item_price(self, index: int, value: object) -> bool:
        return self.receipt is not None and self._edit(self.receipt.set_item_price(index, value), "price")

    def set_tax(self, value: object) -> bool:
        return self.receipt is not None and self._edit(self.receipt.set_tax(value), "tax")

    def add_item(self) -> int | None:
        if self.receipt is None:
            return None
        index = self.receipt.add_item()
        self.assignments.add_item()
        return index

    def remove_item(self, index: int) -> bool:
        if self.receipt is None or not self.receipt.remove_item(index):
            logger.debug("Refused to remove item %d", index)
            return False
        self.assignments.remove_item(index)
        return True

    # --- Participants ---
    def add_participant(self) -> int:
        return self.roster.add()

    def rename_participant(self, index: int, name: str) -> bool:
        return self.roster.rename(index, name)

    def remove_participant(self, index: int) -> bool:
        if not self.roster.remove(index):
            return False
        self.assignments.remove_participant(index)
        return True

    # --- Assignments ---
    def assign(self, item: int, participant: int) -> None:
        self.assignments.assign(item, participant)

    def increase(self, item: int, participant: int) -> None:
        self.assignments.increase(item, participant)

    def decrease(self, item: int, participant: int) -> None:
        self.assignments.decrease(item, participant)

    def unassign(self, item: int, participant: int) -> None:
        self.assignments.unassign(item, participant)

    # --- Wizard steps with guards ---
    def finish_participants(self) -> StepStatus:
        if not self.wizard.can("participants_done"):
            return "wrong_step"
        if not self.roster.has_active():
            return "no_participants"
        self.wizard.fire("participants_done")
        return "ok"

    def finish_review(self) -> StepStatus:
        if not self.wizard.can("review_done"):
            return "wrong_step"
        if self.receipt is None:
            return "no_receipt"
        if not self.receipt.items:
            return "no_items"
        self.wizard.fire("review_done")
        return "ok"

    # --- Engine ---
    def preview(self) -> list[ParticipantTotal]:
        """Live running totals; empty until a receipt is loaded."""
        if self.receipt is None:
            return []
        return participant_totals(self.receipt, self.roster.names, self.assignments)

    def compute_split(self) -> SplitOutcome:
        if self.receipt is None:
            return SplitOutcome(status="no_receipt", error="No receipt loaded")
        try:
            result = compute_split(self.receipt, self.roster.names, self.assignments)
        except NoItemsError as exc:
            logger.info("Split refused: %s", exc)
            return SplitOutcome(status="no_items", error=str(exc))
        except NoParticipantsError as exc:
            logger.info("Split refused: %s", exc)
            return SplitOutcome(status="no_participants", error=str(exc))

        if not result.is_accurate:
            logger.info(
                "Split total %s differs from receipt total %s",
                result.split_total,
                result.original_total,
            )
        if self.wizard.can("split_computed"):
            self.wizard.fire("split_computed")
        return SplitOutcome(status="ok", result=result)
