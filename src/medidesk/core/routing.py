"""Routing contract shared by every screen.

A screen never swaps itself out. It returns a ``RoutingDecision`` and the
dispatcher decides what to do with it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ScreenId(str, Enum):
    """Closed set of routing destinations."""

    LOGIN = "login"
    REGISTER = "register"
    HOME = "home"
    QUIT = "quit"

    # Billing & Finance
    BILLING_INVOICE = "billing.invoice"
    BILLING_VIEW = "billing.view"
    BILLING_UPDATE = "billing.update"

    # Medical Records
    RECORDS_STORE = "records.store"
    RECORDS_RETRIEVE = "records.retrieve"
    RECORDS_UPDATE = "records.update"
    RECORDS_DELETE = "records.delete"

    # Patient Management
    PATIENT_ADD = "patient.add"
    PATIENT_LIST = "patient.list"
    PATIENT_UPDATE = "patient.update"
    PATIENT_DELETE = "patient.delete"

    # Staff Management
    STAFF_ADD = "staff.add"
    STAFF_ASSIGN = "staff.assign"
    STAFF_LIST = "staff.list"
    STAFF_UPDATE = "staff.update"
    STAFF_REMOVE = "staff.remove"

    @property
    def is_action(self) -> bool:
        """True for leaf menu actions (everything but the four core ids)."""
        return "." in self.value


class RoutingKind(Enum):
    """Kind of routing decision."""

    NO_TRANSITION = "no_transition"
    STAY = "stay"
    SWITCH = "switch"


@dataclass(frozen=True)
class RoutingDecision:
    """Value returned from every ``handle_input`` call."""

    kind: RoutingKind
    target: ScreenId | None = None

    def __post_init__(self) -> None:
        if self.kind == RoutingKind.NO_TRANSITION:
            if self.target is not None:
                raise ValueError("NO_TRANSITION carries no target")
        elif self.target is None:
            raise ValueError(f"{self.kind.value} needs a target screen")

    @classmethod
    def no_transition(cls) -> RoutingDecision:
        return NO_TRANSITION

    @classmethod
    def stay_on(cls, screen: ScreenId) -> RoutingDecision:
        return cls(kind=RoutingKind.STAY, target=screen)

    @classmethod
    def switch_to(cls, screen: ScreenId) -> RoutingDecision:
        return cls(kind=RoutingKind.SWITCH, target=screen)

    @property
    def is_no_transition(self) -> bool:
        return self.kind == RoutingKind.NO_TRANSITION

    @property
    def is_switch(self) -> bool:
        return self.kind == RoutingKind.SWITCH

    def __str__(self) -> str:
        if self.target is None:
            return self.kind.value
        return f"{self.kind.value}({self.target.value})"


NO_TRANSITION = RoutingDecision(kind=RoutingKind.NO_TRANSITION)
