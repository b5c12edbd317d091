"""Two-level menu: a feature list where each feature owns a submenu.

Every feature keeps its own submenu cursor, so switching features and
coming back restores the row that was selected there.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from medidesk.core.focus import FocusCursor
from medidesk.core.routing import ScreenId


class MenuPanel(str, Enum):
    """Which list receives Up/Down."""

    FEATURES = "features"
    SUBMENU = "submenu"


@dataclass(frozen=True)
class MenuOption:
    """A submenu row. ``action`` is None for reserved entries."""

    label: str
    action: ScreenId | None = None


@dataclass(frozen=True)
class Feature:
    """A feature row with its submenu options."""

    label: str
    options: tuple[MenuOption, ...]
    icon: str = "•"


class TwoLevelMenu:
    """Feature list plus one independent submenu cursor per feature."""

    def __init__(self, features: Sequence[Feature]) -> None:
        if not features:
            raise ValueError("TwoLevelMenu needs at least one feature")
        for feature in features:
            if not feature.options:
                raise ValueError(f"Feature {feature.label!r} has no submenu options")
        self.features: tuple[Feature, ...] = tuple(features)
        self.feature_cursor = FocusCursor(len(self.features))
        self.submenu_cursors = [FocusCursor(len(feature.options)) for feature in self.features]
        self.active_panel = MenuPanel.FEATURES

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next_feature(self) -> None:
        self.feature_cursor.advance()

    def prev_feature(self) -> None:
        self.feature_cursor.retreat()

    def next_option(self) -> None:
        self.current_submenu_cursor.advance()

    def prev_option(self) -> None:
        self.current_submenu_cursor.retreat()

    def move_down(self) -> None:
        """Down arrow on whichever panel is active."""
        if self.active_panel == MenuPanel.FEATURES:
            self.next_feature()
        else:
            self.next_option()

    def move_up(self) -> None:
        if self.active_panel == MenuPanel.FEATURES:
            self.prev_feature()
        else:
            self.prev_option()

    def enter_panel(self) -> None:
        self.active_panel = MenuPanel.SUBMENU

    def leave_panel(self) -> None:
        self.active_panel = MenuPanel.FEATURES

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def in_submenu(self) -> bool:
        return self.active_panel == MenuPanel.SUBMENU

    @property
    def selected_feature_index(self) -> int:
        return self.feature_cursor.current()

    @property
    def selected_feature(self) -> Feature:
        return self.features[self.selected_feature_index]

    @property
    def current_submenu_cursor(self) -> FocusCursor:
        return self.submenu_cursors[self.selected_feature_index]

    def submenu_index(self, feature_index: int) -> int:
        return self.submenu_cursors[feature_index].current()

    def selected_action(self) -> tuple[int, int]:
        """The committed (feature_index, option_index) pair."""
        feature_index = self.selected_feature_index
        return feature_index, self.submenu_index(feature_index)

    def option_at(self, feature_index: int, option_index: int) -> MenuOption:
        return self.features[feature_index].options[option_index]

    def action_for(self, feature_index: int, option_index: int) -> ScreenId | None:
        """Mapped action for a pair, or None for reserved entries."""
        return self.option_at(feature_index, option_index).action

    def labels_for(self, action: ScreenId) -> tuple[str, str] | None:
        """(feature label, option label) for an action id."""
        for feature in self.features:
            for option in feature.options:
                if option.action == action:
                    return feature.label, option.label
        return None


HOME_FEATURES: tuple[Feature, ...] = (
    Feature(
        label="Billing & Finance",
        icon="💰",
        options=(
            MenuOption("Generate Invoice", ScreenId.BILLING_INVOICE),
            MenuOption("View Invoices", ScreenId.BILLING_VIEW),
            MenuOption("Update Invoice", ScreenId.BILLING_UPDATE),
        ),
    ),
    Feature(
        label="Medical Records",
        icon="📋",
        options=(
            MenuOption("Store Record", ScreenId.RECORDS_STORE),
            MenuOption("Retrieve Records", ScreenId.RECORDS_RETRIEVE),
            MenuOption("Update Record", ScreenId.RECORDS_UPDATE),
            MenuOption("Delete Record", ScreenId.RECORDS_DELETE),
        ),
    ),
    Feature(
        label="Patient Management",
        icon="👤",
        options=(
            MenuOption("Add Patient", ScreenId.PATIENT_ADD),
            MenuOption("List Patients", ScreenId.PATIENT_LIST),
            MenuOption("Update Patient", ScreenId.PATIENT_UPDATE),
            MenuOption("Delete Patient", ScreenId.PATIENT_DELETE),
        ),
    ),
    # Reserved: navigable, but nothing is wired behind it yet.
    Feature(
        label="Reports & Analytics",
        icon="📊",
        options=(
            MenuOption("Generate Report"),
            MenuOption("Export Reports"),
        ),
    ),
    Feature(
        label="Staff Management",
        icon="👥",
        options=(
            MenuOption("Add Staff", ScreenId.STAFF_ADD),
            MenuOption("Assign Shift", ScreenId.STAFF_ASSIGN),
            MenuOption("List Staff", ScreenId.STAFF_LIST),
            MenuOption("Update Staff", ScreenId.STAFF_UPDATE),
            MenuOption("Remove Staff", ScreenId.STAFF_REMOVE),
        ),
    ),
)


def build_home_menu() -> TwoLevelMenu:
    return TwoLevelMenu(HOME_FEATURES)
