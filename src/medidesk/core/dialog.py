"""Binary confirm/cancel dialog layered over a screen.

While a dialog is visible its owning screen hands it every key and
processes nothing else.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from medidesk.core.keys import Key, KeyEvent


class DialogChoice(IntEnum):
    """The two buttons, in display order."""

    CONFIRM = 0
    CANCEL = 1


class DialogResult(Enum):
    """Result of a dialog interaction."""

    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    DISMISSED = "dismissed"


class ModalDialog:
    """Confirmation dialog state."""

    def __init__(
        self,
        title: str,
        prompt: str,
        confirm_label: str = "Yes",
        cancel_label: str = "No",
    ) -> None:
        self.title = title
        self.prompt = prompt
        self.confirm_label = confirm_label
        self.cancel_label = cancel_label
        self.visible = False
        self.selected = DialogChoice.CANCEL

    def open(self, default_selection: DialogChoice = DialogChoice.CANCEL) -> None:
        self.visible = True
        self.selected = default_selection

    def toggle_selection(self) -> DialogChoice:
        # Two buttons only, so Left and Right do the same thing.
        self.selected = DialogChoice(1 - self.selected)
        return self.selected

    def confirm(self) -> bool:
        """Close the dialog and report whether Confirm was selected."""
        confirmed = self.selected == DialogChoice.CONFIRM
        self.visible = False
        return confirmed

    def dismiss(self) -> None:
        self.visible = False

    def handle_input(self, event: KeyEvent) -> DialogResult | None:
        """Apply one key to an open dialog.

        Returns None while the dialog stays open (toggles and ignored keys).
        """
        if event.key in (Key.LEFT, Key.RIGHT):
            self.toggle_selection()
            return None
        if event.key == Key.ENTER:
            return DialogResult.CONFIRMED if self.confirm() else DialogResult.CANCELLED
        if event.key == Key.ESC:
            self.dismiss()
            return DialogResult.DISMISSED
        return None

    def __repr__(self) -> str:
        return (
            f"ModalDialog(title={self.title!r}, visible={self.visible}, "
            f"selected={self.selected.name})"
        )
