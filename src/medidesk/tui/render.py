"""Rich building blocks shared by the screens.

Every helper is pure: it reads state and returns a renderable.
"""

from __future__ import annotations

from typing import NamedTuple

from rich import box
from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from medidesk.core.dialog import DialogChoice, ModalDialog
from medidesk.core.messages import MessageKind, TransientMessage
from medidesk.tui.styles.theme import get_theme

FIELD_WIDTH_RATIO = 0.6
DIALOG_WIDTH = 44
POINTER = "► "
BULLET = "•"


class Area(NamedTuple):
    """Drawable region in terminal cells."""

    width: int
    height: int

    def fits(self, min_width: int, min_height: int) -> bool:
        return self.width >= min_width and self.height >= min_height


def field_width(area: Area) -> int:
    return max(20, int(area.width * FIELD_WIDTH_RATIO))


def centered(renderable: RenderableType) -> Align:
    return Align.center(renderable)


def masked(value: str) -> str:
    """Password buffers are shown as one bullet per character."""
    return BULLET * len(value)


def field_panel(
    label: str,
    value: str,
    focused: bool,
    area: Area,
    *,
    secret: bool = False,
) -> Align:
    theme = get_theme()
    title = f"{POINTER}{label}" if focused else label
    colour = theme.focus(focused)
    panel = Panel(
        Text(masked(value) if secret else value, style=theme.fg_base),
        title=title,
        title_align="left",
        border_style=colour,
        box=box.ROUNDED,
        width=field_width(area),
    )
    return centered(panel)


def link_line(label: str, focused: bool) -> Align:
    theme = get_theme()
    prefix = POINTER if focused else "  "
    return centered(Text(f"{prefix}{label}", style=theme.focus(focused)))


def message_line(message: TransientMessage, now: float | None = None) -> Align:
    """The status line; blank when nothing is active."""
    theme = get_theme()
    if not message.is_active(now):
        return centered(Text(""))
    colour = theme.error if message.kind == MessageKind.ERROR else theme.success
    return centered(Text(message.text or "", style=f"bold {colour}"))


def help_line(text: str) -> Align:
    return centered(Text(text, style=get_theme().fg_help))


def heading(text: str, subtitle: str | None = None) -> Align:
    theme = get_theme()
    lines = Text(text, style=f"bold {theme.primary}", justify="center")
    if subtitle:
        lines.append("\n")
        lines.append(subtitle, style=f"italic {theme.fg_muted}")
    return centered(lines)


def dialog_panel(dialog: ModalDialog) -> Align:
    """The confirmation box with its two buttons."""
    theme = get_theme()
    confirm_focused = dialog.selected == DialogChoice.CONFIRM

    buttons = Table.grid(expand=True)
    buttons.add_column(justify="center")
    buttons.add_column(justify="center")
    buttons.add_row(
        Text(
            f"[ {dialog.confirm_label} ]",
            style=f"bold {theme.success}" if confirm_focused else theme.fg_muted,
        ),
        Text(
            f"[ {dialog.cancel_label} ]",
            style=f"bold {theme.error}" if not confirm_focused else theme.fg_muted,
        ),
    )
    body = Group(
        Align.center(Text(dialog.prompt, style=theme.fg_base)),
        Text(""),
        buttons,
    )
    return centered(
        Panel(
            body,
            title=dialog.title.strip(),
            title_align="center",
            border_style=theme.primary,
            style=f"on {theme.bg_dialog}",
            box=box.DOUBLE,
            width=DIALOG_WIDTH,
        )
    )


def too_small(area: Area, min_width: int, min_height: int) -> Align:
    """Shown instead of a screen when the terminal is below the minimum size."""
    theme = get_theme()
    return centered(
        Text(
            f"Terminal too small: {area.width}x{area.height} "
            f"(need at least {min_width}x{min_height})",
            style=f"bold {theme.error}",
        )
    )
