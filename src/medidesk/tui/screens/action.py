"""Placeholder screen for leaf menu actions."""

from __future__ import annotations

from typing import Any

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from medidesk.core.keys import Key, KeyEvent
from medidesk.core.routing import NO_TRANSITION, RoutingDecision, ScreenId
from medidesk.tui import render
from medidesk.tui.render import Area
from medidesk.tui.screens.base import Screen
from medidesk.tui.styles.theme import get_theme

HELP_TEXT = "ENTER/ESC: Back to Home"


class ActionScreen(Screen):
    """Stands in for a business form until it is built.

    ``screen_id`` is per instance: it is the action the screen was opened for.
    """

    def __init__(
        self,
        action: ScreenId,
        feature_label: str = "",
        option_label: str = "",
        **kwargs: Any,
    ) -> None:
        if not action.is_action:
            raise ValueError(f"{action.value} is not a menu action")
        self.screen_id = action
        super().__init__(**kwargs)
        self.feature_label = feature_label
        self.option_label = option_label or action.value

    def on_key(self, event: KeyEvent) -> RoutingDecision:
        if event.key in (Key.ENTER, Key.ESC):
            return RoutingDecision.switch_to(ScreenId.HOME)
        return NO_TRANSITION

    def render(self, area: Area) -> RenderableType:
        theme = get_theme()
        title = f" {self.feature_label} " if self.feature_label else None
        body = Group(
            render.centered(Text(self.option_label, style=f"bold {theme.heading}")),
            Text(""),
            render.centered(Text("This feature is not available yet.", style=theme.fg_muted)),
        )
        return Group(
            Panel(body, title=title, border_style=theme.border, width=render.field_width(area)),
            Text(""),
            render.help_line(HELP_TEXT),
        )

    def __repr__(self) -> str:
        return f"ActionScreen(action={self.screen_id.value!r})"
