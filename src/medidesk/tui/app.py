"""Main MediDesk Textual application.

Textual only hosts the screens: it owns the terminal, feeds translated key
events and periodic ticks to the dispatcher, and paints whatever the active
screen renders.
"""

from __future__ import annotations

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from medidesk.config.settings import Settings, get_settings
from medidesk.core.keys import KeyEvent, from_textual
from medidesk.data.store import UserStore, create_store
from medidesk.tui.dispatcher import ScreenDispatcher
from medidesk.tui.render import Area
from medidesk.tui.styles.theme import get_theme
from medidesk.utils.logging import configure_from_settings, get_logger

logger = get_logger("tui")


class ScreenView(Static, can_focus=True):
    """Single full-size widget that paints the dispatcher's active screen."""

    DEFAULT_CSS = """
    ScreenView {
        width: 100%;
        height: 100%;
    }
    """

    def __init__(self, dispatcher: ScreenDispatcher) -> None:
        super().__init__()
        self.dispatcher = dispatcher

    @property
    def area(self) -> Area:
        return Area(self.size.width, self.size.height)

    def redraw(self) -> None:
        self.update(self.dispatcher.render(self.area))

    def on_resize(self, event: events.Resize) -> None:
        self.redraw()

    def on_key(self, event: events.Key) -> None:
        translated = from_textual(event.key, event.character)
        if translated is None:
            return
        # Keep Tab and arrows away from Textual's focus bindings.
        event.stop()
        event.prevent_default()
        self.app.route_key(translated)  # type: ignore[attr-defined]


class MediDeskApp(App):
    """MediDesk Terminal User Interface."""

    TITLE = "MediDesk"
    SUB_TITLE = "Hospital Operations"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(self, dispatcher: ScreenDispatcher, tick_interval: float = 1 / 30) -> None:
        super().__init__()
        self.dispatcher = dispatcher
        self.tick_interval = tick_interval
        self.screen_view = ScreenView(dispatcher)

    def compose(self) -> ComposeResult:
        yield self.screen_view

    def on_mount(self) -> None:
        self.screen.styles.background = get_theme().bg_base
        self.screen_view.focus()
        self.screen_view.redraw()
        self.set_interval(self.tick_interval, self._tick)

    def _tick(self) -> None:
        self.dispatcher.tick()
        self.screen_view.redraw()

    def route_key(self, event: KeyEvent) -> None:
        decision = self.dispatcher.handle_input(event)
        logger.debug("tui.key", key=event.key.value, decision=str(decision))
        if self.dispatcher.should_quit:
            self.exit()
            return
        self.screen_view.redraw()


def launch(settings: Settings | None = None, store: UserStore | None = None) -> None:
    """Launch the MediDesk TUI.

    Args:
        settings: Effective settings; loaded from the config layers when None
        store: Account store; built from ``settings.storage`` when None
    """
    settings = settings or get_settings()
    configure_from_settings(settings)
    store = store or create_store(settings)
    dispatcher = ScreenDispatcher(store, settings=settings)
    app = MediDeskApp(dispatcher, tick_interval=settings.ui.tick_interval)
    logger.info("tui.started", backend=settings.storage.backend)
    try:
        app.run()
    finally:
        store.close()
        logger.info("tui.stopped")


if __name__ == "__main__":
    launch()
