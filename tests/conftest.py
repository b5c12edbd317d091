"""Pytest configuration and shared fixtures.

Test layout:
| Category    | Focus                         | Location             |
| Unit        | Core navigation, screens      | tests/unit/          |
| Integration | Dispatcher flows, store, CLI  | tests/integration/   |
| TUI         | Textual host, rendering       | tests/test_tui.py    |
"""

import os
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from medidesk.config import settings as settings_module
from medidesk.core.keys import Key, KeyEvent, text_events
from medidesk.core.routing import NO_TRANSITION, RoutingDecision
from medidesk.data import store as store_module
from medidesk.data.store import MemoryUserStore, SQLiteUserStore
from medidesk.utils.logging import clear_session_context

# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (component interaction)"
    )


# =============================================================================
# COMMON FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """Keep PBKDF2 cheap so account-heavy tests stay fast."""
    monkeypatch.setattr(store_module, "PBKDF2_ITERATIONS", 1_000)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """No test reads the developer's real config files or MEDIDESK_ variables."""
    for key in list(os.environ):
        if key.startswith("MEDIDESK_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(settings_module, "_cached_settings", None)
    monkeypatch.setattr(
        settings_module,
        "config_service",
        settings_module.ConfigService(
            project_dir=tmp_path / "project",
            user_config_path=tmp_path / "home" / "config.yaml",
        ),
    )


@pytest.fixture(autouse=True)
def clean_session_context() -> Generator[None, None, None]:
    yield
    clear_session_context()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> Generator[MemoryUserStore, None, None]:
    store = MemoryUserStore()
    yield store
    store.close()


@pytest.fixture
def sqlite_store(tmp_path) -> Generator[SQLiteUserStore, None, None]:
    store = SQLiteUserStore(db_path=tmp_path / "medidesk.db")
    yield store
    store.close()


# =============================================================================
# INPUT HELPERS
# =============================================================================


def _expand(keys: tuple[Any, ...]) -> list[KeyEvent]:
    events: list[KeyEvent] = []
    for key in keys:
        if isinstance(key, KeyEvent):
            events.append(key)
        elif isinstance(key, Key):
            events.append(KeyEvent.of(key))
        elif isinstance(key, str):
            events.extend(text_events(key))
        else:
            raise TypeError(f"Cannot press {key!r}")
    return events


def press_keys(target: Any, *keys: Any) -> RoutingDecision:
    """Feed keys to a screen or dispatcher and return the last decision.

    Plain strings are typed one character at a time; ``Key`` members are
    sent as-is.
    """
    decision = NO_TRANSITION
    for event in _expand(keys):
        decision = target.handle_input(event)
    return decision


@pytest.fixture
def press() -> Callable[..., RoutingDecision]:
    return press_keys
