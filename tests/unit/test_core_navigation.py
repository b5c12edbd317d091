"""
Unit tests for the navigation core.

Tests for:
- FocusCursor wrapping
- TwoLevelMenu per-feature cursors and the Home menu table
- ModalDialog key handling
- Key events and Textual key translation
- RoutingDecision construction
"""

from __future__ import annotations

import pytest

from medidesk.core import (
    HOME_FEATURES,
    NO_TRANSITION,
    DialogChoice,
    DialogResult,
    Feature,
    FocusCursor,
    Key,
    KeyEvent,
    MenuOption,
    MenuPanel,
    ModalDialog,
    RoutingDecision,
    RoutingKind,
    ScreenId,
    TwoLevelMenu,
    build_home_menu,
    from_textual,
    text_events,
)

# =============================================================================
# FOCUS CURSOR TESTS
# =============================================================================


class TestFocusCursor:
    """Tests for FocusCursor."""

    @pytest.mark.unit
    @pytest.mark.parametrize("count", [1, 2, 4, 7])
    def test_advance_count_times_returns_to_start(self, count):
        cursor = FocusCursor(count)
        for _ in range(count):
            cursor.advance()
        assert cursor.current() == 0

    @pytest.mark.unit
    @pytest.mark.parametrize("count", [1, 3, 5])
    def test_retreat_count_times_returns_to_start(self, count):
        cursor = FocusCursor(count, index=count - 1)
        for _ in range(count):
            cursor.retreat()
        assert cursor.current() == count - 1

    @pytest.mark.unit
    def test_wraps_both_directions(self):
        cursor = FocusCursor(4)
        assert cursor.retreat() == 3
        assert cursor.advance() == 0
        assert cursor.advance() == 1

    @pytest.mark.unit
    def test_single_control_never_moves(self):
        cursor = FocusCursor(1)
        cursor.advance()
        cursor.retreat()
        assert cursor.index == 0

    @pytest.mark.unit
    @pytest.mark.parametrize("count,index", [(0, 0), (-1, 0), (3, 3), (3, -1)])
    def test_invalid_construction_rejected(self, count, index):
        with pytest.raises(ValueError):
            FocusCursor(count, index)

    @pytest.mark.unit
    def test_is_at(self):
        cursor = FocusCursor(3, index=2)
        assert cursor.is_at(2)
        assert not cursor.is_at(0)
        assert cursor.count == 3


# =============================================================================
# TWO-LEVEL MENU TESTS
# =============================================================================


class TestTwoLevelMenu:
    """Tests for TwoLevelMenu navigation."""

    @pytest.mark.unit
    def test_starts_on_first_feature_in_feature_panel(self):
        menu = build_home_menu()
        assert menu.active_panel == MenuPanel.FEATURES
        assert menu.selected_action() == (0, 0)

    @pytest.mark.unit
    def test_feature_cursor_wraps(self):
        menu = build_home_menu()
        menu.prev_feature()
        assert menu.selected_feature_index == len(HOME_FEATURES) - 1
        menu.next_feature()
        assert menu.selected_feature_index == 0

    @pytest.mark.unit
    def test_submenu_cursor_preserved_across_feature_changes(self):
        menu = build_home_menu()
        menu.enter_panel()
        menu.next_option()
        menu.next_option()
        menu.leave_panel()

        menu.next_feature()
        menu.enter_panel()
        menu.next_option()
        menu.leave_panel()

        menu.prev_feature()
        assert menu.submenu_index(0) == 2
        assert menu.submenu_index(1) == 1
        assert menu.selected_action() == (0, 2)

    @pytest.mark.unit
    def test_option_navigation_only_moves_current_feature(self):
        menu = build_home_menu()
        menu.next_option()
        assert menu.submenu_index(0) == 1
        assert all(menu.submenu_index(i) == 0 for i in range(1, len(menu.features)))

    @pytest.mark.unit
    def test_submenu_cursor_sized_to_its_feature(self):
        menu = build_home_menu()
        for index, feature in enumerate(menu.features):
            assert menu.submenu_cursors[index].count == len(feature.options)

    @pytest.mark.unit
    def test_panel_switch_does_not_touch_cursors(self):
        menu = build_home_menu()
        menu.next_feature()
        menu.enter_panel()
        assert menu.in_submenu
        assert menu.selected_action() == (1, 0)
        menu.leave_panel()
        assert menu.active_panel == MenuPanel.FEATURES
        assert menu.selected_action() == (1, 0)

    @pytest.mark.unit
    def test_move_up_down_follow_active_panel(self):
        menu = build_home_menu()
        menu.move_down()
        assert menu.selected_feature_index == 1
        menu.enter_panel()
        menu.move_down()
        menu.move_up()
        menu.move_up()
        # Medical Records has four options, so Up from 0 wraps to 3
        assert menu.selected_action() == (1, 3)

    @pytest.mark.unit
    def test_action_lookup(self):
        menu = build_home_menu()
        assert menu.action_for(0, 1) == ScreenId.BILLING_VIEW
        assert menu.action_for(4, 1) == ScreenId.STAFF_ASSIGN
        assert menu.labels_for(ScreenId.PATIENT_ADD) == ("Patient Management", "Add Patient")

    @pytest.mark.unit
    def test_reports_feature_is_reserved(self):
        menu = build_home_menu()
        reports = menu.features[3]
        assert reports.label == "Reports & Analytics"
        assert all(menu.action_for(3, i) is None for i in range(len(reports.options)))

    @pytest.mark.unit
    def test_every_action_id_is_reachable_once(self):
        mapped = [
            option.action
            for feature in HOME_FEATURES
            for option in feature.options
            if option.action is not None
        ]
        actions = [screen for screen in ScreenId if screen.is_action]
        assert sorted(mapped) == sorted(actions)

    @pytest.mark.unit
    def test_invalid_menus_rejected(self):
        with pytest.raises(ValueError):
            TwoLevelMenu([])
        with pytest.raises(ValueError):
            TwoLevelMenu([Feature("Empty", options=())])

    @pytest.mark.unit
    def test_custom_menu(self):
        menu = TwoLevelMenu(
            [Feature("Only", options=(MenuOption("One", ScreenId.STAFF_LIST),))]
        )
        menu.next_feature()
        menu.next_option()
        assert menu.selected_action() == (0, 0)
        assert menu.action_for(0, 0) == ScreenId.STAFF_LIST


# =============================================================================
# MODAL DIALOG TESTS
# =============================================================================


class TestModalDialog:
    """Tests for ModalDialog."""

    @pytest.fixture
    def dialog(self):
        dialog = ModalDialog("Confirm Exit", "Are you sure you want to exit?")
        dialog.open()
        return dialog

    @pytest.mark.unit
    def test_opens_with_cancel_selected(self, dialog):
        assert dialog.visible
        assert dialog.selected == DialogChoice.CANCEL

    @pytest.mark.unit
    def test_open_with_explicit_default(self):
        dialog = ModalDialog("t", "p")
        dialog.open(default_selection=DialogChoice.CONFIRM)
        assert dialog.selected == DialogChoice.CONFIRM

    @pytest.mark.unit
    @pytest.mark.parametrize("key", [Key.LEFT, Key.RIGHT])
    def test_left_and_right_both_toggle(self, dialog, key):
        assert dialog.handle_input(KeyEvent.of(key)) is None
        assert dialog.selected == DialogChoice.CONFIRM
        dialog.handle_input(KeyEvent.of(key))
        assert dialog.selected == DialogChoice.CANCEL

    @pytest.mark.unit
    def test_enter_on_cancel(self, dialog):
        assert dialog.handle_input(KeyEvent.of(Key.ENTER)) == DialogResult.CANCELLED
        assert not dialog.visible

    @pytest.mark.unit
    def test_enter_on_confirm(self, dialog):
        dialog.toggle_selection()
        assert dialog.handle_input(KeyEvent.of(Key.ENTER)) == DialogResult.CONFIRMED
        assert not dialog.visible

    @pytest.mark.unit
    def test_esc_dismisses(self, dialog):
        dialog.toggle_selection()
        assert dialog.handle_input(KeyEvent.of(Key.ESC)) == DialogResult.DISMISSED
        assert not dialog.visible

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "event",
        [
            KeyEvent.of(Key.TAB),
            KeyEvent.of(Key.UP),
            KeyEvent.of(Key.DOWN),
            KeyEvent.of(Key.BACKSPACE),
            KeyEvent.character("y"),
        ],
    )
    def test_other_keys_change_nothing(self, dialog, event):
        assert dialog.handle_input(event) is None
        assert dialog.visible
        assert dialog.selected == DialogChoice.CANCEL

    @pytest.mark.unit
    def test_confirm_reports_selection(self):
        dialog = ModalDialog("t", "p")
        dialog.open(DialogChoice.CONFIRM)
        assert dialog.confirm() is True
        dialog.open()
        assert dialog.confirm() is False


# =============================================================================
# KEY EVENT TESTS
# =============================================================================


class TestKeyEvents:
    """Tests for KeyEvent and host key translation."""

    @pytest.mark.unit
    def test_char_event_requires_single_character(self):
        with pytest.raises(ValueError):
            KeyEvent(Key.CHAR)
        with pytest.raises(ValueError):
            KeyEvent(Key.CHAR, "ab")
        with pytest.raises(ValueError):
            KeyEvent(Key.ENTER, "x")

    @pytest.mark.unit
    def test_text_events(self):
        events = text_events("ab")
        assert [event.char for event in events] == ["a", "b"]
        assert all(event.is_char for event in events)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("tab", Key.TAB),
            ("enter", Key.ENTER),
            ("escape", Key.ESC),
            ("backspace", Key.BACKSPACE),
            ("up", Key.UP),
            ("down", Key.DOWN),
            ("left", Key.LEFT),
            ("right", Key.RIGHT),
        ],
    )
    def test_named_keys(self, name, expected):
        assert from_textual(name) == KeyEvent.of(expected)

    @pytest.mark.unit
    def test_printable_characters(self):
        assert from_textual("a", "a") == KeyEvent.character("a")
        assert from_textual("space", " ") == KeyEvent.character(" ")
        assert from_textual("exclamation_mark", "!") == KeyEvent.character("!")

    @pytest.mark.unit
    @pytest.mark.parametrize("name,character", [("f1", None), ("ctrl+a", "\x01"), ("home", None)])
    def test_unknown_keys_dropped(self, name, character):
        assert from_textual(name, character) is None


# =============================================================================
# ROUTING TESTS
# =============================================================================


class TestRoutingDecision:
    """Tests for RoutingDecision."""

    @pytest.mark.unit
    def test_constructors(self):
        assert RoutingDecision.no_transition() is NO_TRANSITION
        assert NO_TRANSITION.is_no_transition
        switch = RoutingDecision.switch_to(ScreenId.HOME)
        assert switch.is_switch and switch.target == ScreenId.HOME
        stay = RoutingDecision.stay_on(ScreenId.LOGIN)
        assert stay.kind == RoutingKind.STAY

    @pytest.mark.unit
    def test_decisions_compare_by_value(self):
        assert RoutingDecision.switch_to(ScreenId.QUIT) == RoutingDecision.switch_to(ScreenId.QUIT)
        assert RoutingDecision.switch_to(ScreenId.QUIT) != RoutingDecision.stay_on(ScreenId.QUIT)

    @pytest.mark.unit
    def test_target_consistency_enforced(self):
        with pytest.raises(ValueError):
            RoutingDecision(RoutingKind.SWITCH)
        with pytest.raises(ValueError):
            RoutingDecision(RoutingKind.NO_TRANSITION, ScreenId.HOME)

    @pytest.mark.unit
    def test_action_ids(self):
        assert ScreenId.BILLING_INVOICE.is_action
        assert not ScreenId.HOME.is_action
        assert str(RoutingDecision.switch_to(ScreenId.STAFF_ADD)) == "switch(staff.add)"
