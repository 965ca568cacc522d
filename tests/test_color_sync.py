"""Tests for chromasync.app.color_sync."""

import logging

import pytest

from chromasync import defaults
from chromasync.app.color_sync import ColorSyncController, SyncState
from chromasync.colorspace import CanonicalColor, format_color, parse

INITIAL = "oklch(0.5000 0.1000 120.00)"
HUGE_CHANNELS = ["oklch(0.5 1e30 0)", "oklch(0.5 1e300 0)", "rgb(1e200 0 0)"]


def oklch_text(text: str) -> str:
    return format_color(parse(text))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def commits():
    return []


@pytest.fixture
def controller(commits, fake_clock):
    return ColorSyncController(INITIAL, commits.append, _clock=fake_clock)


def run_for(controller, clock, seconds, step=0.01):
    """Poll once per simulated frame for ``seconds``."""
    frames = int(round(seconds / step))
    for _ in range(frames):
        clock.advance(step)
        controller.poll()


# ---------------------------------------------------------------------------
# TestInitialState
# ---------------------------------------------------------------------------

class TestInitialState:

    def test_valid_initial_color(self, controller):
        assert controller.state is SyncState.IDLE
        assert controller.display_text == INITIAL
        assert controller.color == CanonicalColor(0.5, 0.1, 120.0, 1.0)

    def test_initial_color_is_displayed_canonically(self, commits, fake_clock):
        controller = ColorSyncController("#336699", commits.append, _clock=fake_clock)
        assert controller.display_text.startswith("oklch(")
        assert controller.display_hex == "#336699"
        assert commits == []

    def test_invalid_initial_color_is_shown_raw(self, commits, fake_clock):
        controller = ColorSyncController("bogus", commits.append, _clock=fake_clock)
        assert controller.state is SyncState.RAW_INVALID
        assert controller.display_text == "bogus"
        assert controller.display_hex == defaults.FALLBACK_HEX
        assert controller.color is None
        assert controller.controls_color == CanonicalColor(*defaults.DEFAULT_CONTROLS_COLOR)


# ---------------------------------------------------------------------------
# TestTextEdits
# ---------------------------------------------------------------------------

class TestTextEdits:

    def test_commit_waits_for_delay(self, controller, commits, fake_clock):
        controller.edit_text("#ff0000")
        assert controller.state is SyncState.DIRTY
        fake_clock.advance(0.2)
        assert controller.poll() is False
        assert commits == []

        fake_clock.advance(0.1)
        assert controller.poll() is True
        assert commits == [oklch_text("#ff0000")]
        assert controller.state is SyncState.IDLE

    def test_committed_value_is_canonical_oklch(self, controller, commits, fake_clock):
        controller.edit_text("rgb(255, 0, 0)")
        run_for(controller, fake_clock, 0.3)
        assert commits == [oklch_text("#ff0000")]
        assert commits[0].startswith("oklch(")

    @pytest.mark.parametrize("text", HUGE_CHANNELS)
    def test_huge_channels_commit(self, controller, commits, fake_clock, text):
        controller.edit_text(text)
        assert controller.state is SyncState.DIRTY
        run_for(controller, fake_clock, 0.3)
        assert commits == [oklch_text(text)]

    def test_typing_burst_commits_once(self, controller, commits, fake_clock):
        for text in ("#ff0000", "#00ff00", "#0000ff"):
            controller.edit_text(text)
            run_for(controller, fake_clock, 0.1)
        assert commits == []

        run_for(controller, fake_clock, 0.3)
        assert commits == [oklch_text("#0000ff")]

    def test_invalid_text_is_kept_and_never_committed(self, controller, commits, fake_clock):
        controller.edit_text("oklch(0.5 0.1")
        assert controller.state is SyncState.RAW_INVALID
        assert controller.display_text == "oklch(0.5 0.1"
        assert controller.display_hex == defaults.FALLBACK_HEX

        run_for(controller, fake_clock, 1.0)
        assert commits == []

    def test_invalid_text_cancels_pending_commit(self, controller, commits, fake_clock):
        controller.edit_text("#ff0000")
        run_for(controller, fake_clock, 0.1)
        controller.edit_text("#ff00zz")
        run_for(controller, fake_clock, 1.0)
        assert commits == []

    def test_typing_through_invalid_states(self, controller, commits, fake_clock):
        for text in ("o", "oklch(", "oklch(0.6 0.2", "oklch(0.6 0.2 30)"):
            controller.edit_text(text)
            run_for(controller, fake_clock, 0.05)
        run_for(controller, fake_clock, 0.3)
        assert commits == ["oklch(0.6000 0.2000 30.00)"]

    def test_native_pick(self, controller, commits, fake_clock):
        controller.pick_native("#ff8800")
        assert controller.display_hex == "#ff8800"
        run_for(controller, fake_clock, 0.3)
        assert commits == [oklch_text("#ff8800")]


# ---------------------------------------------------------------------------
# TestSliders
# ---------------------------------------------------------------------------

class TestSliders:

    def test_slider_goes_through_both_limiters(self, controller, commits, fake_clock):
        controller.adjust_channel("hue", 200.0)
        fake_clock.advance(0.05)
        assert controller.poll() is False
        fake_clock.advance(0.2)
        assert controller.poll() is False
        assert commits == []

        fake_clock.advance(0.1)
        assert controller.poll() is True
        assert commits == ["oklch(0.5000 0.1000 200.00)"]

    def test_drag_commits_last_value_once(self, controller, commits, fake_clock):
        for hue in range(130, 250, 10):
            controller.adjust_channel("hue", float(hue))
            run_for(controller, fake_clock, 0.06)
        assert commits == []

        run_for(controller, fake_clock, 0.5)
        assert commits == ["oklch(0.5000 0.1000 240.00)"]

    def test_display_follows_drag_immediately(self, controller):
        controller.adjust_channel("lightness", 0.8)
        assert controller.display_text == "oklch(0.8000 0.1000 120.00)"
        assert controller.state is SyncState.DIRTY

    def test_returns_normalized_color(self, controller):
        assert controller.adjust_channel("hue", 370.0).hue == pytest.approx(10.0)
        assert controller.adjust_channel("lightness", 1.5).lightness == 1.0
        assert controller.adjust_channel("chroma", -0.1).chroma == 0.0
        assert controller.adjust_channel("alpha", 0.5).alpha == 0.5

    def test_alpha_slider_shows_alpha(self, controller, commits, fake_clock):
        controller.adjust_channel("alpha", 0.5)
        run_for(controller, fake_clock, 0.4)
        assert commits == ["oklch(0.5000 0.1000 120.00 / 0.50)"]

    def test_slider_on_invalid_text_starts_from_default(self, controller):
        controller.edit_text("garbage")
        color = controller.adjust_channel("hue", 100.0)
        L, C, _H, A = defaults.DEFAULT_CONTROLS_COLOR
        assert color == CanonicalColor(L, C, 100.0, A)
        assert controller.state is SyncState.DIRTY

    def test_unknown_channel(self, controller):
        with pytest.raises(ValueError):
            controller.adjust_channel("saturation", 0.5)

    def test_text_edit_replaces_pending_slider(self, controller, commits, fake_clock):
        controller.adjust_channel("hue", 200.0)
        controller.edit_text("#ff0000")
        run_for(controller, fake_clock, 1.0)
        assert commits == [oklch_text("#ff0000")]


# ---------------------------------------------------------------------------
# TestExternalSync
# ---------------------------------------------------------------------------

class TestExternalSync:

    def test_same_string_is_noop(self, controller):
        assert controller.sync_external(INITIAL) is False

    def test_equivalent_spelling_does_not_change_display(self, controller, commits, fake_clock):
        assert controller.sync_external("oklch(0.5 0.1 120)") is False
        assert controller.display_text == INITIAL
        run_for(controller, fake_clock, 0.5)
        assert commits == []

    def test_foreign_value_is_adopted(self, controller):
        assert controller.sync_external("#0000ff") is True
        assert controller.display_text == oklch_text("#0000ff")
        assert controller.state is SyncState.IDLE

    def test_invalid_external_value_shown_raw(self, controller):
        assert controller.sync_external("not-a-color") is True
        assert controller.state is SyncState.RAW_INVALID
        assert controller.display_text == "not-a-color"
        assert controller.display_hex == defaults.FALLBACK_HEX

    def test_commit_echo_does_not_loop(self, controller, commits, fake_clock):
        controller.edit_text("#ff0000")
        run_for(controller, fake_clock, 0.3)
        assert len(commits) == 1

        # Owner stores the commit and passes it back down
        assert controller.sync_external(commits[0]) is False
        run_for(controller, fake_clock, 1.0)
        assert len(commits) == 1
        assert controller.state is SyncState.IDLE

    def test_stale_echo_while_dirty_is_ignored(self, controller, commits, fake_clock):
        controller.edit_text("#ff0000")
        run_for(controller, fake_clock, 0.3)
        first = commits[0]

        controller.edit_text("#00ff00")
        assert controller.sync_external(first) is False
        assert controller.display_text == oklch_text("#00ff00")

        run_for(controller, fake_clock, 0.3)
        assert commits == [first, oklch_text("#00ff00")]

    def test_foreign_value_while_dirty_wins(self, controller, commits, fake_clock):
        controller.edit_text("#00ff00")
        assert controller.sync_external("#0000ff") is True
        assert not controller.dirty
        run_for(controller, fake_clock, 1.0)
        assert commits == []
        assert controller.display_text == oklch_text("#0000ff")

    def test_external_value_replaces_raw_text(self, controller):
        controller.edit_text("garbage")
        assert controller.sync_external("#0000ff") is True
        assert controller.state is SyncState.IDLE

    @pytest.mark.parametrize("text", HUGE_CHANNELS)
    def test_huge_channels_are_adopted(self, controller, text):
        assert controller.sync_external(text) is True
        assert controller.state is SyncState.IDLE
        assert controller.display_text == oklch_text(text)
        assert len(controller.display_hex) == 7


# ---------------------------------------------------------------------------
# TestLifecycle
# ---------------------------------------------------------------------------

class TestLifecycle:

    def test_flush_commits_now(self, controller, commits):
        controller.edit_text("#ff0000")
        assert controller.flush() is True
        assert commits == [oklch_text("#ff0000")]

    def test_flush_chains_slider_into_commit(self, controller, commits):
        controller.adjust_channel("hue", 200.0)
        assert controller.flush() is True
        assert commits == ["oklch(0.5000 0.1000 200.00)"]

    def test_close_cancels_pending(self, controller, commits, fake_clock):
        controller.edit_text("#ff0000")
        controller.close()
        assert controller.closed
        run_for(controller, fake_clock, 1.0)
        assert commits == []

    def test_edits_after_close_are_ignored(self, controller, commits, fake_clock):
        controller.close()
        controller.edit_text("#ff0000")
        controller.adjust_channel("hue", 10.0)
        assert not controller.dirty
        assert controller.flush() is False
        run_for(controller, fake_clock, 1.0)
        assert commits == []

    def test_close_is_idempotent(self, controller):
        controller.close()
        controller.close()
        assert controller.closed

    def test_on_change_error_is_logged(self, fake_clock, caplog):
        def failing(_value):
            raise RuntimeError("owner rejected")

        controller = ColorSyncController(INITIAL, failing, _clock=fake_clock)
        controller.edit_text("#ff0000")
        fake_clock.advance(0.3)
        with caplog.at_level(logging.WARNING):
            assert controller.poll() is True
        assert "owner rejected" in caplog.text
        assert controller.state is SyncState.IDLE
