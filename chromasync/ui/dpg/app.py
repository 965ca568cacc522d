"""Dear PyGui theme editor window."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from chromasync import defaults
from chromasync.app.core import ThemeState, default_theme_colors
from chromasync.app.state_manager import ThemeStateManager
from chromasync.colorspace import ColorFormat, convert, text_color_for
from chromasync.ui.dpg.color_picker import ColorPickerControl
from chromasync.ui.dpg.theme import apply_theme, rgba255

try:
    import dearpygui.dearpygui as dpg
except ImportError:
    dpg = None  # type: ignore


class ThemeEditorApp:
    """One color control per theme token plus a live preview of the theme."""

    def __init__(
        self,
        state: Optional[ThemeState] = None,
        *,
        _clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = state or ThemeState()
        self.state_lock = threading.RLock()
        self.state_manager = ThemeStateManager(self.state, self.state_lock)

        self.controls: dict[str, ColorPickerControl] = {
            key: ColorPickerControl(
                key.replace("-", " ").title(),
                value,
                self.state_manager.commit_callback(key),
                _clock=_clock,
            )
            for key, value in self.state_manager.snapshot().items()
        }

        self.viewport_created = False
        self.preview_text_id: Optional[int] = None
        self.preview_button_id: Optional[int] = None
        self._preview_button_theme_id: Optional[int] = None
        self.export_format_combo_id: Optional[int] = None
        self.export_text_id: Optional[int] = None

    def require_backend(self) -> None:
        if dpg is None:
            raise RuntimeError("Dear PyGui is not installed. Please `pip install dearpygui` to run the editor.")

    # ------------------------------------------------------------------
    # Building the interface
    # ------------------------------------------------------------------
    def build(self) -> None:
        """Create viewport, windows, and widgets."""
        self.require_backend()
        dpg.create_context()

        width, height = defaults.WINDOW_SIZE
        dpg.create_viewport(title="chromasync", width=width, height=height)
        self.viewport_created = True

        with dpg.window(tag="main_window"):
            with dpg.group(horizontal=True):
                with dpg.child_window(width=defaults.CONTROL_PANEL_WIDTH, tag="controls_panel"):
                    dpg.add_button(label="Reset to default", callback=self.on_reset)
                    dpg.add_separator()
                    for control in self.controls.values():
                        control.build(parent="controls_panel")
                        dpg.add_spacer(height=4, parent="controls_panel")

                with dpg.child_window(tag="preview_panel"):
                    dpg.add_text("Preview")
                    self.preview_button_id = dpg.add_button(label="Primary action", width=200)
                    self.preview_text_id = dpg.add_text("Destructive", tag="preview_destructive")
                    dpg.add_input_text(default_value="Input field", width=200)
                    dpg.add_slider_float(label="Slider", default_value=0.5, max_value=1.0, width=200)
                    dpg.add_checkbox(label="Checkbox", default_value=True)
                    dpg.add_spacer(height=10)
                    dpg.add_text("Export")
                    self.export_format_combo_id = dpg.add_combo(
                        items=[fmt.value for fmt in ColorFormat],
                        default_value=ColorFormat.OKLCH.value,
                        width=120,
                        callback=lambda: self._refresh_export(),
                    )
                    self.export_text_id = dpg.add_input_text(
                        multiline=True,
                        readonly=True,
                        width=-1,
                        height=-1,
                    )

        dpg.set_primary_window("main_window", True)

    def render(self) -> None:
        """Run Dear PyGui event loop."""
        self.require_backend()
        if not self.viewport_created:
            self.build()

        dpg.setup_dearpygui()
        dpg.show_viewport()

        try:
            while dpg.is_dearpygui_running():
                self.step()
                dpg.render_dearpygui_frame()
        finally:
            for control in self.controls.values():
                control.destroy()
            dpg.destroy_context()

    def step(self) -> None:
        """One frame: feed owner values to controls, fire due commits, restyle."""
        colors = self.state_manager.snapshot()
        for key, control in self.controls.items():
            control.set_color(colors[key])
            control.update()

        if self.state_manager.consume_refresh():
            colors = self.state_manager.snapshot()
            apply_theme(colors)
            self._refresh_preview(colors)
            self._refresh_export()

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------
    def on_reset(self, sender=None, app_data=None) -> None:
        self.state_manager.load_colors(defaults.DEFAULT_THEME_NAME, default_theme_colors())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _refresh_preview(self, colors: dict[str, str]) -> None:
        if dpg is None:
            return
        if self.preview_text_id is not None and dpg.does_item_exist(self.preview_text_id):
            destructive = colors["destructive"]
            dpg.configure_item(
                self.preview_text_id,
                color=rgba255(destructive, defaults.DEFAULT_THEME_COLORS["destructive"]),
            )
        if self.preview_button_id is not None and dpg.does_item_exist(self.preview_button_id):
            primary = colors["primary"]
            if self._preview_button_theme_id is not None and dpg.does_item_exist(self._preview_button_theme_id):
                dpg.delete_item(self._preview_button_theme_id)
            with dpg.theme() as button_theme:
                with dpg.theme_component(dpg.mvButton):
                    dpg.add_theme_color(
                        dpg.mvThemeCol_Button,
                        rgba255(primary, defaults.DEFAULT_THEME_COLORS["primary"]),
                    )
                    dpg.add_theme_color(dpg.mvThemeCol_Text, rgba255(text_color_for(primary), "black"))
            dpg.bind_item_theme(self.preview_button_id, button_theme)
            self._preview_button_theme_id = button_theme

    def _refresh_export(self) -> None:
        if dpg is None or self.export_text_id is None or not dpg.does_item_exist(self.export_text_id):
            return
        fmt = dpg.get_value(self.export_format_combo_id) or ColorFormat.OKLCH.value
        lines = [
            f"  --{key}: {convert(value, fmt)};"
            for key, value in self.state_manager.snapshot().items()
        ]
        dpg.set_value(self.export_text_id, ":root {\n" + "\n".join(lines) + "\n}")


def run() -> None:
    """Launch the chromasync theme editor."""
    ThemeEditorApp().render()


if __name__ == "__main__":
    run()
