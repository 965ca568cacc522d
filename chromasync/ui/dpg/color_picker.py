"""Color control for the theme editor: swatch, native color well, OKLCH text, sliders."""

from __future__ import annotations

import re
import time
from typing import Callable, Optional, Sequence

from chromasync import defaults
from chromasync.app.color_sync import ColorSyncController
from chromasync.colorspace import CanonicalColor, round_half_away, to_srgb

try:
    import dearpygui.dearpygui as dpg
except ImportError:
    dpg = None  # type: ignore

# channel -> (label, min, max, step, display format)
_SLIDERS: dict[str, tuple[str, float, float, float, str]] = {
    "lightness": (
        "L", *defaults.LIGHTNESS_SLIDER_RANGE, defaults.LIGHTNESS_SLIDER_STEP, "%.2f",
    ),
    "chroma": (
        "C", 0.0, defaults.CHROMA_SLIDER_MAX, defaults.CHROMA_SLIDER_STEP, "%.3f",
    ),
    "hue": (
        "H", *defaults.HUE_SLIDER_RANGE, defaults.HUE_SLIDER_STEP, "%.0f",
    ),
    "alpha": (
        "Alpha", *defaults.ALPHA_SLIDER_RANGE, defaults.ALPHA_SLIDER_STEP, "%.2f",
    ),
}


def _snap(value: float, step: float) -> float:
    """Round a slider value to its step (Dear PyGui sliders are continuous)."""
    return round(round(value / step) * step, 6)


def rgba_from_widget(app_data: Sequence[float]) -> tuple[float, float, float, float]:
    """Normalize a Dear PyGui color callback payload to [0,1] floats."""
    # Dear PyGui can emit either [0,1] floats or [0,255] values depending on configuration.
    scale = 1.0 if max(app_data[:3]) <= 1.0 + 1e-6 else 255.0
    alpha = float(app_data[3]) / scale if len(app_data) > 3 else 1.0
    return (
        float(app_data[0]) / scale,
        float(app_data[1]) / scale,
        float(app_data[2]) / scale,
        alpha,
    )


def hex_from_rgb(rgb: Sequence[float]) -> str:
    """``#rrggbb`` for [0,1] channels, as a native color input reports it."""
    r, g, b = (int(round_half_away(min(1.0, max(0.0, float(v))) * 255, 0)) for v in rgb[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


class ColorPickerControl:
    """One labelled color control bound to a ``ColorSyncController``.

    The frame loop feeds the owner's value through ``set_color`` and calls
    ``update()`` once per frame; edits go to the owner only through
    ``on_change``.
    """

    def __init__(
        self,
        label: str,
        color: str,
        on_change: Callable[[str], None],
        *,
        _clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.label = label
        self.controller = ColorSyncController(color, on_change, _clock=_clock)

        self.group_id: Optional[int] = None
        self.swatch_id: Optional[int] = None
        self.color_edit_id: Optional[int] = None
        self.text_input_id: Optional[int] = None
        self.sliders_group_id: Optional[int] = None
        self.slider_ids: dict[str, int] = {}
        self.sliders_open: bool = False

    @property
    def tag_prefix(self) -> str:
        return "color_" + re.sub(r"\s+", "-", self.label.strip()).lower()

    # ------------------------------------------------------------------
    # Building the interface
    # ------------------------------------------------------------------
    def build(self, parent) -> None:
        """Create the control's widgets under ``parent``."""
        if dpg is None:
            return

        controls = self.controller.controls_color
        with dpg.group(parent=parent, tag=f"{self.tag_prefix}_group") as group:
            self.group_id = group
            dpg.add_text(self.label, color=(170, 176, 186))
            with dpg.group(horizontal=True):
                self.swatch_id = dpg.add_color_button(
                    default_value=self._swatch_rgba(),
                    width=defaults.SWATCH_SIZE,
                    height=defaults.SWATCH_SIZE,
                    callback=self.on_swatch_click,
                    tag=f"{self.tag_prefix}_swatch",
                )
                self.color_edit_id = dpg.add_color_edit(
                    default_value=self._swatch_rgba(),
                    no_inputs=True,
                    no_label=True,
                    no_alpha=True,
                    callback=self.on_native_color_change,
                    tag=f"{self.tag_prefix}_native",
                )
                self.text_input_id = dpg.add_input_text(
                    default_value=self.controller.display_text,
                    width=-1,
                    callback=self.on_text_change,
                    tag=f"{self.tag_prefix}_text",
                )

            with dpg.group(show=False, tag=f"{self.tag_prefix}_sliders") as sliders:
                self.sliders_group_id = sliders
                for channel, (label, lo, hi, _step, fmt) in _SLIDERS.items():
                    self.slider_ids[channel] = dpg.add_slider_float(
                        label=label,
                        default_value=getattr(controls, channel),
                        min_value=lo,
                        max_value=hi,
                        format=fmt,
                        width=-60,
                        callback=self.on_slider_change,
                        user_data=channel,
                        tag=f"{self.tag_prefix}_{channel}",
                    )

    def destroy(self) -> None:
        """Cancel pending commits and remove the widgets."""
        self.controller.close()
        if dpg is not None and self.group_id is not None and dpg.does_item_exist(self.group_id):
            dpg.delete_item(self.group_id)
        self.group_id = None

    # ------------------------------------------------------------------
    # Frame loop hooks
    # ------------------------------------------------------------------
    def set_color(self, color: str) -> None:
        """Props update from the owner."""
        if self.controller.sync_external(color):
            self._refresh_widgets()

    def update(self) -> bool:
        """Fire due commits. Returns whether ``on_change`` ran."""
        return self.controller.poll()

    # ------------------------------------------------------------------
    # Widget callbacks
    # ------------------------------------------------------------------
    def on_swatch_click(self, sender=None, app_data=None) -> None:
        self.sliders_open = not self.sliders_open
        if dpg is not None and self.sliders_group_id is not None:
            dpg.configure_item(self.sliders_group_id, show=self.sliders_open)

    def on_text_change(self, sender=None, app_data=None) -> None:
        self.controller.edit_text(str(app_data or ""))
        # The text field keeps what the user is typing
        self._refresh_widgets(skip=self.text_input_id)

    def on_native_color_change(self, sender=None, app_data=None) -> None:
        if not app_data:
            return
        r, g, b, _alpha = rgba_from_widget(app_data)
        self.controller.pick_native(hex_from_rgb((r, g, b)))
        self._refresh_widgets(skip=self.color_edit_id)

    def on_slider_change(self, sender=None, app_data=None, user_data=None) -> None:
        channel = str(user_data)
        _label, _lo, _hi, step, _fmt = _SLIDERS[channel]
        self.controller.adjust_channel(channel, _snap(float(app_data), step))
        self._refresh_widgets(skip=sender)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _swatch_rgba(self) -> tuple[float, float, float, float]:
        color = self.controller.color
        if color is None:
            return (0.0, 0.0, 0.0, 1.0)
        r, g, b = to_srgb(color)
        return (r, g, b, color.alpha)

    def _refresh_widgets(self, skip=None) -> None:
        """Push the controller's display values into every widget except ``skip``."""
        if dpg is None or self.group_id is None:
            return

        rgba = self._swatch_rgba()
        for item, value in (
            (self.swatch_id, rgba),
            (self.color_edit_id, rgba),
            (self.text_input_id, self.controller.display_text),
        ):
            if item is not None and item != skip and dpg.does_item_exist(item):
                dpg.set_value(item, value)

        controls: CanonicalColor = self.controller.controls_color
        for channel, slider_id in self.slider_ids.items():
            if slider_id != skip and dpg.does_item_exist(slider_id):
                dpg.set_value(slider_id, getattr(controls, channel))
