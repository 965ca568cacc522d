"""Style the editor's own chrome with the theme being edited."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from chromasync import defaults
from chromasync.colorspace import CanonicalColor, parse, round_half_away, to_srgb
from chromasync.colorspace.errors import InvalidColor

try:
    import dearpygui.dearpygui as dpg
except ImportError:
    dpg = None

logger = logging.getLogger(__name__)

_theme_id: Optional[int] = None


def rgba255(color: str, fallback: str) -> tuple[int, int, int, int]:
    """Dear PyGui color tuple for a CSS color string."""
    try:
        canonical: CanonicalColor = parse(color)
    except InvalidColor:
        logger.warning("Theme color %r does not parse; using %r", color, fallback)
        canonical = parse(fallback)
    r, g, b = to_srgb(canonical)
    return tuple(int(round_half_away(v * 255, 0)) for v in (r, g, b, canonical.alpha))


def _with_alpha(rgba: tuple[int, int, int, int], alpha: int) -> tuple[int, int, int, int]:
    return (rgba[0], rgba[1], rgba[2], alpha)


def apply_theme(colors: Mapping[str, str]) -> None:
    """Bind a Dear PyGui theme built from shadcn/ui color tokens.

    Missing tokens fall back to the default palette.
    """
    global _theme_id
    if dpg is None:
        return

    def token(name: str) -> tuple[int, int, int, int]:
        fallback = defaults.DEFAULT_THEME_COLORS[name]
        return rgba255(colors.get(name, fallback), fallback)

    background = token("background")
    foreground = token("foreground")
    primary = token("primary")
    border = token("border")

    if _theme_id is not None and dpg.does_item_exist(_theme_id):
        dpg.delete_item(_theme_id)

    with dpg.theme() as theme:
        with dpg.theme_component(dpg.mvAll):
            # Window/frame backgrounds
            dpg.add_theme_color(dpg.mvThemeCol_WindowBg, background)
            dpg.add_theme_color(dpg.mvThemeCol_ChildBg, token("card"))
            dpg.add_theme_color(dpg.mvThemeCol_PopupBg, token("popover"))
            dpg.add_theme_color(dpg.mvThemeCol_MenuBarBg, background)

            # Borders
            dpg.add_theme_color(dpg.mvThemeCol_Border, border)
            dpg.add_theme_color(dpg.mvThemeCol_BorderShadow, (0, 0, 0, 0))
            dpg.add_theme_color(dpg.mvThemeCol_Separator, border)

            # Inputs and sliders
            dpg.add_theme_color(dpg.mvThemeCol_FrameBg, token("input"))
            dpg.add_theme_color(dpg.mvThemeCol_FrameBgHovered, token("accent"))
            dpg.add_theme_color(dpg.mvThemeCol_FrameBgActive, token("ring"))
            dpg.add_theme_color(dpg.mvThemeCol_SliderGrab, primary)
            dpg.add_theme_color(dpg.mvThemeCol_SliderGrabActive, token("ring"))
            dpg.add_theme_color(dpg.mvThemeCol_CheckMark, primary)

            # Buttons
            dpg.add_theme_color(dpg.mvThemeCol_Button, token("secondary"))
            dpg.add_theme_color(dpg.mvThemeCol_ButtonHovered, token("accent"))
            dpg.add_theme_color(dpg.mvThemeCol_ButtonActive, _with_alpha(primary, 200))

            # Headers
            dpg.add_theme_color(dpg.mvThemeCol_Header, token("muted"))
            dpg.add_theme_color(dpg.mvThemeCol_HeaderHovered, token("accent"))
            dpg.add_theme_color(dpg.mvThemeCol_HeaderActive, token("secondary"))

            # Title bar
            dpg.add_theme_color(dpg.mvThemeCol_TitleBg, token("muted"))
            dpg.add_theme_color(dpg.mvThemeCol_TitleBgActive, token("secondary"))

            # Text
            dpg.add_theme_color(dpg.mvThemeCol_Text, foreground)
            dpg.add_theme_color(dpg.mvThemeCol_TextDisabled, token("muted-foreground"))
            dpg.add_theme_color(dpg.mvThemeCol_TextSelectedBg, _with_alpha(token("ring"), 120))

            # Rounding and spacing
            dpg.add_theme_style(dpg.mvStyleVar_FrameRounding, 4.0)
            dpg.add_theme_style(dpg.mvStyleVar_WindowRounding, 6.0)
            dpg.add_theme_style(dpg.mvStyleVar_ChildRounding, 6.0)
            dpg.add_theme_style(dpg.mvStyleVar_GrabRounding, 4.0)
            dpg.add_theme_style(dpg.mvStyleVar_FramePadding, 8, 5)
            dpg.add_theme_style(dpg.mvStyleVar_ItemSpacing, 8, 6)
            dpg.add_theme_style(dpg.mvStyleVar_WindowPadding, 12, 12)
            dpg.add_theme_style(dpg.mvStyleVar_FrameBorderSize, 1)

    dpg.bind_theme(theme)
    _theme_id = theme
