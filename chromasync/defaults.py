"""Central place for chromasync default settings."""

# Commit rate limiting (seconds)
DEFAULT_COMMIT_DELAY: float = 0.25  # text / native picker edits -> theme state
DEFAULT_SLIDER_DELAY: float = 0.05  # slider drags -> commit limiter

# Display formatting
ALPHA_OMIT_THRESHOLD: float = 0.999  # alpha at or above this is printed as opaque
ALPHA_PRECISION: int = 2
OKLCH_PRECISION: tuple[int, int, int] = (4, 4, 2)  # L, C, H decimals
HSL_PRECISION: tuple[int, int, int] = (2, 2, 2)
RGB_PRECISION: tuple[int, int, int] = (0, 0, 0)

# Chroma below this (from an sRGB path) is treated as achromatic
ACHROMATIC_CHROMA: float = 1e-6

# oklch() percentage reference for chroma: 100% == 0.4
OKLCH_CHROMA_PERCENT_REF: float = 0.4

# Canonical channel defaults for missing / invalid values
DEFAULT_LIGHTNESS: float = 0.0
DEFAULT_CHROMA: float = 0.0
DEFAULT_HUE: float = 0.0
DEFAULT_ALPHA: float = 1.0

# Slider controls (UI policy, not color-space limits)
LIGHTNESS_SLIDER_RANGE: tuple[float, float] = (0.0, 1.0)
LIGHTNESS_SLIDER_STEP: float = 0.01
CHROMA_SLIDER_MAX: float = 0.5
CHROMA_SLIDER_STEP: float = 0.001
HUE_SLIDER_RANGE: tuple[float, float] = (0.0, 360.0)
HUE_SLIDER_STEP: float = 1.0
ALPHA_SLIDER_RANGE: tuple[float, float] = (0.0, 1.0)
ALPHA_SLIDER_STEP: float = 0.01

# Color shown on the sliders while the text field holds an unparsable string
DEFAULT_CONTROLS_COLOR: tuple[float, float, float, float] = (0.75, 0.15, 270.0, 1.0)

# Fallback for the native color well when nothing parses
FALLBACK_HEX: str = "#000000"

# Default theme palette (shadcn/ui tokens)
DEFAULT_THEME_NAME: str = "default"
DEFAULT_THEME_COLORS: dict[str, str] = {
    "background": "oklch(1.0000 0.0000 0.00)",
    "foreground": "oklch(0.1450 0.0000 0.00)",
    "card": "oklch(1.0000 0.0000 0.00)",
    "card-foreground": "oklch(0.1450 0.0000 0.00)",
    "popover": "oklch(1.0000 0.0000 0.00)",
    "popover-foreground": "oklch(0.1450 0.0000 0.00)",
    "primary": "oklch(0.2050 0.0000 0.00)",
    "primary-foreground": "oklch(0.9850 0.0000 0.00)",
    "secondary": "oklch(0.9700 0.0000 0.00)",
    "secondary-foreground": "oklch(0.2050 0.0000 0.00)",
    "muted": "oklch(0.9700 0.0000 0.00)",
    "muted-foreground": "oklch(0.5560 0.0000 0.00)",
    "accent": "oklch(0.9700 0.0000 0.00)",
    "accent-foreground": "oklch(0.2050 0.0000 0.00)",
    "destructive": "oklch(0.5770 0.2450 27.33)",
    "border": "oklch(0.9220 0.0000 0.00)",
    "input": "oklch(0.9220 0.0000 0.00)",
    "ring": "oklch(0.7080 0.0000 0.00)",
}

# UI layout
WINDOW_SIZE: tuple[int, int] = (980, 820)
CONTROL_PANEL_WIDTH: int = 420
SWATCH_SIZE: int = 28
