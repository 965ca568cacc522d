"""Color parsing and formatting errors."""


class ColorError(Exception):
    """Base class for color errors."""
    pass


class InvalidColor(ColorError, ValueError):
    """String is not a color this package can parse."""

    def __init__(self, value: str, reason: str | None = None):
        self.value = value
        self.reason = reason
        message = f"Invalid color: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class FormatUnsupported(ColorError, ValueError):
    """Requested output format has no formatting policy."""

    def __init__(self, fmt: object):
        self.format = fmt
        super().__init__(f"Unsupported color format: {fmt!r}")
