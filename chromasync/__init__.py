"""chromasync: live color editing core for a visual theme editor."""

__version__ = "0.1.0"
