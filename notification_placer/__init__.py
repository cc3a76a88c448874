"""Move macOS notification banners to a user-selected screen anchor."""

__version__ = "1.0.0"
