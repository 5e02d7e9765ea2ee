"""Parse league stat exports and track per-player season history."""

__version__ = "0.1.0"
