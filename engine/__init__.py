"""Core engine package for 31."""

__all__ = [
    "cards",
    "deck",
    "errors",
    "events",
    "state",
    "scoring",
    "game",
    "config",
    "logging_utils",
    "service",
]
