"""Core engine package for two-player cribbage."""

__all__ = [
    "cards",
    "deck",
    "errors",
    "scoring",
    "strategy",
    "pegging",
    "match",
    "game",
    "config",
    "service",
    "logging_utils",
]
