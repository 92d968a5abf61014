"""Core engine package for the Spades arena."""

__all__ = [
    "cards",
    "deck",
    "trick",
    "mechanics",
    "scoring",
    "actions",
    "state",
    "observation",
    "game",
    "rules_schema",
    "service",
]
