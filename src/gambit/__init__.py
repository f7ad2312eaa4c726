"""Gambit — chess rules engine and move-execution state machine."""

__version__ = "0.1.0"
