"""Rules engine for a networked, turn-based settlement game on a hex board."""

__version__ = "0.1.0"
