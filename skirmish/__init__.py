"""Skirmish: a turn-based tactical battle on a square grid."""

__version__ = "0.1.0"
