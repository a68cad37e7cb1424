"""Concrete presentation adapters."""

from .ascii_renderer import AsciiRenderer

__all__ = ["AsciiRenderer"]
