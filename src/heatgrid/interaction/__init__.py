"""Pointer and keyboard handling."""

from .controller import InteractionController

__all__ = ["InteractionController"]
