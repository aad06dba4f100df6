"""Animated ASCII Christmas tree for the terminal."""

from xmastree.core.base import AnimationBase

__version__ = "1.0.0"

__all__ = ["AnimationBase", "__version__"]
