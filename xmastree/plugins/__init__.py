"""Bundled animations."""

from xmastree.plugins.christmas_tree import ChristmasTreeAnimation

__all__ = ["ChristmasTreeAnimation"]
