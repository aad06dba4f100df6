"""Core animation framework components."""

from xmastree.core.base import AnimationBase
from xmastree.core.manager import AnimationManager
from xmastree.core.state import FrameLayout, SimulationState

__all__ = ["AnimationBase", "AnimationManager", "FrameLayout", "SimulationState"]
