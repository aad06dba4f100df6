"""Terminal driver layer."""

from xmastree.drivers.events import KeyEvent, ResizeEvent
from xmastree.drivers.memory_controller import MemoryController
from xmastree.drivers.terminal_controller import TerminalController, TerminalInitError

__all__ = [
    "KeyEvent",
    "ResizeEvent",
    "MemoryController",
    "TerminalController",
    "TerminalInitError",
]
