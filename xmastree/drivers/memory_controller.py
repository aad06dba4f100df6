#!/usr/bin/env python3
"""
Headless terminal controller.

Keeps the screen in memory so frames can be rendered without a TTY, e.g. in
tests and by the snapshot script. Events are scripted through ``push_event``.
"""

import queue
from typing import Dict, List, Optional, Tuple

Color = Tuple[int, int, int]
CellData = Tuple[str, Color, Color, bool]

BLANK: CellData = (' ', (255, 255, 255), (0, 0, 0), False)


class MemoryController:
    """In-memory stand-in for the terminal with the same controller interface"""

    def __init__(self, width: int = 80, height: int = 24, debug: bool = False):
        self.width = width
        self.height = height
        self.debug = debug
        self.cells: Dict[Tuple[int, int], CellData] = {}
        self.frames_shown = 0
        self.syncs = 0
        self.configured = False
        self.closed = False
        self._events: "queue.Queue" = queue.Queue()

        if self.debug:
            print(f"🔧 Memory controller: {width} × {height} cells")

    def configure(self):
        self.configured = True

    def close(self):
        self.closed = True

    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def resize(self, width: int, height: int):
        """Simulate the user resizing the terminal window."""
        self.width = width
        self.height = height

    def clear(self):
        self.cells.clear()
        if self.debug:
            print("🧹 Cleared screen")

    def set_cell(self, x: int, y: int, glyph: str, fg: Color, bg: Color, bold: bool = False):
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[(x, y)] = (glyph, fg, bg, bold)

    def show(self):
        self.frames_shown += 1

    def sync(self):
        self.syncs += 1
        self.cells = {
            (x, y): cell for (x, y), cell in self.cells.items()
            if x < self.width and y < self.height
        }

    def push_event(self, event):
        self._events.put(event)

    def poll_event(self, timeout: Optional[float] = None):
        try:
            return self._events.get(timeout=timeout)
        except queue.Empty:
            return None

    def cell_at(self, x: int, y: int) -> CellData:
        return self.cells.get((x, y), BLANK)

    def render_text(self) -> List[str]:
        """Plain-text rows of the current screen contents."""
        return [
            ''.join(self.cell_at(x, y)[0] for x in range(self.width))
            for y in range(self.height)
        ]
