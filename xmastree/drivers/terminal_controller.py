#!/usr/bin/env python3
"""
Terminal Controller - rich version
Draws a character grid on the terminal's alternate screen and reads keys
"""

import os
import select
import sys
from typing import Dict, List, Optional, Tuple

from rich.color import Color as RichColor
from rich.console import Console
from rich.live import Live
from rich.style import Style
from rich.text import Text

from xmastree.drivers.events import (
    KEY_ESCAPE,
    KEY_INTERRUPT,
    KEY_RUNE,
    KeyEvent,
    ResizeEvent,
)

# termios/tty only exist on POSIX terminals
try:
    import termios
    import tty
except ImportError:
    termios = None
    tty = None

Color = Tuple[int, int, int]

READ_CHUNK = 32


class TerminalInitError(RuntimeError):
    """The terminal cannot be driven (not a TTY, or no cbreak support)."""


class TerminalController:
    """Full-screen character grid backed by rich's live display"""

    def __init__(self, console: Optional[Console] = None, debug: bool = False):
        self.console = console or Console()
        self.debug = debug
        self.live: Optional[Live] = None
        self._stdin_fd: Optional[int] = None
        self._saved_tty = None
        self._styles: Dict[Tuple[Color, Color, bool], Style] = {}
        self._blank_style = Style()
        self._width, self._height = self.size()
        self._polled_size = (self._width, self._height)
        self._grid: List[List[Tuple[str, Style]]] = self._new_grid()
        self._frames_shown = 0

    # ------------------------------------------------------------------
    def configure(self):
        """Enter the alternate screen and switch stdin to cbreak mode."""
        if not self.console.is_terminal:
            raise TerminalInitError("stdout is not an interactive terminal")
        if termios is None:
            raise TerminalInitError("terminal input needs termios (POSIX only)")
        try:
            self._stdin_fd = sys.stdin.fileno()
        except (AttributeError, ValueError, OSError) as e:
            raise TerminalInitError(f"stdin is unavailable: {e}") from e
        if not os.isatty(self._stdin_fd):
            raise TerminalInitError("stdin is not an interactive terminal")

        try:
            self._saved_tty = termios.tcgetattr(self._stdin_fd)
            tty.setcbreak(self._stdin_fd)
        except termios.error as e:
            raise TerminalInitError(f"cannot set cbreak mode: {e}") from e

        if self.debug:
            width, height = self.size()
            print(f"Terminal Controller initialized")
            print(f"  Size: {width} × {height} cells")
            print(f"  Color system: {self.console.color_system}")

        self.sync()
        self.live = Live(
            Text(),
            console=self.console,
            screen=True,
            auto_refresh=False,
            transient=True,
        )
        try:
            self.live.start()
        except Exception:
            self.live = None
            self._restore_tty()
            raise

    def close(self):
        """Leave the alternate screen and restore the terminal mode."""
        if self.live is not None:
            self.live.stop()
            self.live = None
        self._restore_tty()
        if self.debug:
            print(f"✓ Terminal restored after {self._frames_shown} frames")

    def _restore_tty(self):
        if self._saved_tty is not None and self._stdin_fd is not None:
            termios.tcsetattr(self._stdin_fd, termios.TCSADRAIN, self._saved_tty)
            self._saved_tty = None

    # ------------------------------------------------------------------
    def size(self) -> Tuple[int, int]:
        width, height = self.console.size
        return width, height

    def clear(self):
        self._grid = self._new_grid()

    def sync(self):
        """Re-read the terminal size and reallocate the cell grid."""
        self._width, self._height = self.size()
        self._grid = self._new_grid()

    def set_cell(self, x: int, y: int, glyph: str, fg: Color, bg: Color, bold: bool = False):
        if 0 <= x < self._width and 0 <= y < self._height:
            self._grid[y][x] = (glyph, self._style(fg, bg, bold))

    def show(self):
        text = Text(no_wrap=True, overflow='crop', end='')
        for y, row in enumerate(self._grid):
            run = []
            run_style = None
            for glyph, style in row:
                if style is not run_style and run:
                    text.append(''.join(run), style=run_style)
                    run = []
                run_style = style
                run.append(glyph)
            if run:
                text.append(''.join(run), style=run_style)
            if y < self._height - 1:
                text.append('\n')

        if self.live is not None:
            self.live.update(text, refresh=True)
        self._frames_shown += 1

    # ------------------------------------------------------------------
    def poll_event(self, timeout: Optional[float] = None):
        """Return the next KeyEvent/ResizeEvent, or None when ``timeout`` expires."""
        width, height = self.size()
        if (width, height) != self._polled_size:
            self._polled_size = (width, height)
            return ResizeEvent(width, height)
        if self._stdin_fd is None:
            return None

        ready, _, _ = select.select([self._stdin_fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(self._stdin_fd, READ_CHUNK)
        return self._decode_key(data)

    @staticmethod
    def _decode_key(data: bytes) -> Optional[KeyEvent]:
        """Decode one read chunk, which may hold several keys.

        A quit key anywhere in the chunk wins; otherwise the first key is returned.
        """
        text = data.decode('utf-8', errors='ignore')
        first = None
        i = 0
        while i < len(text):
            char = text[i]
            if char == '\x1b' and text[i + 1:i + 2] in ('[', 'O'):
                # CSI/SS3 sequence (arrow keys etc.) runs up to its final byte
                end = i + 2
                while end < len(text) and not '\x40' <= text[end] <= '\x7e':
                    end += 1
                event = KeyEvent('sequence', text[i:end + 1])
                i = end + 1
            else:
                if char == '\x1b':
                    event = KeyEvent(KEY_ESCAPE)
                elif char == '\x03':
                    event = KeyEvent(KEY_INTERRUPT)
                else:
                    event = KeyEvent(KEY_RUNE, char)
                i += 1
            if event.is_quit:
                return event
            if first is None:
                first = event
        return first

    # ------------------------------------------------------------------
    def _new_grid(self) -> List[List[Tuple[str, Style]]]:
        return [[(' ', self._blank_style) for _ in range(self._width)]
                for _ in range(self._height)]

    def _style(self, fg: Color, bg: Color, bold: bool) -> Style:
        key = (fg, bg, bold)
        style = self._styles.get(key)
        if style is None:
            style = Style(
                color=RichColor.from_rgb(*fg),
                bgcolor=RichColor.from_rgb(*bg),
                bold=bold,
            )
            self._styles[key] = style
        return style
