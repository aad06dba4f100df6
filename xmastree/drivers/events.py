"""Input events reported by terminal controllers."""

from dataclasses import dataclass
from typing import Optional

KEY_ESCAPE = 'escape'
KEY_RUNE = 'rune'
KEY_INTERRUPT = 'ctrl-c'


@dataclass(frozen=True)
class KeyEvent:
    key: str
    char: Optional[str] = None

    @property
    def is_quit(self) -> bool:
        return self.key in (KEY_ESCAPE, KEY_INTERRUPT) or self.char == 'q'


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int
