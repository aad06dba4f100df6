"""
Animation Manager

Runs the fixed-rate render loop on the calling thread. Two independent
sources can stop it, both through one set-once ``threading.Event``:

- an input thread polling the controller for Esc / q
- SIGINT / SIGTERM handlers (installed when running on the main thread)

Neither source touches rendering state; only the loop mutates the simulation.
"""

import signal
import threading
import time
from collections import deque
from typing import Any, Dict, Optional

from xmastree.config import FRAME_INTERVAL
from xmastree.drivers.events import KeyEvent

INPUT_POLL_TIMEOUT = 0.1
STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class AnimationManager:
    """Drives one animation on one controller until asked to stop"""

    def __init__(self, controller, animation, frame_interval: float = FRAME_INTERVAL):
        self.controller = controller
        self.animation = animation
        self.frame_interval = frame_interval

        self.stop_event = threading.Event()
        self.state = None
        self.running = False
        self.frames_rendered = 0
        self.stop_reason: Optional[str] = None
        self._frame_times = deque(maxlen=100)
        self._input_thread: Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    def run(self, max_frames: Optional[int] = None):
        """Render until stopped (or ``max_frames`` frames), then release the terminal."""
        previous_handlers = {}
        try:
            self.controller.configure()
            previous_handlers = self._install_signal_handlers()
            self.running = True
            self._start_input_thread()
            self._render_loop(max_frames)
        finally:
            self.stop_event.set()
            if self._input_thread is not None:
                self._input_thread.join(timeout=INPUT_POLL_TIMEOUT * 5)
            self._restore_signal_handlers(previous_handlers)
            self.controller.close()
            self.running = False

    def stop(self, reason: str = "requested"):
        if not self.stop_event.is_set():
            self.stop_reason = reason
            self.stop_event.set()

    def get_current_status(self) -> Dict[str, Any]:
        frame_times = list(self._frame_times)
        average = sum(frame_times) / len(frame_times) if frame_times else 0.0
        return {
            'animation': self.animation.ANIMATION_NAME,
            'is_running': self.running,
            'runtime_stats': {
                'frames_rendered': self.frames_rendered,
                'avg_frame_ms': average * 1000.0,
                'target_fps': 1.0 / self.frame_interval if self.frame_interval > 0 else None,
                'stop_reason': self.stop_reason,
            },
        }

    # ------------------------------------------------------------------
    def _render_loop(self, max_frames: Optional[int]):
        state = self.animation.initial_state()
        last_size = self.controller.size()
        next_tick = time.monotonic()

        while max_frames is None or self.frames_rendered < max_frames:
            next_tick += self.frame_interval
            remaining = next_tick - time.monotonic()
            if remaining < 0:
                # Fell behind; resume the cadence from now instead of bursting
                next_tick = time.monotonic()
                remaining = 0.0
            if self.stop_event.wait(remaining):
                break

            size = self.controller.size()
            if size != last_size:
                self.controller.sync()
                last_size = size

            started = time.perf_counter()
            state = self.animation.generate_frame(state)
            self._frame_times.append(time.perf_counter() - started)
            self.frames_rendered += 1
            self.state = state

    def _start_input_thread(self):
        self._input_thread = threading.Thread(
            target=self._poll_input, name="input-poller", daemon=True
        )
        self._input_thread.start()

    def _poll_input(self):
        while not self.stop_event.is_set():
            try:
                event = self.controller.poll_event(INPUT_POLL_TIMEOUT)
            except OSError:
                self.stop("input error")
                return
            if isinstance(event, KeyEvent) and event.is_quit:
                self.stop("key")
                return

    def _install_signal_handlers(self) -> Dict[int, Any]:
        if threading.current_thread() is not threading.main_thread():
            return {}
        previous = {}
        for signum in STOP_SIGNALS:
            previous[signum] = signal.getsignal(signum)
            signal.signal(signum, self._handle_signal)
        return previous

    def _restore_signal_handlers(self, previous: Dict[int, Any]):
        for signum, handler in previous.items():
            if handler is not None:
                signal.signal(signum, handler)

    def _handle_signal(self, signum, _frame):
        self.stop(f"signal {signal.Signals(signum).name}")
