import os
import signal
import sys
import threading

import pytest

from xmastree.core.manager import AnimationManager
from xmastree.core.state import SimulationState
from xmastree.drivers.events import KEY_ESCAPE, KEY_RUNE, KeyEvent, ResizeEvent
from xmastree.drivers.memory_controller import MemoryController
from xmastree.plugins.christmas_tree import ChristmasTreeAnimation


class CountingAnimation:
    ANIMATION_NAME = "Counting"

    def __init__(self, controller, on_frame=None):
        self.controller = controller
        self.on_frame = on_frame

    def initial_state(self):
        return SimulationState()

    def generate_frame(self, state):
        state = SimulationState(t=state.t + 1, frame_count=state.frame_count + 1)
        if self.on_frame:
            self.on_frame(state)
        self.controller.show()
        return state


def test_runs_requested_number_of_frames_and_releases_terminal():
    controller = MemoryController(120, 40)
    manager = AnimationManager(controller, ChristmasTreeAnimation(controller, {'seed': 1}),
                               frame_interval=0.001)
    manager.run(max_frames=3)

    assert controller.configured
    assert controller.closed
    assert controller.frames_shown == 3
    assert manager.frames_rendered == 3
    assert manager.state.frame_count == 3
    assert not manager.running


@pytest.mark.parametrize("event", [KeyEvent(KEY_RUNE, 'q'), KeyEvent(KEY_ESCAPE)])
def test_quit_keys_stop_the_loop(event):
    controller = MemoryController(40, 20)
    controller.push_event(event)
    manager = AnimationManager(controller, CountingAnimation(controller), frame_interval=0.01)
    manager.run()

    assert manager.stop_reason == "key"
    assert controller.closed


def test_other_keys_and_resizes_do_not_stop():
    controller = MemoryController(40, 20)
    controller.push_event(KeyEvent(KEY_RUNE, 'x'))
    controller.push_event(ResizeEvent(50, 20))
    manager = AnimationManager(controller, CountingAnimation(controller), frame_interval=0.001)
    manager.run(max_frames=5)

    assert manager.frames_rendered == 5
    assert manager.stop_reason is None


def test_resize_triggers_sync():
    controller = MemoryController(40, 20)

    def shrink(state):
        if state.frame_count == 2:
            controller.resize(30, 10)

    manager = AnimationManager(controller, CountingAnimation(controller, shrink),
                               frame_interval=0.001)
    manager.run(max_frames=4)
    assert controller.syncs == 1


def test_stop_before_run_renders_nothing():
    controller = MemoryController(40, 20)
    manager = AnimationManager(controller, CountingAnimation(controller), frame_interval=0.001)
    manager.stop("test")
    manager.run()
    assert manager.frames_rendered == 0
    assert manager.stop_reason == "test"
    assert controller.closed


def test_signal_handler_requests_stop():
    controller = MemoryController(40, 20)
    manager = AnimationManager(controller, CountingAnimation(controller))
    manager._handle_signal(signal.SIGTERM, None)
    assert manager.stop_event.is_set()
    assert manager.stop_reason == "signal SIGTERM"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signal delivery")
def test_sigterm_during_run_exits_cleanly():
    controller = MemoryController(40, 20)
    previous = signal.getsignal(signal.SIGTERM)
    manager = AnimationManager(controller, CountingAnimation(controller), frame_interval=0.005)

    timer = threading.Timer(0.05, os.kill, (os.getpid(), signal.SIGTERM))
    timer.start()
    try:
        manager.run()
    finally:
        timer.cancel()

    assert manager.stop_reason == "signal SIGTERM"
    assert controller.closed
    assert signal.getsignal(signal.SIGTERM) == previous


def test_status_reports_runtime_stats():
    controller = MemoryController(40, 20)
    manager = AnimationManager(controller, CountingAnimation(controller), frame_interval=0.04)
    manager.run(max_frames=2)
    status = manager.get_current_status()
    assert status['animation'] == "Counting"
    assert status['runtime_stats']['frames_rendered'] == 2
    assert status['runtime_stats']['target_fps'] == pytest.approx(25.0)


class BrokenInputController(MemoryController):
    def poll_event(self, timeout=None):
        raise OSError("stdin closed")


def test_input_read_error_stops_the_loop():
    controller = BrokenInputController(40, 20)
    manager = AnimationManager(controller, CountingAnimation(controller), frame_interval=0.01)
    manager.run()

    assert manager.stop_reason == "input error"
    assert controller.closed


class FailingConfigureController(MemoryController):
    def configure(self):
        raise RuntimeError("cannot enter alternate screen")


def test_failed_configure_still_releases_controller():
    controller = FailingConfigureController(40, 20)
    manager = AnimationManager(controller, CountingAnimation(controller), frame_interval=0.001)
    with pytest.raises(RuntimeError):
        manager.run(max_frames=1)

    assert controller.closed
    assert manager.frames_rendered == 0
    assert not manager.running
