#!/usr/bin/env python3
"""
Terminal Christmas Tree

Runs until Esc, q, Ctrl+C or SIGTERM. Takes no command-line options.
"""

import sys

from xmastree.core.manager import AnimationManager
from xmastree.drivers.terminal_controller import TerminalController, TerminalInitError
from xmastree.plugins.christmas_tree import ChristmasTreeAnimation


def main():
    try:
        controller = TerminalController()
        animation = ChristmasTreeAnimation(controller)
        manager = AnimationManager(controller, animation)
        manager.run()
    except TerminalInitError as e:
        print(f"❌ Cannot start on this terminal: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error running animation: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)

    stats = manager.get_current_status()['runtime_stats']
    print(f"🎄 Rendered {stats['frames_rendered']} frames ({stats['stop_reason'] or 'stopped'})")
    sys.exit(0)


if __name__ == '__main__':
    main()
