#!/usr/bin/env python3
"""
Render a few seeded frames headlessly and print the last one.
Used to eyeball the scene and to capture golden frames for debugging.
"""

import argparse
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from xmastree.drivers.memory_controller import MemoryController
from xmastree.plugins.christmas_tree import ChristmasTreeAnimation


def build_snapshot(width: int, height: int, seed: int, frames: int) -> dict:
    controller = MemoryController(width, height)
    animation = ChristmasTreeAnimation(controller, {'seed': seed})
    state = animation.initial_state()
    for _ in range(max(1, frames)):
        state = animation.generate_frame(state)

    layout = animation.last_layout
    light = animation.last_light
    return {
        "plugin": animation.get_plugin_info(),
        "layout": {
            "width": layout.width,
            "height": layout.height,
            "center_x": layout.center_x,
            "base_y": layout.base_y,
            "top_y": layout.top_y,
        },
        "clock": state.t,
        "frames": state.frame_count,
        "light": {
            "screen_x": light.screen_x,
            "screen_y": light.screen_y,
            "z": light.relative.z,
            "occluded": light.occluded,
            "color": list(light.color),
        },
        "particles": len(state.particles),
        "sky_stars": len(state.sky.stars) if state.sky else 0,
        "rows": controller.render_text(),
    }


def main():
    parser = argparse.ArgumentParser(description="Dump a rendered tree frame")
    parser.add_argument("--width", type=int, default=120, help="Screen width in cells")
    parser.add_argument("--height", type=int, default=40, help="Screen height in cells")
    parser.add_argument("--seed", type=int, default=7, help="Random seed")
    parser.add_argument("--frames", type=int, default=25, help="Frames to simulate")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of plain text")
    args = parser.parse_args()

    snapshot = build_snapshot(args.width, args.height, args.seed, args.frames)
    if args.json:
        print(json.dumps(snapshot, indent=2, sort_keys=True, ensure_ascii=False))
    else:
        print("\n".join(snapshot["rows"]))


if __name__ == "__main__":
    main()
