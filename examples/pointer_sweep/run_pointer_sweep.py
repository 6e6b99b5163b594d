"""
Minimal example: replay a synthetic pointer sweep through the chime and plot the angles.
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

# Add the repository root to the path
ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from windchime.config import ChimeConfig
from windchime.core import FrameHistory
from windchime.interaction import InteractionScheduler, ManualFrameClock
from windchime.io import horizontal_sweep, load_chime_config, replay
from windchime.logging_config import setup_logging
from windchime.presentation import DEFAULT_ELEMENTS, ChimeCue, StatusLabelAdapter, TransformAdapter


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay a pointer sweep through the wind chime")
    parser.add_argument("--config", type=Path, default=None, help="JSON chime configuration")
    parser.add_argument("--csv", type=Path, default=None, help="Write the frame history to this CSV file")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    config = load_chime_config(args.config) if args.config else ChimeConfig()
    clock = ManualFrameClock()
    history = FrameHistory()
    transforms: dict = dict.fromkeys(DEFAULT_ELEMENTS, "")
    status: dict = {}

    scheduler = InteractionScheduler.from_config(
        config,
        clock=clock,
        observers=[
            TransformAdapter(transforms),
            StatusLabelAdapter(status),
            ChimeCue(lambda: print("  ding")),
        ],
        history=history,
    )
    scheduler.sampler.set_center(120.0, 40.0)

    # Fast sweep to the right, then back to the left
    stream = horizontal_sweep(60.0, 40.0, step_px=12.0, n_moves=10)
    print("Replaying rightward sweep...")
    frames = replay(stream, scheduler, clock)
    stream = horizontal_sweep(180.0, 40.0, step_px=-8.0, n_moves=15, start_ms=clock.now_ms())
    print("Replaying leftward sweep...")
    frames += replay(stream, scheduler, clock)

    angles = np.degrees(history.get("angles"))
    print(f"Frames: {frames}, peak driver angle: {np.abs(angles[:, 0]).max():.2f} deg")
    print(f"Final state: {scheduler.state.value}, status label: {status.get('status')}")
    if args.csv:
        history.to_csv(args.csv)
        print(f"Frame history written to {args.csv}")

    try:
        import matplotlib.pyplot as plt

        from windchime.simulation import plot_angles_vs_time, plot_phase_portrait

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 4))
        plot_angles_vs_time(history, ax=ax1)
        plot_phase_portrait(history, oscillator="driver", ax=ax2, label="driver")
        plot_phase_portrait(history, oscillator="follower", ax=ax2, label="follower", title="Phase portraits")
        ax2.legend()
        plt.tight_layout()
        # plt.savefig("pointer_sweep.png", dpi=120)
        plt.show()
    except ImportError:
        print("matplotlib not available, skip plots")


if __name__ == "__main__":
    main()
