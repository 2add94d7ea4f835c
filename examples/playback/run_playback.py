"""
Example: a live session on an asyncio loop, then rewind and scrub through history.

- Runs a SimulationSession ticking at 60 Hz on an AsyncioScheduler.
- Applies a harmonic forcing and an impulse while running.
- Stops, rewinds 2 s, scrubs to a given time and resumes.
- Plots the recorded history with a playback cursor (if matplotlib is installed).
"""

import asyncio
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from springsim.core import AsyncioScheduler, SimulationSession
from springsim.physics import HarmonicForcing, ImpulseForcing


async def run(duration: float = 3.0) -> SimulationSession:
    session = SimulationSession(scheduler=AsyncioScheduler())
    session.start()
    await asyncio.sleep(duration / 3)
    session.apply_forcing(HarmonicForcing(amplitude=0.5, frequency_hz=0.8))
    await asyncio.sleep(duration / 3)
    session.apply_forcing(ImpulseForcing(magnitude=0.2, trigger_time=session.time + 0.1))
    await asyncio.sleep(duration / 3)
    session.stop()
    return session


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    session = asyncio.run(run())
    print(f"Recorded {len(session.history)} samples, t in [{session.history.min_time:.3f}, {session.max_playback_time:.3f}]")
    print(f"Final state: {session.state}, height={session.height:.4f}")

    sample = session.rewind(2.0)
    print(f"Rewound to {sample}")
    sample = session.scrub(1.0)
    print(f"Scrubbed to {sample}")

    try:
        import matplotlib.pyplot as plt
        from springsim.plotting import plot_history

        plot_history(session.history, playback_time=session.playback_time)
        plt.tight_layout()
        plt.show()
    except ImportError:
        print("matplotlib not available, skip plots")


if __name__ == "__main__":
    main()
