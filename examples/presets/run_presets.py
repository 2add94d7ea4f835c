"""
Example: step each damping preset for 10 s and print a one-line-per-second table.

Shows the four regimes from c_crit = 2*sqrt(m*k):
- overdamped (1.5*c_crit) and critically damped (c_crit): no oscillation;
- underdamped (0.2*c_crit): decaying oscillation;
- undamped (0): constant amplitude.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from springsim.physics import DampingCategory, MassSpringSimulator, PresetCatalog, SystemState


def run_preset(category: DampingCategory, dt: float = 0.01, t_end: float = 10.0) -> list:
    """(time, displacement, velocity) at every step, starting from (y0, v0)."""
    preset = PresetCatalog.get(category)
    sim = MassSpringSimulator(preset.params, SystemState(0.0, preset.y0, preset.v0))
    rows = [(0.0, preset.y0, preset.v0)]
    for _ in range(int(round(t_end / dt))):
        s = sim.step(dt)
        rows.append((s.time, s.displacement, s.velocity))
    return rows


def main() -> None:
    dt = 0.01
    every = int(round(1.0 / dt))
    for category in DampingCategory:
        preset = PresetCatalog.get(category)
        p = preset.params
        print(f"\n=== {preset.name} (m={p.mass}, c={p.damping:.4f}, k={p.stiffness}, zeta={p.damping_ratio:.2f}) ===")
        print("Time\tDisplacement\tVelocity")
        rows = run_preset(category, dt=dt)
        for t, y, v in rows[::every]:
            print(f"{t:.1f}\t{y:.6f}\t{v:.6f}")


if __name__ == "__main__":
    main()
