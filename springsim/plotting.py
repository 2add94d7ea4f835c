"""
Plots of a recorded run: displacement/velocity/acceleration vs time and phase portrait.

All functions accept either a HistoryBuffer or raw arrays (time, series).
Matplotlib is optional; functions raise ImportError if it is not installed.
"""

from typing import Any, Dict, Optional, Sequence

import numpy as np

from springsim.core.history import HistoryBuffer

LABELS = {
    "displacement": "y [m]",
    "velocity": "v [m/s]",
    "acceleration": "a [m/s²]",
}


def _columns(
    history: Optional[HistoryBuffer],
    data: Optional[Dict[str, np.ndarray]],
) -> Dict[str, np.ndarray]:
    if history is not None:
        return history.to_dict()
    if data is not None and "time" in data:
        return {k: np.asarray(v, dtype=float).ravel() for k, v in data.items()}
    raise ValueError("Provide either history= or data= with a 'time' column.")


def plot_history(
    history: Optional[HistoryBuffer] = None,
    data: Optional[Dict[str, np.ndarray]] = None,
    keys: Sequence[str] = ("displacement", "velocity", "acceleration"),
    playback_time: Optional[float] = None,
    ax: Optional[Any] = None,
    title: str = "Mass-spring-damper",
    **kwargs: Any,
) -> Any:
    """
    Plot the selected series vs time, one subplot per series.

    Args:
        history: HistoryBuffer to read from.
        data: raw columns ({"time": ..., "displacement": ...}) if history is not used.
        keys: series to plot.
        playback_time: if given, draw a vertical cursor at that time.
        ax: matplotlib axes to draw all series on (if None, creates subplots).
        title: figure title.
        **kwargs: passed to ax.plot().

    Returns:
        matplotlib figure (or the given axes).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plot_history.")
    cols = _columns(history, data)
    keys = [k for k in keys if k in cols]
    if not keys:
        raise ValueError("No series to plot.")
    t = cols["time"]

    if ax is None:
        fig, axes = plt.subplots(len(keys), 1, sharex=True, figsize=(8, max(2 * len(keys), 4)))
        if len(keys) == 1:
            axes = [axes]
        fig_ref = fig
    else:
        fig_ref = ax.figure
        axes = [ax] * len(keys)
    for a, key in zip(axes, keys):
        a.plot(t, cols[key], label=key, **kwargs)
        a.set_ylabel(LABELS.get(key, key))
        if playback_time is not None:
            a.axvline(playback_time, color="k", linestyle="--", linewidth=0.8)
        a.grid(True, alpha=0.3)
    axes[-1].set_xlabel("time [s]")
    if title:
        fig_ref.suptitle(title)
    return fig_ref if ax is None else ax


def plot_phase_portrait(
    history: Optional[HistoryBuffer] = None,
    data: Optional[Dict[str, np.ndarray]] = None,
    ax: Optional[Any] = None,
    title: str = "Phase portrait",
    **kwargs: Any,
) -> Any:
    """Plot velocity vs displacement. Returns the matplotlib axes."""
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plot_phase_portrait.")
    cols = _columns(history, data)
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(6, 5))
    ax.plot(cols["displacement"], cols["velocity"], **kwargs)
    ax.set_xlabel(LABELS["displacement"])
    ax.set_ylabel(LABELS["velocity"])
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    return ax
