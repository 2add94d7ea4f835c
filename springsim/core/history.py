"""Rolling in-memory history of simulation samples, backing graphs and scrubbing."""

import logging
from bisect import bisect_left
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

import numpy as np

logger = logging.getLogger(__name__)

KEYS = ("time", "displacement", "velocity", "acceleration")


@dataclass(frozen=True)
class HistorySample:
    """One recorded point. acceleration is derived at record time, not integrated."""

    time: float
    displacement: float
    velocity: float
    acceleration: float


class HistoryBuffer:
    """
    Time-ordered samples with a rolling retention window.

    Columns are kept per key (as lists) and the window start is a head offset,
    so trimming from the front is amortized O(1). Lookups by time use binary
    search over the time column.

    Out-of-order appends never raise:
      - same time as the newest sample: the newest sample is replaced;
      - earlier than the newest sample: every sample at or after the new time
        is discarded, then the sample is appended.
    """

    def __init__(self, max_duration: float = 120.0) -> None:
        """
        Args:
            max_duration: seconds of history to keep behind the newest sample.
        """
        if max_duration <= 0:
            raise ValueError(f"max_duration must be positive, got {max_duration}")
        self._max_duration = float(max_duration)
        self._data: Dict[str, List[float]] = {k: [] for k in KEYS}
        self._head = 0

    @property
    def max_duration(self) -> float:
        return self._max_duration

    def append(self, sample: HistorySample) -> None:
        """Add a sample, then trim the window."""
        times = self._data["time"]
        if len(self) and sample.time <= times[-1]:
            cut = bisect_left(times, sample.time, self._head)
            logger.debug(
                "history: sample at t=%.6f not after newest t=%.6f, dropping %d sample(s)",
                sample.time, times[-1], len(times) - cut,
            )
            if cut <= self._head:
                self.clear()
            else:
                for column in self._data.values():
                    del column[cut:]
        for key in KEYS:
            self._data[key].append(float(getattr(sample, key)))
        self.trim()

    def record(self, time: float, displacement: float, velocity: float, acceleration: float) -> HistorySample:
        """Build and append a sample from plain values."""
        sample = HistorySample(time, displacement, velocity, acceleration)
        self.append(sample)
        return sample

    def trim(self) -> None:
        """Drop samples older than latest.time - max_duration."""
        times = self._data["time"]
        if len(self) == 0:
            return
        cutoff = times[-1] - self._max_duration
        head = self._head
        while head < len(times) and times[head] < cutoff:
            head += 1
        self._head = head
        # compact once the dead prefix outweighs the live window
        if self._head > 64 and self._head * 2 > len(times):
            for column in self._data.values():
                del column[: self._head]
            self._head = 0

    def clear(self) -> None:
        """Remove all samples."""
        for column in self._data.values():
            column.clear()
        self._head = 0

    reset = clear

    def _sample(self, index: int) -> HistorySample:
        return HistorySample(*(self._data[k][index] for k in KEYS))

    def nearest(self, time: float) -> Optional[HistorySample]:
        """Sample closest in time to `time` (earlier one on ties), None when empty."""
        if len(self) == 0:
            return None
        times = self._data["time"]
        i = bisect_left(times, time, self._head)
        if i >= len(times):
            return self._sample(len(times) - 1)
        if i == self._head:
            return self._sample(i)
        if time - times[i - 1] <= times[i] - time:
            return self._sample(i - 1)
        return self._sample(i)

    @property
    def latest(self) -> Optional[HistorySample]:
        return self._sample(-1) if len(self) else None

    @property
    def max_time(self) -> float:
        """Time of the newest sample (0 when empty)."""
        return self._data["time"][-1] if len(self) else 0.0

    @property
    def min_time(self) -> float:
        """Time of the oldest retained sample (0 when empty)."""
        return self._data["time"][self._head] if len(self) else 0.0

    def between(self, start: float, end: float) -> List[HistorySample]:
        """Samples with start <= time <= end."""
        times = self._data["time"]
        lo = bisect_left(times, start, self._head)
        out = []
        for i in range(lo, len(times)):
            if times[i] > end:
                break
            out.append(self._sample(i))
        return out

    def samples(self) -> List[HistorySample]:
        return list(self)

    def get(self, key: str) -> np.ndarray:
        """Column for one key (time, displacement, velocity, acceleration) as a numpy array."""
        if key not in self._data:
            return np.array([])
        return np.array(self._data[key][self._head:], dtype=float)

    def to_dict(self) -> Dict[str, np.ndarray]:
        """All columns as a dictionary of arrays."""
        return {k: self.get(k) for k in KEYS}

    def __iter__(self) -> Iterator[HistorySample]:
        for i in range(self._head, len(self._data["time"])):
            yield self._sample(i)

    def __len__(self) -> int:
        return len(self._data["time"]) - self._head
