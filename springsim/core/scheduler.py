"""Periodic tick sources driving a SimulationSession."""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

TickCallback = Callable[[float], None]


class TickScheduler(ABC):
    """
    Interface for anything that calls back periodically with a timestamp.

    All callbacks are expected on one logical thread. cancel() must be
    effective before it returns: no callback may run afterwards.
    """

    @abstractmethod
    def start(self, interval: float, callback: TickCallback) -> None:
        """Begin calling callback(now) every `interval` seconds."""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Stop ticking. Idempotent."""
        pass

    @property
    @abstractmethod
    def active(self) -> bool:
        pass

    @staticmethod
    def _check_interval(interval: float) -> float:
        if interval <= 0:
            raise ValueError(f"tick interval must be positive, got {interval}")
        return float(interval)


class ManualScheduler(TickScheduler):
    """
    Scheduler driven by the host: each fire(now) delivers one tick.
    Useful for tests and for embedding in an existing frame loop.
    """

    def __init__(self) -> None:
        self.interval: Optional[float] = None
        self._callback: Optional[TickCallback] = None

    def start(self, interval: float, callback: TickCallback) -> None:
        self.interval = self._check_interval(interval)
        self._callback = callback

    def cancel(self) -> None:
        self._callback = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def fire(self, now: float) -> bool:
        """Deliver one tick at time `now`. Returns False if cancelled."""
        if self._callback is None:
            return False
        self._callback(now)
        return True


class AsyncioScheduler(TickScheduler):
    """Repeating tick on an asyncio event loop (loop.call_later)."""

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loop = loop
        self._clock = clock
        self._handle: Optional[asyncio.TimerHandle] = None
        self._interval = 0.0
        self._callback: Optional[TickCallback] = None

    def start(self, interval: float, callback: TickCallback) -> None:
        self.cancel()
        self._interval = self._check_interval(interval)
        self._callback = callback
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._handle = self._loop.call_later(self._interval, self._run)

    def _run(self) -> None:
        callback = self._callback
        if callback is None:
            return
        # scheduled before the callback so cancel() from inside it removes the next tick
        self._handle = self._loop.call_later(self._interval, self._run)
        callback(self._clock())

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._callback = None

    @property
    def active(self) -> bool:
        return self._handle is not None
