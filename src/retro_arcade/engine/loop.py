"""
Frame scheduling and fixed-timestep accumulation.

The host (a pygame window, a gym wrapper or a test) owns a FrameScheduler and
pumps it with wall-clock time. Sessions request one callback per frame and
convert the variable frame delta into whole simulation ticks through a
FixedTimestep accumulator.
"""

import logging
from typing import Callable

log = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler:
    """
    Cooperative stand-in for a host animation callback.

    Callbacks registered with request_frame fire once, on the next call to
    advance/run_frame, receiving the current timestamp in milliseconds.
    Handles can be cancelled at any time before they fire.
    """

    def __init__(self, start_time: float = 0.0) -> None:
        self.current_time = start_time
        self._pending: dict[int, FrameCallback] = {}
        self._next_handle = 1

    def now(self) -> float:
        return self.current_time

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int | None) -> None:
        if handle is not None:
            self._pending.pop(handle, None)

    @property
    def num_pending(self) -> int:
        return len(self._pending)

    def is_pending(self, handle: int | None) -> bool:
        return handle in self._pending

    def run_frame(self, timestamp: float) -> int:
        """
        Fire every callback that was pending when the frame began.

        Callbacks requested while this frame runs wait for the next frame.

        Args:
            timestamp: Frame time in milliseconds; must not go backwards.

        Returns:
            Number of callbacks fired.
        """
        self.current_time = max(self.current_time, timestamp)
        fired = 0
        for handle in list(self._pending):
            # A callback may cancel one that is due later in this frame
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            callback(self.current_time)
            fired += 1
        return fired

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward by delta_ms and run one frame."""
        return self.run_frame(self.current_time + delta_ms)


class FixedTimestep:
    """
    Accumulates variable frame deltas into fixed-size ticks.

    Attributes:
        step: Tick length in milliseconds.
        max_frame_delta: Largest delta accepted from a single frame.
        accumulator: Unsimulated time carried between frames.
        last_time: Timestamp of the previous frame, None before the first.
    """

    def __init__(self, step: float, max_frame_delta: float) -> None:
        assert step > 0, "Tick length must be positive"
        self.step = step
        self.max_frame_delta = max_frame_delta
        self.accumulator = 0.0
        self.last_time: float | None = None

    def restart(self, now: float) -> None:
        """Re-anchor timing, e.g. after a pause, without dropping carried time."""
        self.last_time = now

    def clear(self) -> None:
        self.accumulator = 0.0
        self.last_time = None

    def accumulate(self, now: float) -> None:
        if self.last_time is None:
            self.last_time = now
        delta = now - self.last_time
        self.last_time = now
        if delta > self.max_frame_delta:
            log.debug(f"Clamping frame delta {delta:.1f}ms to {self.max_frame_delta:.1f}ms")
            delta = self.max_frame_delta
        self.accumulator += max(delta, 0.0)

    def consume(self) -> bool:
        """Take one tick out of the accumulator if enough time is banked."""
        if self.accumulator >= self.step:
            self.accumulator -= self.step
            return True
        return False
