"""
Timing utilities for performance monitoring.
"""

import time
from typing import Optional

from leapcursor.tracking.smoothing import SlidingWindow


class FPSCounter:
    """
    Track the rate at which tracking frames are processed.

    Averages frame intervals over a sliding window.
    """

    def __init__(self, window_size: int = 30):
        """
        Initialize FPS counter.

        Args:
            window_size: Number of frame intervals to average over
        """
        self._intervals: SlidingWindow = SlidingWindow(window_size)
        self._last_time: Optional[float] = None

    def tick(self, now: Optional[float] = None) -> float:
        """
        Register a frame and return current FPS.

        Args:
            now: Timestamp in seconds (defaults to ``time.perf_counter()``)

        Returns:
            Current FPS (frames per second)
        """
        current_time = time.perf_counter() if now is None else now

        if self._last_time is not None:
            self._intervals.push(current_time - self._last_time)

        self._last_time = current_time

        return self.fps

    @property
    def fps(self) -> float:
        """
        Get current FPS.

        Returns:
            Current FPS, or 0.0 if fewer than two frames recorded
        """
        if self._intervals.is_empty():
            return 0.0

        avg_interval = self._intervals.mean()
        if avg_interval <= 0:
            return 0.0

        return 1.0 / avg_interval
