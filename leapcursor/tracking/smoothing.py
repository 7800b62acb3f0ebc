"""
Cursor smoothing and jitter control.

The cursor is the mean of the last positions admitted into a sliding
window. A new position is only admitted while the hand is actually
moving, so a still hand does not drag the average around with sensor
noise.
"""

from collections import deque
from typing import Generic, Iterator, TypeVar, Union

import numpy as np

from leapcursor.core.config import SmoothingConfig
from leapcursor.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", float, np.ndarray)


class SlidingWindow(Generic[T]):
    """
    Fixed-capacity FIFO buffer.

    Pushing past capacity evicts the oldest item, so the window always
    holds the most recent ``capacity`` items in insertion order.
    """

    def __init__(self, capacity: int):
        """
        Initialize window.

        Args:
            capacity: Maximum number of items held
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._items: deque = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen

    def push(self, item: T):
        """Append an item, evicting the oldest one when full."""
        self._items.append(item)

    def clear(self):
        self._items.clear()

    def is_empty(self) -> bool:
        return not self._items

    def mean(self) -> Union[float, np.ndarray]:
        """
        Arithmetic mean of the held items.

        Returns:
            Scalar for scalar windows, element-wise mean for vector windows

        Raises:
            ValueError: If the window is empty
        """
        if not self._items:
            raise ValueError("mean of an empty window")

        result = np.mean(np.asarray(list(self._items), dtype=np.float64), axis=0)
        if np.ndim(result) == 0:
            return float(result)
        return result

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"SlidingWindow(capacity={self.capacity}, size={len(self)})"


class CursorSmoother:
    """
    Smooth raw cursor positions using the windows held by a session.

    Per frame:
    1. Record the frame-to-frame movement in the velocity window
    2. Admit the position if the mean movement exceeds the motion
       threshold and no click cooldown is running, or if nothing has
       been admitted yet
    3. Count the cooldown down by one
    4. Emit the mean of the position window
    """

    def __init__(self, config: SmoothingConfig):
        """
        Initialize smoother.

        Args:
            config: Smoothing configuration
        """
        self._config = config

        logger.info(
            f"CursorSmoother initialized: "
            f"threshold={config.motion_threshold:.2f}, "
            f"cooldown={config.cooldown_frames} frames"
        )

    def smooth(self, session, position: np.ndarray) -> np.ndarray:
        """
        Feed one raw position and return the smoothed cursor position.

        Args:
            session: PointerSession whose windows are updated (caller holds its lock)
            position: Raw cursor position, shape (3,)

        Returns:
            Smoothed position, shape (3,)
        """
        position = np.asarray(position, dtype=np.float64)

        delta = position - session.last_position
        session.last_position = position
        session.velocity_window.push(delta)

        speed = float(np.linalg.norm(session.velocity_window.mean()))
        moving = speed > self._config.motion_threshold and session.cooldown == 0

        if moving or session.position_window.is_empty():
            session.position_window.push(position)

        if session.cooldown > 0:
            session.cooldown -= 1

        return session.position_window.mean()

