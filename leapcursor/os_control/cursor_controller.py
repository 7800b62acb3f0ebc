"""
Cursor control with safety mechanisms.

Uses pynput for cross-platform cursor and button control.
Includes optional rate limiting and bounds checking.
"""

import time
from typing import Optional, Tuple

from pynput.mouse import Button, Controller as MouseController

from leapcursor.utils.logger import get_logger

logger = get_logger(__name__)


class CursorControlError(Exception):
    """Cursor control errors."""

    pass


class CursorController:
    """
    pynput-backed pointer sink.

    Safety features:
    - Screen bounds checking
    - Optional rate limiting of moves
    - Input errors are logged, never raised into the frame callback
    """

    def __init__(
        self,
        screen_width: Optional[int] = None,
        screen_height: Optional[int] = None,
        min_update_interval: float = 0.0,
    ):
        """
        Initialize cursor controller.

        Args:
            screen_width: Screen width in pixels (None until a screen is known)
            screen_height: Screen height in pixels (None until a screen is known)
            min_update_interval: Minimum time between cursor moves (seconds), 0 disables

        Raises:
            CursorControlError: If no pointer backend is available
        """
        self._screen_width = screen_width
        self._screen_height = screen_height
        self._min_update_interval = min_update_interval

        try:
            self._mouse = MouseController()
        except Exception as e:
            raise CursorControlError(f"Pointer backend unavailable: {e}") from e

        self._last_update_time = float("-inf")

        # Statistics
        self._total_moves = 0
        self._skipped_moves = 0
        self._total_clicks = 0

        logger.info(
            f"CursorController initialized: {screen_width}x{screen_height}, "
            f"min_interval={min_update_interval*1000:.1f}ms"
        )

    def move_to(self, x: int, y: int) -> bool:
        """
        Move cursor to absolute screen position.

        Args:
            x: Target x coordinate (pixels)
            y: Target y coordinate (pixels)

        Returns:
            True if cursor moved, False if skipped (rate limited or failed)
        """
        current_time = time.perf_counter()
        if current_time - self._last_update_time < self._min_update_interval:
            self._skipped_moves += 1
            return False

        x_clamped, y_clamped = self._clamp(x, y)

        if x != x_clamped or y != y_clamped:
            logger.debug(f"Cursor position clamped: ({x},{y}) -> ({x_clamped},{y_clamped})")

        try:
            self._mouse.position = (x_clamped, y_clamped)

            self._last_update_time = current_time
            self._total_moves += 1

            return True

        except Exception as e:
            logger.error(f"Failed to move cursor: {e}")
            return False

    def _clamp(self, x: int, y: int) -> Tuple[int, int]:
        """Keep a position on screen; the mapping can land exactly on the far edge."""
        if self._screen_width is None or self._screen_height is None:
            return max(0, x), max(0, y)
        return (
            max(0, min(x, self._screen_width - 1)),
            max(0, min(y, self._screen_height - 1)),
        )

    def press(self):
        """Press the left button."""
        try:
            self._mouse.press(Button.left)
            self._total_clicks += 1
            logger.info("Down")
        except Exception as e:
            logger.error(f"Failed to press left button: {e}")

    def release(self):
        """Release the left button."""
        try:
            self._mouse.release(Button.left)
            logger.info("Up")
        except Exception as e:
            logger.error(f"Failed to release left button: {e}")

    def update_screen_size(self, width: int, height: int):
        """
        Update screen dimensions, e.g. when the calibrated screen changes.

        Args:
            width: New screen width
            height: New screen height
        """
        if (width, height) == (self._screen_width, self._screen_height):
            return
        self._screen_width = width
        self._screen_height = height
        logger.info(f"Screen size updated: {width}x{height}")

    @property
    def statistics(self) -> dict:
        """Get cursor control statistics."""
        attempts = self._total_moves + self._skipped_moves
        return {
            "total_moves": self._total_moves,
            "skipped_moves": self._skipped_moves,
            "total_clicks": self._total_clicks,
            "effective_rate": self._total_moves / attempts if attempts > 0 else 0.0,
        }
