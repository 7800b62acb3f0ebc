"""
Per-session pointer state.

Everything that survives from one frame to the next lives here: the
smoothing windows, the pinch windows, the click cooldown and whether the
left button is held. The processor takes ``lock`` around each frame so
the windows, the button flag and the cooldown change together.
"""

import threading
from dataclasses import dataclass, field

import numpy as np

from leapcursor.core.config import AppConfig
from leapcursor.tracking.smoothing import SlidingWindow


@dataclass
class PointerSession:
    """Mutable state for one tracking session."""

    position_window: SlidingWindow
    velocity_window: SlidingWindow
    distance_window: SlidingWindow
    thumb_speed_window: SlidingWindow

    last_position: np.ndarray = field(default_factory=lambda: np.zeros(3))

    # Frames left before the cursor may move again after a click
    cooldown: int = 0

    button_down: bool = False

    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @classmethod
    def from_config(cls, config: AppConfig) -> "PointerSession":
        """Create a fresh session sized from configuration."""
        return cls(
            position_window=SlidingWindow(config.smoothing.position_window),
            velocity_window=SlidingWindow(config.smoothing.velocity_window),
            distance_window=SlidingWindow(config.click.pinch_window),
            thumb_speed_window=SlidingWindow(config.click.pinch_window),
        )

    def clear(self):
        """Forget all history. Does not touch the button flag."""
        self.position_window.clear()
        self.velocity_window.clear()
        self.distance_window.clear()
        self.thumb_speed_window.clear()
        self.last_position = np.zeros(3)
        self.cooldown = 0
