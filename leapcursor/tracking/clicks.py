"""
Click gesture detection.

Two detectors turn finger motion into left-button edges. Only one of
them is ever active; which one is chosen by ``ClickConfig.strategy``.

Velocity outlier:
    A tap is one finger moving vertically much faster than the others.
    When the spread of finger tip Y velocities is large and one finger
    stands out, its direction decides the edge: down presses, up releases.

Pinch:
    Bringing thumb and index together presses, opening them releases.
    Both edges require the thumb to actually be moving.
"""

from enum import Enum, auto

import numpy as np

from leapcursor.core.config import ClickConfig, ClickStrategy, SmoothingConfig
from leapcursor.tracking.frames import FingerType, TrackedHand
from leapcursor.utils.logger import get_logger

logger = get_logger(__name__)


class ClickAction(Enum):
    """Button edge requested by a gesture."""

    NONE = auto()
    DOWN = auto()
    UP = auto()


class VelocityOutlierClickDetector:
    """Detect taps from an outlying finger tip Y velocity."""

    def __init__(self, config: ClickConfig, smoothing: SmoothingConfig):
        self._config = config
        self._cooldown_frames = smoothing.cooldown_frames

    def detect(self, hand: TrackedHand, session) -> ClickAction:
        """
        Check one hand for a tap.

        Args:
            hand: Hand for this frame
            session: PointerSession; its cooldown is restarted on a gesture

        Returns:
            DOWN, UP or NONE
        """
        if len(hand.fingers) <= 1:
            return ClickAction.NONE

        velocities = np.array([f.tip_velocity[1] for f in hand.fingers], dtype=np.float64)
        mean_velocity = velocities.mean()
        deviation = velocities.std()

        if deviation <= self._config.velocity_deviation_threshold:
            return ClickAction.NONE

        spread = np.abs(velocities - mean_velocity) / deviation
        acting = int(np.argmax(spread))

        if spread[acting] <= self._config.outlier_ratio:
            return ClickAction.NONE

        # Freeze the cursor while the finger moves
        session.cooldown = self._cooldown_frames

        if velocities[acting] < 0:
            return ClickAction.DOWN
        return ClickAction.UP


class PinchClickDetector:
    """Detect presses from the thumb/index distance."""

    def __init__(self, config: ClickConfig):
        self._config = config

    def detect(self, hand: TrackedHand, session) -> ClickAction:
        """
        Check one hand for a pinch edge.

        Args:
            hand: Hand for this frame
            session: PointerSession holding the distance and thumb speed windows

        Returns:
            DOWN, UP or NONE
        """
        thumb = hand.finger(FingerType.THUMB)
        index = hand.finger(FingerType.INDEX)
        if thumb is None or index is None:
            return ClickAction.NONE

        distance = float(np.linalg.norm(index.tip_position - thumb.tip_position))
        session.distance_window.push(distance)
        session.thumb_speed_window.push(float(np.linalg.norm(thumb.tip_velocity)))

        average_distance = session.distance_window.mean()
        thumb_moving = session.thumb_speed_window.mean() > self._config.pinch_speed_threshold

        if not thumb_moving:
            return ClickAction.NONE

        if (
            not session.button_down
            and distance <= average_distance - self._config.pinch_trigger_distance
        ):
            # Start over so the closed pinch does not become the new baseline
            session.distance_window.clear()
            return ClickAction.DOWN

        if session.button_down and distance > average_distance:
            return ClickAction.UP

        return ClickAction.NONE


class NullClickDetector:
    """Cursor movement only."""

    def detect(self, hand: TrackedHand, session) -> ClickAction:
        return ClickAction.NONE


def create_click_detector(config: ClickConfig, smoothing: SmoothingConfig):
    """
    Build the detector selected by configuration.

    Args:
        config: Click configuration
        smoothing: Smoothing configuration (for the cooldown length)

    Returns:
        Detector with a ``detect(hand, session)`` method
    """
    logger.info(f"Click detection: {config.strategy.value}")

    if config.strategy == ClickStrategy.VELOCITY_OUTLIER:
        return VelocityOutlierClickDetector(config, smoothing)
    if config.strategy == ClickStrategy.PINCH:
        return PinchClickDetector(config)
    return NullClickDetector()
