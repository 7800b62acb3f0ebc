"""
Tracking frame data model.

Plain snapshots of what the Leap SDK reports for one frame. The SDK's own
objects are only valid inside the callback that produced them, so they are
copied into these dataclasses before any processing happens.

Units follow the SDK: millimetres for positions, mm/s for velocities.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np


def as_vector(value) -> np.ndarray:
    """
    Convert a 3-sequence or an SDK vector (anything with x/y/z) to a numpy array.

    Args:
        value: Sequence of three numbers or object with x, y, z attributes

    Returns:
        float64 array of shape (3,)
    """
    if hasattr(value, "x") and hasattr(value, "y") and hasattr(value, "z"):
        return np.array([value.x, value.y, value.z], dtype=np.float64)

    vector = np.asarray(value, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"Expected a 3D vector, got shape {vector.shape}")
    return vector


class FingerType(Enum):
    """Anatomical finger type (Leap SDK TYPE_* order)."""

    THUMB = 0
    INDEX = 1
    MIDDLE = 2
    RING = 3
    PINKY = 4
    UNKNOWN = -1


@dataclass(frozen=True)
class TrackedFinger:
    """A fingertip sample."""

    id: int
    finger_type: FingerType
    tip_position: np.ndarray
    tip_velocity: np.ndarray


@dataclass(frozen=True)
class TrackedHand:
    """A hand sample: palm, pointing direction and visible fingers."""

    id: int
    palm_position: np.ndarray
    palm_velocity: np.ndarray
    direction: np.ndarray
    fingers: Tuple[TrackedFinger, ...] = ()

    def finger(self, finger_type: FingerType) -> Optional[TrackedFinger]:
        """Return the first finger of the given type, if visible."""
        for finger in self.fingers:
            if finger.finger_type == finger_type:
                return finger
        return None


@dataclass(frozen=True)
class TrackingFrame:
    """All hands seen in one device frame."""

    frame_id: int
    hands: Tuple[TrackedHand, ...] = ()

    @property
    def primary_hand(self) -> Optional[TrackedHand]:
        """The hand that drives the cursor (the first one reported)."""
        return self.hands[0] if self.hands else None


@dataclass(frozen=True)
class ScreenSurface:
    """
    Calibrated screen as described by the SDK.

    The screen is a rectangle in device space spanned by two axes from its
    bottom-left corner; axis lengths are the physical size in millimetres.
    """

    bottom_left_corner: np.ndarray
    horizontal_axis: np.ndarray
    vertical_axis: np.ndarray
    width_pixels: int
    height_pixels: int
    is_valid: bool = True

    @property
    def normal(self) -> np.ndarray:
        """Unit vector perpendicular to the screen plane."""
        normal = np.cross(self.horizontal_axis, self.vertical_axis)
        length = np.linalg.norm(normal)
        if length == 0:
            return normal
        return normal / length

    @property
    def width_mm(self) -> float:
        return float(np.linalg.norm(self.horizontal_axis))

    @property
    def height_mm(self) -> float:
        return float(np.linalg.norm(self.vertical_axis))

    def distance_to_point(self, point: np.ndarray) -> float:
        """Unsigned perpendicular distance from a point to the screen plane."""
        return float(abs(np.dot(point - self.bottom_left_corner, self.normal)))


def finger_from_sdk(finger) -> TrackedFinger:
    """Snapshot an SDK finger (v1 fingers have no type attribute)."""
    raw_type = getattr(finger, "type", None)
    if callable(raw_type):
        raw_type = raw_type()
    try:
        finger_type = FingerType(raw_type)
    except ValueError:
        finger_type = FingerType.UNKNOWN

    return TrackedFinger(
        id=int(finger.id),
        finger_type=finger_type,
        tip_position=as_vector(finger.tip_position),
        tip_velocity=as_vector(finger.tip_velocity),
    )


def hand_from_sdk(hand) -> TrackedHand:
    """Snapshot an SDK hand and its fingers."""
    return TrackedHand(
        id=int(hand.id),
        palm_position=as_vector(hand.palm_position),
        palm_velocity=as_vector(hand.palm_velocity),
        direction=as_vector(hand.direction),
        fingers=tuple(finger_from_sdk(f) for f in hand.fingers),
    )


def frame_from_sdk(frame) -> TrackingFrame:
    """Snapshot an SDK frame."""
    return TrackingFrame(
        frame_id=int(frame.id),
        hands=tuple(hand_from_sdk(h) for h in frame.hands),
    )


def screen_from_sdk(screens: Sequence) -> Optional[ScreenSurface]:
    """
    Snapshot the first calibrated screen.

    Args:
        screens: SDK screen list (may be empty)

    Returns:
        ScreenSurface, or None if the SDK reports no screen
    """
    if screens is None or len(screens) == 0:
        return None

    screen = screens[0]
    return ScreenSurface(
        bottom_left_corner=as_vector(screen.bottom_left_corner),
        horizontal_axis=as_vector(screen.horizontal_axis),
        vertical_axis=as_vector(screen.vertical_axis),
        width_pixels=int(screen.width_pixels),
        height_pixels=int(screen.height_pixels),
        is_valid=bool(screen.is_valid),
    )
