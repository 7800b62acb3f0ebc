"""
Hand-to-screen geometry.

Maps a tracked hand onto the calibrated screen in two steps: find where
the hand points on the screen plane as surface ratios (0-1 along each
axis), then turn ratios into clamped pixel coordinates.
"""

from typing import Optional, Tuple

import numpy as np

from leapcursor.core.config import MappingConfig, MappingMethod, RecalibrationConfig
from leapcursor.tracking.frames import ScreenSurface, TrackedHand

# Below this the ray is treated as parallel to the plane
PARALLEL_EPSILON = 1e-6


def ray_plane_intersection(
    origin: np.ndarray,
    direction: np.ndarray,
    plane_point: np.ndarray,
    plane_normal: np.ndarray,
) -> Optional[np.ndarray]:
    """
    Intersect a ray with a plane.

    Args:
        origin: Ray origin
        direction: Ray direction (need not be unit length)
        plane_point: Any point on the plane
        plane_normal: Plane normal

    Returns:
        Intersection point, or None if the ray is parallel to the plane

    The intersection is computed on the full line, so points behind the
    origin are returned as well.
    """
    denominator = np.dot(direction, plane_normal)
    if abs(denominator) < PARALLEL_EPSILON:
        return None

    distance = np.dot(plane_point - origin, plane_normal) / denominator
    return origin + direction * distance


def surface_ratios(point: np.ndarray, screen: ScreenSurface) -> Tuple[float, float]:
    """
    Express a point on the screen plane as fractions of the screen axes.

    Args:
        point: Point on (or near) the screen plane
        screen: Screen surface

    Returns:
        (ratio_x, ratio_y), each in [0, 1] inside the screen rectangle
    """
    offset = point - screen.bottom_left_corner

    width = screen.width_mm
    height = screen.height_mm

    ratio_x = np.dot(offset, screen.horizontal_axis / width) / width
    ratio_y = np.dot(offset, screen.vertical_axis / height) / height

    return float(ratio_x), float(ratio_y)


def recalibrate(
    ratios: Tuple[float, float], config: RecalibrationConfig
) -> Tuple[float, float]:
    """Apply the affine pointing-bias correction to surface ratios."""
    ratio_x, ratio_y = ratios
    return (
        (ratio_x - config.x_center) * config.x_scale + config.x_offset,
        (ratio_y - config.y_center) * config.y_scale + config.y_offset,
    )


def to_screen(
    ratios: Tuple[float, float], width_pixels: int, height_pixels: int
) -> Tuple[int, int]:
    """
    Convert surface ratios to pixel coordinates.

    Args:
        ratios: (ratio_x, ratio_y) with Y growing upwards
        width_pixels: Screen width in pixels
        height_pixels: Screen height in pixels

    Returns:
        (x, y) in pixels with Y growing downwards, clamped to
        [0, width] and [0, height]
    """
    ratio_x, ratio_y = ratios

    screen_x = int(min(width_pixels, max(0.0, ratio_x * width_pixels)))
    screen_y = int(min(height_pixels, max(0.0, height_pixels - ratio_y * height_pixels)))

    return screen_x, screen_y


def palm_direction_position(
    hand: TrackedHand,
    screen: ScreenSurface,
    recalibration: RecalibrationConfig,
) -> Optional[Tuple[int, int]]:
    """
    Point where the hand's direction ray hits the screen, in pixels.

    Returns:
        (x, y) pixel position, or None if the hand points parallel to the screen
    """
    intersection = ray_plane_intersection(
        hand.palm_position,
        hand.direction,
        screen.bottom_left_corner,
        screen.normal,
    )
    if intersection is None:
        return None

    ratios = recalibrate(surface_ratios(intersection, screen), recalibration)
    return to_screen(ratios, screen.width_pixels, screen.height_pixels)


def screen_frustum_position(
    hand: TrackedHand,
    screen: ScreenSurface,
    mapping: MappingConfig,
) -> Optional[Tuple[int, int]]:
    """
    Map the palm position through a viewing frustum towards the screen.

    The palm position is scaled up the closer the hand is to the screen,
    so the same physical movement covers more of the screen far from the
    device. X is centred on the device; Y is measured from the top edge.

    Returns:
        (x, y) pixel position, or None if the hand sits at the frustum apex
    """
    distance = screen.distance_to_point(hand.palm_position) + mapping.frustum_offset
    frustum_scale = 1.0 - distance / mapping.frustum_depth
    if abs(frustum_scale) < PARALLEL_EPSILON:
        return None

    scaled = hand.palm_position / frustum_scale

    ratios = (
        scaled[0] / screen.width_mm + 0.5,
        scaled[1] / screen.height_mm - 1.0,
    )
    return to_screen(ratios, screen.width_pixels, screen.height_pixels)


def map_hand_to_screen(
    hand: TrackedHand,
    screen: ScreenSurface,
    mapping: MappingConfig,
    recalibration: RecalibrationConfig,
) -> Optional[Tuple[int, int]]:
    """Map a hand to pixels with the configured method."""
    if mapping.method == MappingMethod.SCREEN_FRUSTUM:
        return screen_frustum_position(hand, screen, mapping)
    return palm_direction_position(hand, screen, recalibration)
