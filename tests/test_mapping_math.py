"""
Tests for hand-to-screen mapping mathematics.
"""

import pytest
import numpy as np

from leapcursor.core.config import MappingConfig, MappingMethod, RecalibrationConfig
from leapcursor.tracking.frames import ScreenSurface, TrackedHand
from leapcursor.tracking.geometry import (
    map_hand_to_screen,
    palm_direction_position,
    ray_plane_intersection,
    recalibrate,
    screen_frustum_position,
    surface_ratios,
    to_screen,
)


def make_hand(palm, direction):
    return TrackedHand(
        id=1,
        palm_position=np.array(palm, dtype=np.float64),
        palm_velocity=np.zeros(3),
        direction=np.array(direction, dtype=np.float64),
    )


@pytest.fixture
def screen():
    """400x300 mm screen in the z=0 plane, 1920x1080 pixels."""
    return ScreenSurface(
        bottom_left_corner=np.array([0.0, 0.0, 0.0]),
        horizontal_axis=np.array([400.0, 0.0, 0.0]),
        vertical_axis=np.array([0.0, 300.0, 0.0]),
        width_pixels=1920,
        height_pixels=1080,
    )


@pytest.fixture
def identity_recalibration():
    """Recalibration that leaves ratios unchanged."""
    return RecalibrationConfig(
        x_center=0.5, x_scale=1.0, x_offset=0.5,
        y_center=0.5, y_scale=1.0, y_offset=0.5,
    )


class TestRayPlaneIntersection:
    """Tests for ray/plane intersection."""

    def test_axis_aligned_ray(self):
        """Test a ray straight down onto the z=0 plane."""
        point = ray_plane_intersection(
            np.array([0.0, 0.0, 10.0]),
            np.array([0.0, 0.0, -1.0]),
            np.array([0.0, 0.0, 0.0]),
            np.array([0.0, 0.0, 1.0]),
        )

        np.testing.assert_allclose(point, [0.0, 0.0, 0.0])

    def test_oblique_ray(self):
        """Test a 45 degree ray."""
        point = ray_plane_intersection(
            np.array([0.0, 0.0, 10.0]),
            np.array([1.0, 0.0, -1.0]),
            np.array([0.0, 0.0, 0.0]),
            np.array([0.0, 0.0, 1.0]),
        )

        np.testing.assert_allclose(point, [10.0, 0.0, 0.0])

    def test_parallel_ray_has_no_intersection(self):
        """Test that a ray parallel to the plane returns None."""
        point = ray_plane_intersection(
            np.array([0.0, 0.0, 10.0]),
            np.array([1.0, 0.0, 0.0]),
            np.array([0.0, 0.0, 0.0]),
            np.array([0.0, 0.0, 1.0]),
        )

        assert point is None


class TestSurfaceRatios:
    """Tests for projecting points onto the screen axes."""

    def test_center(self, screen):
        ratios = surface_ratios(np.array([200.0, 150.0, 0.0]), screen)

        assert ratios == pytest.approx((0.5, 0.5))

    def test_corners(self, screen):
        assert surface_ratios(np.array([0.0, 0.0, 0.0]), screen) == pytest.approx((0.0, 0.0))
        assert surface_ratios(np.array([400.0, 300.0, 0.0]), screen) == pytest.approx((1.0, 1.0))

    def test_outside_screen(self, screen):
        """Test that points beyond the edges give ratios outside [0, 1]."""
        ratio_x, ratio_y = surface_ratios(np.array([-40.0, 600.0, 0.0]), screen)

        assert ratio_x == pytest.approx(-0.1)
        assert ratio_y == pytest.approx(2.0)


class TestRecalibrate:
    """Tests for the pointing-bias correction."""

    def test_default_center(self):
        """Test that the screen center is shifted left by default."""
        ratio_x, ratio_y = recalibrate((0.5, 0.5), RecalibrationConfig())

        assert ratio_x == pytest.approx(0.3)
        assert ratio_y == pytest.approx(0.5)

    def test_default_scaling(self):
        ratio_x, ratio_y = recalibrate((1.0, 1.0), RecalibrationConfig())

        assert ratio_x == pytest.approx(1.15)
        assert ratio_y == pytest.approx(1.25)

    def test_identity(self, identity_recalibration):
        assert recalibrate((0.2, 0.7), identity_recalibration) == pytest.approx((0.2, 0.7))


class TestToScreen:
    """Tests for ratio to pixel conversion."""

    def test_vertical_axis_inverted(self):
        """Test that ratio Y grows upwards while pixel Y grows downwards."""
        assert to_screen((0.5, 0.0), 1920, 1080) == (960, 1080)
        assert to_screen((0.5, 1.0), 1920, 1080) == (960, 0)

    def test_clamped_below_zero(self):
        """Test that out-of-range ratios saturate instead of going negative."""
        assert to_screen((-0.2, 1.3), 1000, 1000) == (0, 0)

    def test_clamped_above_size(self):
        assert to_screen((1.5, -0.5), 1000, 800) == (1000, 800)

    def test_returns_ints(self):
        x, y = to_screen((0.3333, 0.6666), 1920, 1080)

        assert isinstance(x, int)
        assert isinstance(y, int)


class TestPalmDirectionMapping:
    """Tests for mapping the palm ray onto the screen."""

    def test_pointing_at_center(self, screen, identity_recalibration):
        hand = make_hand([200.0, 150.0, 100.0], [0.0, 0.0, -1.0])

        assert palm_direction_position(hand, screen, identity_recalibration) == (960, 540)

    def test_pointing_parallel_to_screen(self, screen, identity_recalibration):
        """Test that a hand pointing along the screen plane is not mapped."""
        hand = make_hand([200.0, 150.0, 100.0], [1.0, 0.0, 0.0])

        assert palm_direction_position(hand, screen, identity_recalibration) is None

    def test_monotonic_horizontal(self, screen, identity_recalibration):
        """Test that moving the palm right moves the cursor right."""
        xs = []
        for palm_x in [50.0, 150.0, 250.0, 350.0]:
            hand = make_hand([palm_x, 150.0, 100.0], [0.0, 0.0, -1.0])
            x, _ = palm_direction_position(hand, screen, identity_recalibration)
            xs.append(x)

        assert xs == sorted(xs)
        assert len(set(xs)) == len(xs)


class TestScreenFrustumMapping:
    """Tests for the frustum mapping."""

    def test_scaled_position(self, screen):
        """Test that the palm is scaled by its distance from the screen."""
        # distance 200 + offset 100 -> scale 0.5 -> (0, 600) -> ratios (0.5, 1.0)
        hand = make_hand([0.0, 300.0, 200.0], [0.0, 0.0, -1.0])

        assert screen_frustum_position(hand, screen, MappingConfig()) == (960, 0)

    def test_frustum_apex(self, screen):
        """Test that a hand at zero frustum scale is not mapped."""
        hand = make_hand([0.0, 300.0, 500.0], [0.0, 0.0, -1.0])

        assert screen_frustum_position(hand, screen, MappingConfig()) is None

    def test_method_selection(self, screen, identity_recalibration):
        hand = make_hand([0.0, 300.0, 200.0], [1.0, 0.0, 0.0])
        frustum = MappingConfig(method=MappingMethod.SCREEN_FRUSTUM)

        # Palm direction is parallel to the screen, frustum ignores direction
        assert map_hand_to_screen(hand, screen, MappingConfig(), identity_recalibration) is None
        assert map_hand_to_screen(hand, screen, frustum, identity_recalibration) == (960, 0)
