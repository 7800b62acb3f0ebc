"""
Configuration management for LeapCursor.

Thresholds, window sizes and the recalibration constants all live here
as dataclass fields so they can be tuned without touching the
processing code.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional
import os


class MappingMethod(str, Enum):
    """How a hand is mapped onto the screen."""

    PALM_DIRECTION = "palm_direction"  # Ray from palm along hand direction
    SCREEN_FRUSTUM = "screen_frustum"  # Palm position scaled by depth


class ClickStrategy(str, Enum):
    """Which click gesture detector is active. Only one runs at a time."""

    VELOCITY_OUTLIER = "velocity_outlier"
    PINCH = "pinch"
    NONE = "none"


@dataclass
class SmoothingConfig:
    """Cursor smoothing configuration."""

    # Sliding window capacities (frames)
    position_window: int = 30
    velocity_window: int = 10

    # Mean frame-to-frame movement (pixels) needed to admit a new position
    motion_threshold: float = 0.5

    # Frames of frozen cursor after a click gesture
    cooldown_frames: int = 30


@dataclass
class RecalibrationConfig:
    """
    Affine correction applied to surface ratios.

    ratio' = (ratio - center) * scale + offset

    People point lower and further left than they think, so the
    defaults widen both axes and shift X.
    """

    x_center: float = 0.5
    x_scale: float = 1.7  # 70% more horizontal sensitivity
    x_offset: float = 0.3

    y_center: float = 0.5
    y_scale: float = 1.5  # 50% more vertical sensitivity
    y_offset: float = 0.5


@dataclass
class MappingConfig:
    """Hand-to-screen mapping configuration."""

    method: MappingMethod = MappingMethod.PALM_DIRECTION

    # Screen frustum parameters (millimetres)
    frustum_offset: float = 100.0
    frustum_depth: float = 600.0


@dataclass
class ClickConfig:
    """Click gesture configuration."""

    strategy: ClickStrategy = ClickStrategy.VELOCITY_OUTLIER

    # Velocity outlier: spread of finger tip Y velocity (mm/s) that counts as a gesture
    velocity_deviation_threshold: float = 100.0
    # Velocity outlier: normalised deviation of the acting finger
    outlier_ratio: float = 0.5

    # Pinch: drop below the windowed average distance (mm) that triggers a press
    pinch_trigger_distance: float = 0.5
    # Pinch: average thumb tip speed (mm/s) needed for either edge
    pinch_speed_threshold: float = 30.0
    # Pinch: window capacity for distance and thumb speed
    pinch_window: int = 10


@dataclass
class CursorConfig:
    """OS pointer configuration."""

    # Minimum time between cursor moves (seconds), 0 disables rate limiting
    min_update_interval: float = 0.0


@dataclass
class AppConfig:
    """Main application configuration."""

    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    recalibration: RecalibrationConfig = field(default_factory=RecalibrationConfig)
    mapping: MappingConfig = field(default_factory=MappingConfig)
    click: ClickConfig = field(default_factory=ClickConfig)
    cursor: CursorConfig = field(default_factory=CursorConfig)

    version: str = "0.1.0"

    log_level: str = field(
        default_factory=lambda: os.getenv("LEAPCURSOR_LOG_LEVEL", "INFO")
    )

    log_file: Optional[Path] = field(
        default_factory=lambda: (
            Path(os.environ["LEAPCURSOR_LOG_FILE"])
            if os.getenv("LEAPCURSOR_LOG_FILE")
            else None
        )
    )

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """Validate configuration parameters."""
        if self.smoothing.position_window < 1 or self.smoothing.velocity_window < 1:
            raise ValueError("window sizes must be at least 1")

        if self.smoothing.motion_threshold < 0.0:
            raise ValueError("motion_threshold must be non-negative")

        if self.smoothing.cooldown_frames < 0:
            raise ValueError("cooldown_frames must be non-negative")

        if self.mapping.frustum_depth <= 0.0:
            raise ValueError("frustum_depth must be positive")

        if self.click.pinch_window < 1:
            raise ValueError("pinch_window must be at least 1")

        if self.click.pinch_trigger_distance < 0.0:
            raise ValueError("pinch_trigger_distance must be non-negative")

        if self.click.velocity_deviation_threshold < 0.0:
            raise ValueError("velocity_deviation_threshold must be non-negative")

        if self.click.pinch_speed_threshold < 0.0:
            raise ValueError("pinch_speed_threshold must be non-negative")

        if self.click.outlier_ratio <= 0.0:
            raise ValueError("outlier_ratio must be positive")

        if self.cursor.min_update_interval < 0.0:
            raise ValueError("min_update_interval must be non-negative")

        # Coerce plain strings (e.g. from env or tests) into enums
        self.mapping.method = MappingMethod(self.mapping.method)
        self.click.strategy = ClickStrategy(self.click.strategy)


def get_default_config() -> AppConfig:
    """
    Get default application configuration.

    Returns:
        AppConfig instance with default values
    """
    return AppConfig()
