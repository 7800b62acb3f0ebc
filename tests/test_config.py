"""
Tests for configuration defaults and validation.
"""

import pytest
from pathlib import Path

from leapcursor.core.config import (
    AppConfig,
    ClickConfig,
    ClickStrategy,
    MappingConfig,
    MappingMethod,
    SmoothingConfig,
    get_default_config,
)


class TestDefaults:
    """Tests for default values."""

    def test_smoothing_defaults(self):
        config = get_default_config()

        assert config.smoothing.position_window == 30
        assert config.smoothing.velocity_window == 10
        assert config.smoothing.motion_threshold == 0.5
        assert config.smoothing.cooldown_frames == 30

    def test_click_defaults(self):
        config = get_default_config()

        assert config.click.strategy == ClickStrategy.VELOCITY_OUTLIER
        assert config.click.velocity_deviation_threshold == 100.0
        assert config.click.pinch_trigger_distance == 0.5

    def test_mapping_default(self):
        assert get_default_config().mapping.method == MappingMethod.PALM_DIRECTION


class TestValidation:
    """Tests for rejected configuration."""

    def test_zero_window(self):
        with pytest.raises(ValueError, match="window sizes"):
            AppConfig(smoothing=SmoothingConfig(position_window=0))

    def test_negative_cooldown(self):
        with pytest.raises(ValueError, match="cooldown_frames"):
            AppConfig(smoothing=SmoothingConfig(cooldown_frames=-1))

    def test_negative_threshold(self):
        with pytest.raises(ValueError, match="motion_threshold"):
            AppConfig(smoothing=SmoothingConfig(motion_threshold=-0.1))

    def test_negative_deviation_threshold(self):
        with pytest.raises(ValueError, match="velocity_deviation_threshold"):
            AppConfig(click=ClickConfig(velocity_deviation_threshold=-1.0))

    def test_negative_pinch_speed_threshold(self):
        with pytest.raises(ValueError, match="pinch_speed_threshold"):
            AppConfig(click=ClickConfig(pinch_speed_threshold=-1.0))

    def test_zero_frustum_depth(self):
        with pytest.raises(ValueError, match="frustum_depth"):
            AppConfig(mapping=MappingConfig(frustum_depth=0.0))

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            AppConfig(click=ClickConfig(strategy="double-tap"))

    def test_strategy_from_string(self):
        """Test that strategy names are accepted as plain strings."""
        config = AppConfig(click=ClickConfig(strategy="pinch"))

        assert config.click.strategy == ClickStrategy.PINCH


class TestEnvironment:
    """Tests for environment overrides."""

    def test_log_level(self, monkeypatch):
        monkeypatch.setenv("LEAPCURSOR_LOG_LEVEL", "DEBUG")

        assert AppConfig().log_level == "DEBUG"

    def test_log_file(self, monkeypatch, tmp_path):
        log_path = tmp_path / "leapcursor.log"
        monkeypatch.setenv("LEAPCURSOR_LOG_FILE", str(log_path))

        config = AppConfig()

        assert config.log_file == Path(log_path)

    def test_no_log_file(self, monkeypatch):
        monkeypatch.delenv("LEAPCURSOR_LOG_FILE", raising=False)

        assert AppConfig().log_file is None

    def test_default_log_level(self, monkeypatch):
        """Lifecycle and button lines are logged at INFO, so INFO is the default."""
        monkeypatch.delenv("LEAPCURSOR_LOG_LEVEL", raising=False)

        assert AppConfig().log_level == "INFO"
