"""
Frame processing pipeline.

One call per tracking frame:
hand → screen mapping → click gesture → smoothing → pointer sink

A frame either produces cursor output or is skipped; nothing raised
while handling one frame is allowed to reach the next.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

import numpy as np

from leapcursor.core.config import AppConfig
from leapcursor.core.session import PointerSession
from leapcursor.os_control.pointer import PointerSink
from leapcursor.tracking.clicks import ClickAction, create_click_detector
from leapcursor.tracking.frames import ScreenSurface, TrackingFrame
from leapcursor.tracking.geometry import map_hand_to_screen
from leapcursor.tracking.smoothing import CursorSmoother
from leapcursor.utils.timing import FPSCounter
from leapcursor.utils.logger import get_logger

logger = get_logger(__name__)


class FrameOutcome(Enum):
    """Whether a frame produced cursor output."""

    SKIPPED = auto()
    PROCESSED = auto()


class SkipReason(Enum):
    """Why a frame was skipped."""

    NO_HAND = auto()
    NO_SCREEN = auto()
    INVALID_SCREEN = auto()
    DEGENERATE_INTERSECTION = auto()
    ERROR = auto()


@dataclass
class FrameResult:
    """Result of processing a single frame."""

    outcome: FrameOutcome
    skip_reason: Optional[SkipReason] = None
    cursor_pos: Optional[Tuple[int, int]] = None
    click: ClickAction = ClickAction.NONE
    fps: float = 0.0

    @property
    def processed(self) -> bool:
        return self.outcome == FrameOutcome.PROCESSED


def _screen_usable(screen: ScreenSurface) -> bool:
    return (
        screen.is_valid
        and screen.width_pixels > 0
        and screen.height_pixels > 0
        and screen.width_mm > 0
        and screen.height_mm > 0
    )


class FrameProcessor:
    """
    Turn tracking frames into pointer commands.

    State lives in an explicit PointerSession so several processors (or
    tests) never share windows by accident.
    """

    def __init__(
        self,
        config: AppConfig,
        sink: PointerSink,
        session: Optional[PointerSession] = None,
    ):
        """
        Initialize processor.

        Args:
            config: Application configuration
            sink: Receives cursor moves and button edges
            session: Existing session state (a fresh one is created if omitted)
        """
        self._config = config
        self._sink = sink
        self._session = session if session is not None else PointerSession.from_config(config)

        self._smoother = CursorSmoother(config.smoothing)
        self._click_detector = create_click_detector(config.click, config.smoothing)

        self._fps_counter = FPSCounter()
        self._last_skip_reason: Optional[SkipReason] = None

        logger.info(f"FrameProcessor initialized: mapping={config.mapping.method.value}")

    def process(
        self, frame: TrackingFrame, screen: Optional[ScreenSurface]
    ) -> FrameResult:
        """
        Process one tracking frame.

        Args:
            frame: Hands seen in this frame
            screen: Calibrated screen, or None if the SDK has none

        Returns:
            FrameResult describing what was emitted
        """
        fps = self._fps_counter.tick()

        hand = frame.primary_hand
        if hand is None:
            return self._skip(SkipReason.NO_HAND, fps)

        if screen is None:
            return self._skip(SkipReason.NO_SCREEN, fps)

        if not _screen_usable(screen):
            return self._skip(SkipReason.INVALID_SCREEN, fps)

        raw = map_hand_to_screen(
            hand, screen, self._config.mapping, self._config.recalibration
        )
        if raw is None:
            return self._skip(SkipReason.DEGENERATE_INTERSECTION, fps)

        session = self._session
        with session.lock:
            click = self._click_detector.detect(hand, session)
            self._apply_click(click)

            smoothed = self._smoother.smooth(
                session, np.array([raw[0], raw[1], 0.0], dtype=np.float64)
            )

        cursor_pos = (int(smoothed[0]), int(smoothed[1]))
        self._sink.move_to(*cursor_pos)

        if self._last_skip_reason is not None:
            logger.debug(f"Tracking resumed after {self._last_skip_reason.name}")
            self._last_skip_reason = None

        return FrameResult(
            outcome=FrameOutcome.PROCESSED,
            cursor_pos=cursor_pos,
            click=click,
            fps=fps,
        )

    def process_safely(
        self, frame: TrackingFrame, screen: Optional[ScreenSurface]
    ) -> FrameResult:
        """
        Process one frame, turning any failure into a skipped frame.

        This is the entry point for SDK callbacks, which must not raise.
        """
        try:
            return self.process(frame, screen)
        except Exception:
            logger.exception(f"Frame {frame.frame_id} failed")
            return self._skip(SkipReason.ERROR, self._fps_counter.fps)

    def _apply_click(self, click: ClickAction):
        """Forward a button edge unless the button is already in that state."""
        session = self._session

        if click == ClickAction.DOWN and not session.button_down:
            self._sink.press()
            session.button_down = True
            logger.debug("Left button down")

        elif click == ClickAction.UP and session.button_down:
            self._sink.release()
            session.button_down = False
            logger.debug("Left button up")

    def _skip(self, reason: SkipReason, fps: float) -> FrameResult:
        if reason != self._last_skip_reason:
            logger.debug(f"Skipping frames: {reason.name}")
            self._last_skip_reason = reason
        return FrameResult(outcome=FrameOutcome.SKIPPED, skip_reason=reason, fps=fps)

    def reset(self):
        """Clear smoothing history and release a held button."""
        with self._session.lock:
            self._session.clear()
            if self._session.button_down:
                self._sink.release()
                self._session.button_down = False

        logger.info("Processor reset")

    @property
    def session(self) -> PointerSession:
        return self._session

    @property
    def fps(self) -> float:
        """Recent frame rate, kept across reset so it can be reported at exit."""
        return self._fps_counter.fps
