"""
Leap Motion SDK adapter.

Subscribes a listener to the Leap controller and forwards each frame,
together with the first calibrated screen, to the FrameProcessor.

The ``Leap`` module is the Python binding shipped with the Leap Motion
SDK (``Leap.py`` plus the native ``LeapPython`` library); it must be on
the Python path.
"""

from typing import Callable, Optional

import Leap

from leapcursor.core.processor import FrameProcessor
from leapcursor.tracking.frames import ScreenSurface, frame_from_sdk, screen_from_sdk
from leapcursor.utils.logger import get_logger

logger = get_logger(__name__)


def _calibrated_screens(controller):
    """Screens known to the SDK (renamed between SDK releases)."""
    screens = getattr(controller, "located_screens", None)
    if screens is None:
        screens = getattr(controller, "calibrated_screens", None)
    return screens


class LeapCursorListener(Leap.Listener):
    """
    Listener driving the cursor from controller frames.

    Lifecycle callbacks are only logged; tracking simply resumes when
    frames arrive again.
    """

    def __init__(
        self,
        processor: FrameProcessor,
        on_screen: Optional[Callable[[ScreenSurface], None]] = None,
    ):
        """
        Initialize listener.

        Args:
            processor: Frame processor receiving every frame
            on_screen: Called with the screen before each frame (e.g. to
                update the pointer's screen bounds)
        """
        super().__init__()
        self._processor = processor
        self._on_screen = on_screen

    def on_init(self, controller):
        logger.info("Initialized")

    def on_connect(self, controller):
        logger.info("Connected")

    def on_disconnect(self, controller):
        logger.info("Disconnected")

    def on_exit(self, controller):
        logger.info("Exited")

    def on_frame(self, controller):
        try:
            frame = frame_from_sdk(controller.frame())
            screen = screen_from_sdk(_calibrated_screens(controller))
        except Exception:
            # Never let an exception escape into the SDK thread
            logger.exception("Failed to read frame from controller")
            return

        if screen is not None and self._on_screen is not None:
            self._on_screen(screen)

        self._processor.process_safely(frame, screen)


def run_controller(
    processor: FrameProcessor,
    on_screen: Optional[Callable[[ScreenSurface], None]] = None,
    wait: Callable[[], object] = input,
):
    """
    Attach a listener to the Leap controller until ``wait`` returns.

    Args:
        processor: Frame processor receiving frames
        on_screen: Optional screen callback passed to the listener
        wait: Blocking call that returns when the user wants to quit
    """
    listener = LeapCursorListener(processor, on_screen=on_screen)
    controller = Leap.Controller()

    controller.add_listener(listener)
    try:
        print("Press Enter to quit...")
        wait()
    finally:
        controller.remove_listener(listener)
        processor.reset()
        logger.info("Listener removed")
