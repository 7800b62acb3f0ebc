"""
LeapCursor - hand-tracking cursor control

Main entry point.

Usage:
    python -m leapcursor.main

Environment:
    LEAPCURSOR_LOG_LEVEL   DEBUG, INFO (default), WARNING, ERROR
    LEAPCURSOR_LOG_FILE    Also write rotating log files here
"""

import sys

from leapcursor.core.config import get_default_config
from leapcursor.core.processor import FrameProcessor
from leapcursor.os_control.cursor_controller import CursorController, CursorControlError
from leapcursor.utils.logger import setup_logger, get_logger


def main():
    """Main entry point."""

    config = get_default_config()

    setup_logger(
        name="leapcursor",
        level=config.log_level,
        log_file=config.log_file,
    )

    logger = get_logger(__name__)
    logger.info("=" * 60)
    logger.info("LeapCursor Starting")
    logger.info(f"Version: {config.version}")
    logger.info("=" * 60)

    try:
        from leapcursor.tracking.leap_source import run_controller
    except ImportError as e:
        logger.error(f"Leap SDK Python bindings not found: {e}")
        return 1

    try:
        cursor = CursorController(min_update_interval=config.cursor.min_update_interval)
    except CursorControlError as e:
        logger.error(str(e))
        return 1

    processor = FrameProcessor(config, cursor)

    def track_screen(screen):
        cursor.update_screen_size(screen.width_pixels, screen.height_pixels)

    try:
        run_controller(processor, on_screen=track_screen)
    except (EOFError, KeyboardInterrupt):
        pass

    logger.info(f"Frame rate at exit: {processor.fps:.1f} fps")
    logger.info(f"Cursor statistics: {cursor.statistics}")
    logger.info("Application exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
