"""
LeapCursor - Hand-tracking cursor control for the Leap Motion controller.

Reads palm and fingertip frames from the Leap SDK and drives the
operating-system pointer: the palm ray is projected onto the calibrated
screen, smoothed over a sliding window, and finger gestures are turned
into left-button presses and releases.

Architecture:
- tracking: frame data model, screen geometry, smoothing, click gestures
- core: configuration, per-session state, frame processing
- os_control: pointer sink backed by pynput
- utils: logging and timing helpers
"""

__version__ = "0.1.0"
__author__ = "LeapCursor Team"
__license__ = "MIT"
