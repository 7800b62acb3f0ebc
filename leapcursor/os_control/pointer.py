"""
Pointer device capability.

The processing code only needs three things from the OS: move the cursor,
press the left button, release it. Anything providing these methods can
receive cursor output, which keeps the smoothing and mapping code free of
platform input APIs.
"""

from typing import Protocol


class PointerSink(Protocol):
    """Destination for cursor commands."""

    def move_to(self, x: int, y: int) -> bool:
        """Move the cursor to an absolute pixel position."""
        ...

    def press(self) -> None:
        """Press the left button."""
        ...

    def release(self) -> None:
        """Release the left button."""
        ...
