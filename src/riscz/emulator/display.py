"""
Frame Renderer for RISC-Z Emulator
==================================

The RISC-Z screen is a 16 x 16 grid of colored cells backed by data page 255.
Byte n of the page is the cell at row n // 16, column n % 16 (row-major).

Each byte is an RGB 3-3-2 color:

     7   6   5   4   3   2   1   0
    +---+---+---+---+---+---+---+---+
    |    red    |   green   | blue  |
    +---+---+---+---+---+---+---+---+

Red and green scale 0-7 to 0.0-1.0, blue scales 0-3 to 0.0-1.0.

A Frame is an immutable snapshot of the page taken after a tick. Renderers
receive one frame per tick through `present()`, strictly before the next tick
runs. `present()` returning False asks the run loop to stop (for example when
a window is closed); it never interrupts a tick.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Tuple, Union


SCREEN_SIZE = 16

Color = Tuple[float, float, float]
RGB = Tuple[int, int, int]


# =============================================================================
# Color Decoding
# =============================================================================

def pixel_color(value: int) -> Color:
    """
    Decode an RGB 3-3-2 byte into channel intensities.

    Example:
        >>> pixel_color(0xE0)
        (1.0, 0.0, 0.0)
        >>> pixel_color(0x03)
        (0.0, 0.0, 1.0)
    """
    red = (value & 0b11100000) >> 5
    green = (value & 0b00011100) >> 2
    blue = value & 0b00000011
    return (red / 7.0, green / 7.0, blue / 3.0)


def pixel_rgb(value: int) -> RGB:
    """Decode an RGB 3-3-2 byte into 8-bit channel values."""
    return tuple(round(channel * 255) for channel in pixel_color(value))


# =============================================================================
# Frame
# =============================================================================

@dataclass(frozen=True)
class Frame:
    """
    One rendered screen: the 256 bytes of the display page.

    Attributes:
        pixels: Page bytes, row-major
        tick: Number of ticks executed when the frame was taken
    """
    pixels: bytes
    tick: int = 0

    def __post_init__(self):
        if len(self.pixels) != SCREEN_SIZE * SCREEN_SIZE:
            raise ValueError(
                f"frame needs {SCREEN_SIZE * SCREEN_SIZE} bytes, got {len(self.pixels)}"
            )

    def value_at(self, row: int, col: int) -> int:
        """Get the raw byte for a cell."""
        return self.pixels[row * SCREEN_SIZE + col]

    def color_at(self, row: int, col: int) -> Color:
        """Get a cell's color as channel intensities."""
        return pixel_color(self.value_at(row, col))

    def rows(self) -> List[List[Color]]:
        """Get the full grid of colors, row-major."""
        return [
            [self.color_at(row, col) for col in range(SCREEN_SIZE)]
            for row in range(SCREEN_SIZE)
        ]

    def render_image(self, scale: int = 16) -> bytes:
        """
        Render the frame as a PNG image (requires Pillow).

        Args:
            scale: Image pixels per cell edge (default 16)

        Returns:
            PNG image bytes
        """
        from PIL import Image

        if scale < 1:
            raise ValueError(f"scale must be at least 1, got {scale}")

        img = Image.new('RGB', (SCREEN_SIZE, SCREEN_SIZE))
        img.putdata([pixel_rgb(value) for value in self.pixels])
        if scale > 1:
            img = img.resize(
                (SCREEN_SIZE * scale, SCREEN_SIZE * scale),
                Image.Resampling.NEAREST,
            )

        buffer = io.BytesIO()
        img.save(buffer, format='PNG')
        return buffer.getvalue()

    def save(self, path: Union[str, Path], scale: int = 16) -> None:
        """Write the frame to a PNG file."""
        Path(path).write_bytes(self.render_image(scale=scale))


# =============================================================================
# Renderers
# =============================================================================

class FrameRenderer(Protocol):
    """
    Protocol for frame consumers.

    The emulator calls present() once after every tick and close() when the
    run is over.
    """

    def present(self, frame: Frame) -> bool:
        """Show a frame. Return False to request the run to stop."""
        ...

    def close(self) -> None:
        """Release any presentation resources."""
        ...


class HeadlessRenderer:
    """
    Renderer with no output device.

    Keeps the latest frame and counts frames; never paces or stops the run.

    Example:
        >>> renderer = HeadlessRenderer()
        >>> renderer.present(Frame(bytes(256)))
        True
        >>> renderer.frame_count
        1
    """

    def __init__(self):
        self.last_frame: Optional[Frame] = None
        self.frame_count = 0

    def present(self, frame: Frame) -> bool:
        self.last_frame = frame
        self.frame_count += 1
        return True

    def close(self) -> None:
        pass
