"""
Frame Buffer for the CHIP-8 VM
==============================

CHIP-8 draws on a 64 x 32 monochrome display. The frame buffer is stored
row-major as one boolean per pixel, index = y * 64 + x.

Sprites are XOR-blitted: each sprite row is one byte, most significant bit
leftmost. A set sprite bit flips the pixel underneath; if that turns a lit
pixel off, the draw reports a collision.

Clipping policy:
- The start coordinate wraps (x mod 64, y mod 32)
- Sprite pixels that then fall past the right or bottom edge are dropped,
  not wrapped to the opposite side

The machine never initiates rendering. Consumers read the buffer after a
step through `pixels`, `get_text_grid()` or `render_image()`.
"""

import io
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
DISPLAY_SIZE = DISPLAY_WIDTH * DISPLAY_HEIGHT

# Colour schemes as (foreground, background) RGB
COLOR_SCHEMES: Dict[str, Tuple[Tuple[int, int, int], Tuple[int, int, int]]] = {
    "dark": ((0xFF, 0xAA, 0x00), (0x00, 0x00, 0x00)),
    "light": ((0x00, 0x00, 0x00), (0xFF, 0xFF, 0xFF)),
}


@dataclass
class DisplayState:
    """Pixel state, row-major."""
    pixels: List[bool]


class FrameBuffer:
    """
    64 x 32 monochrome frame buffer.

    Example:
        >>> fb = FrameBuffer()
        >>> fb.draw_sprite(0, 0, [0xF0])
        False
        >>> fb.get_pixel(3, 0)
        True
    """

    def __init__(self):
        self._state = DisplayState(pixels=[False] * DISPLAY_SIZE)

    @property
    def width(self) -> int:
        return DISPLAY_WIDTH

    @property
    def height(self) -> int:
        return DISPLAY_HEIGHT

    @property
    def pixels(self) -> List[bool]:
        """Row-major pixel list (a copy)."""
        return list(self._state.pixels)

    def clear(self) -> None:
        """Turn every pixel off."""
        self._state.pixels = [False] * DISPLAY_SIZE

    def get_pixel(self, x: int, y: int) -> bool:
        """
        Get pixel state.

        Raises:
            ValueError: If (x, y) is outside the display
        """
        if not (0 <= x < DISPLAY_WIDTH and 0 <= y < DISPLAY_HEIGHT):
            raise ValueError(f"Invalid position ({x}, {y})")
        return self._state.pixels[y * DISPLAY_WIDTH + x]

    def set_pixel(self, x: int, y: int, on: bool) -> None:
        """Set pixel state directly (used by tests and tools)."""
        if not (0 <= x < DISPLAY_WIDTH and 0 <= y < DISPLAY_HEIGHT):
            raise ValueError(f"Invalid position ({x}, {y})")
        self._state.pixels[y * DISPLAY_WIDTH + x] = bool(on)

    def draw_sprite(self, x: int, y: int, rows: Sequence[int]) -> bool:
        """
        XOR-blit a sprite.

        Args:
            x: Start column (wrapped modulo 64)
            y: Start row (wrapped modulo 32)
            rows: Sprite bytes, one per row, MSB leftmost

        Returns:
            True if any lit pixel was turned off
        """
        x0 = x % DISPLAY_WIDTH
        y0 = y % DISPLAY_HEIGHT
        pixels = self._state.pixels
        collision = False

        for row, bits in enumerate(rows):
            py = y0 + row
            if py >= DISPLAY_HEIGHT:
                break
            for col in range(8):
                px = x0 + col
                if px >= DISPLAY_WIDTH:
                    break
                if not bits & (0x80 >> col):
                    continue
                idx = py * DISPLAY_WIDTH + px
                if pixels[idx]:
                    collision = True
                pixels[idx] = not pixels[idx]

        return collision

    def lit_count(self) -> int:
        """Number of pixels currently on."""
        return sum(self._state.pixels)

    # =========================================================================
    # Rendering API
    # =========================================================================

    def get_text_grid(self, on: str = "#", off: str = " ") -> List[str]:
        """
        Render the buffer as text, one string per row.

        Args:
            on: Character for a lit pixel
            off: Character for an unlit pixel
        """
        pixels = self._state.pixels
        return [
            "".join(
                on if pixels[y * DISPLAY_WIDTH + x] else off
                for x in range(DISPLAY_WIDTH)
            )
            for y in range(DISPLAY_HEIGHT)
        ]

    def get_text(self, on: str = "#", off: str = " ") -> str:
        """Render the buffer as text with '\\n' between rows."""
        return "\n".join(self.get_text_grid(on, off))

    def render_image(self, scale: int = 8, scheme: str = "dark") -> bytes:
        """
        Render the buffer as a PNG image.

        Args:
            scale: Pixel scale factor (default 8, a 512x256 image)
            scheme: Colour scheme name from COLOR_SCHEMES

        Returns:
            PNG image bytes

        Raises:
            ValueError: If scale < 1 or the scheme is unknown
        """
        from PIL import Image

        if scale < 1:
            raise ValueError(f"Scale must be at least 1, got {scale}")
        if scheme not in COLOR_SCHEMES:
            available = ", ".join(sorted(COLOR_SCHEMES))
            raise ValueError(f"Unknown colour scheme '{scheme}'. Available: {available}")

        fg, bg = COLOR_SCHEMES[scheme]
        img = Image.new("RGB", (DISPLAY_WIDTH, DISPLAY_HEIGHT), color=bg)
        pixels = self._state.pixels
        for y in range(DISPLAY_HEIGHT):
            for x in range(DISPLAY_WIDTH):
                if pixels[y * DISPLAY_WIDTH + x]:
                    img.putpixel((x, y), fg)

        if scale > 1:
            img = img.resize(
                (DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale),
                Image.Resampling.NEAREST,
            )

        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()

    def __repr__(self) -> str:
        return f"FrameBuffer({DISPLAY_WIDTH}x{DISPLAY_HEIGHT}, lit={self.lit_count()})"
