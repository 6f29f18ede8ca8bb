"""In-memory pixel images and visual colour conversion."""

from __future__ import annotations

from dataclasses import dataclass


def _mask_layout(mask: int) -> tuple[int, int]:
    """Return (shift, bits) of a contiguous colour mask."""
    if mask <= 0:
        raise ValueError(f"colour mask must be a positive bit mask, got {mask!r}")
    shift = (mask & -mask).bit_length() - 1
    mask >>= shift
    bits = (mask ^ (mask + 1)).bit_length() - 1
    return shift, bits


@dataclass(frozen=True)
class Visual:
    """Pixel layout of a display: depth and the position of each channel."""

    depth: int
    red_shift: int
    red_bits: int
    green_shift: int
    green_bits: int
    blue_shift: int
    blue_bits: int

    @classmethod
    def from_masks(cls, red_mask: int, green_mask: int, blue_mask: int, depth: int) -> Visual:
        """Build a visual from the channel bit masks of a true-colour display."""
        red_shift, red_bits = _mask_layout(red_mask)
        green_shift, green_bits = _mask_layout(green_mask)
        blue_shift, blue_bits = _mask_layout(blue_mask)
        return cls(depth, red_shift, red_bits, green_shift, green_bits, blue_shift, blue_bits)

    def color_value(self, color: int) -> int:
        """Convert a 0xRRGGBB colour to this visual's pixel value."""
        if self.depth >= 24:
            return color
        red = (color >> 8) & 0xFF00
        green = color & 0xFF00
        blue = (color << 8) & 0xFF00
        return (
            ((red >> (16 - self.red_bits)) << self.red_shift)
            + ((green >> (16 - self.green_bits)) << self.green_shift)
            + ((blue >> (16 - self.blue_bits)) << self.blue_shift)
        )


class Image:
    """A width x height pixel buffer with rows padded to 32 bits."""

    def __init__(self, width: int, height: int, bits_per_pixel: int = 32,
                 big_endian: bool = False) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if bits_per_pixel <= 0 or bits_per_pixel % 8:
            raise ValueError(f"bits per pixel must be a positive multiple of 8, got {bits_per_pixel}")
        self.width = width
        self.height = height
        self.bits_per_pixel = bits_per_pixel
        self.big_endian = big_endian
        self.size_line = ((width * bits_per_pixel + 31) // 32) * 4
        self.data = bytearray(self.size_line * height)

    @property
    def bytes_per_pixel(self) -> int:
        return self.bits_per_pixel // 8

    @property
    def _byteorder(self) -> str:
        return "big" if self.big_endian else "little"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.size_line + x * self.bytes_per_pixel

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store a pixel value, truncated to the pixel width, in image byte order."""
        offset = self._offset(x, y)
        opp = self.bytes_per_pixel
        value = color & ((1 << (8 * opp)) - 1)
        self.data[offset:offset + opp] = value.to_bytes(opp, self._byteorder)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel value stored at (x, y)."""
        offset = self._offset(x, y)
        return int.from_bytes(self.data[offset:offset + self.bytes_per_pixel], self._byteorder)

    def row(self, y: int) -> bytes:
        """Return the raw bytes of row ``y``, padding included."""
        if not 0 <= y < self.height:
            raise IndexError(f"row {y} outside image of height {self.height}")
        start = y * self.size_line
        return bytes(self.data[start:start + self.size_line])