"""In-memory pixel images and colour conversion for low-depth visuals."""

from __future__ import annotations

from dataclasses import dataclass, field


def _row_bytes(width: int, bpp: int) -> int:
    # Rows are padded to a 32-bit boundary.
    return ((width * bpp + 31) // 32) * 4


@dataclass
class Image:
    """A packed pixel buffer of ``width`` x ``height`` pixels.

    ``endian`` is 0 for least significant byte first, anything else for
    most significant byte first.
    """

    width: int
    height: int
    bpp: int = 32
    endian: int = 0
    data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid image size {self.width}x{self.height}")
        if self.bpp <= 0 or self.bpp % 8:
            raise ValueError(f"unsupported bits per pixel: {self.bpp}")
        self.data = bytearray(self.size_line() * self.height)

    @property
    def _opp(self) -> int:
        return self.bpp // 8

    @property
    def _byteorder(self) -> str:
        return "big" if self.endian else "little"

    def size_line(self) -> int:
        """Number of bytes in one row of the buffer."""
        return _row_bytes(self.width, self.bpp)

    def _offset(self, x: int, y: int) -> int:
        return y * self.size_line() + x * self._opp

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y); points outside the image are ignored."""
        if not self._contains(x, y):
            return
        value = color & ((1 << self.bpp) - 1)
        start = self._offset(x, y)
        self.data[start:start + self._opp] = value.to_bytes(self._opp, self._byteorder)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the value stored at (x, y)."""
        if not self._contains(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        start = self._offset(x, y)
        return int.from_bytes(self.data[start:start + self._opp], self._byteorder)

    def fill(self, color: int) -> None:
        """Set every pixel to ``color``."""
        value = color & ((1 << self.bpp) - 1)
        pixel = value.to_bytes(self._opp, self._byteorder)
        row = pixel * self.width
        row += bytes(self.size_line() - len(row))
        self.data[:] = row * self.height


def _mask_shift(mask: int) -> tuple[int, int]:
    if mask <= 0:
        raise ValueError(f"colour mask must be positive, got {mask:#x}")
    offset = 0
    while not mask & 1:
        mask >>= 1
        offset += 1
    bits = 0
    while mask & 1:
        mask >>= 1
        bits += 1
    return offset, bits


def rgb_shifts(red_mask: int, green_mask: int, blue_mask: int) -> tuple[int, ...]:
    """Return (offset, bits) of each channel mask, flattened as six ints."""
    return tuple(
        value
        for mask in (red_mask, green_mask, blue_mask)
        for value in _mask_shift(mask)
    )


def convert_color(color: int, depth: int, shifts: tuple[int, ...]) -> int:
    """Map a 0xRRGGBB colour to a pixel value for a visual of ``depth`` bits."""
    if depth >= 24:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - shifts[1])) << shifts[0])
        + ((green >> (16 - shifts[3])) << shifts[2])
        + ((blue >> (16 - shifts[5])) << shifts[4])
    )