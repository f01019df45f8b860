"""Packed map images (pathing, placement, height, ...) with typed pixel access."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Size2DI:
    """Integer width (x) and height (y)."""

    x: int = 0
    y: int = 0


def _as_bytearray(data) -> bytearray:
    return data if isinstance(data, bytearray) else bytearray(data)


@dataclass
class ImageData:
    """Raw image as sent by the game: pixel size, dimensions and packed bytes."""

    bits_per_pixel: int
    size: Size2DI
    data: bytearray = field(default_factory=bytearray)

    def __post_init__(self) -> None:
        self.data = _as_bytearray(self.data)

    def copy(self) -> ImageData:
        """Return an ImageData with its own copy of the pixel bytes."""
        return ImageData(self.bits_per_pixel, Size2DI(self.size.x, self.size.y), bytearray(self.data))

    def _require_bpp(self, expected: int) -> None:
        if self.bits_per_pixel != expected:
            raise ValueError(
                f"bad BitsPerPixel, expected {expected} got {self.bits_per_pixel}"
            )

    def bits(self) -> ImageDataBits:
        """A 1-bit view sharing this image's bytes."""
        self._require_bpp(1)
        return ImageDataBits(self.size.x, self.size.y, self.data)

    def bytes(self) -> ImageDataBytes:
        """An 8-bit view sharing this image's bytes."""
        self._require_bpp(8)
        return ImageDataBytes(self.size.x, self.size.y, self.data)

    def ints(self) -> ImageDataInt32:
        """A 32-bit little-endian view sharing this image's bytes."""
        self._require_bpp(32)
        return ImageDataInt32(self.size.x, self.size.y, self.data)


class _TypedImage:
    """Common storage and indexing; origin is the upper-left corner."""

    _bits_per_pixel = 8

    def __init__(self, width: int, height: int, data=None) -> None:
        self.size = Size2DI(width, height)
        if data is None:
            data = bytearray((width * height * self._bits_per_pixel + 7) // 8)
        self.data = _as_bytearray(data)

    @property
    def width(self) -> int:
        return self.size.x

    @property
    def height(self) -> int:
        return self.size.y

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _offset(self, x: int, y: int) -> int:
        return x + y * self.width

    def _duplicate(self):
        return type(self)(self.width, self.height, bytearray(self.data))

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.size == other.size and self.data == other.data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.width}x{self.height})"


class ImageDataBits(_TypedImage):
    """One bit per pixel, most significant bit first."""

    _bits_per_pixel = 1

    def in_bounds(self, x: int, y: int) -> bool:
        """True if (x, y) lies inside the image."""
        return self._inside(x, y)

    def copy(self) -> ImageDataBits:
        """Return a bit image with its own copy of the bytes."""
        return self._duplicate()

    def get(self, x: int, y: int) -> bool:
        """The bit at (x, y); False when out of bounds."""
        if not self.in_bounds(x, y):
            return False
        i = self._offset(x, y)
        return bool(self.data[i >> 3] & (0x80 >> (i & 7)))

    def set(self, x: int, y: int, value: bool) -> None:
        """Set or clear the bit at (x, y); out-of-bounds writes are ignored."""
        if not self.in_bounds(x, y):
            return
        i = self._offset(x, y)
        mask = 0x80 >> (i & 7)
        if value:
            self.data[i >> 3] |= mask
        else:
            self.data[i >> 3] &= ~mask & 0xFF

    def to_bytes(self) -> ImageDataBytes:
        """Expand to one byte per pixel: unset -> 0, set -> 255."""
        out = ImageDataBytes(self.width, self.height)
        for y in range(self.height):
            for x in range(self.width):
                if self.get(x, y):
                    out.set(x, y, 255)
        return out


class ImageDataBytes(_TypedImage):
    """One byte per pixel."""

    _bits_per_pixel = 8

    def in_bounds(self, x: int, y: int) -> bool:
        """True if (x, y) lies inside the image."""
        return self._inside(x, y)

    def copy(self) -> ImageDataBytes:
        """Return a byte image with its own copy of the bytes."""
        return self._duplicate()

    def get(self, x: int, y: int) -> int:
        """The byte at (x, y); 0 when out of bounds."""
        if not self.in_bounds(x, y):
            return 0
        return self.data[self._offset(x, y)]

    def set(self, x: int, y: int, value: int) -> None:
        """Store a byte at (x, y); out-of-bounds writes are ignored."""
        if self.in_bounds(x, y):
            self.data[self._offset(x, y)] = value


class ImageDataInt32(_TypedImage):
    """One signed 32-bit little-endian integer per pixel."""

    _bits_per_pixel = 32

    def in_bounds(self, x: int, y: int) -> bool:
        """True if (x, y) lies inside the image."""
        return self._inside(x, y)

    def copy(self) -> ImageDataInt32:
        """Return an int32 image with its own copy of the bytes."""
        return self._duplicate()

    def get(self, x: int, y: int) -> int:
        """The int32 at (x, y); 0 when out of bounds."""
        if not self.in_bounds(x, y):
            return 0
        i = 4 * self._offset(x, y)
        return int.from_bytes(self.data[i:i + 4], "little", signed=True)

    def set(self, x: int, y: int, value: int) -> None:
        """Store an int32 at (x, y), wrapping to 32 bits; out-of-bounds writes are ignored."""
        if not self.in_bounds(x, y):
            return
        i = 4 * self._offset(x, y)
        self.data[i:i + 4] = (value & 0xFFFFFFFF).to_bytes(4, "little")