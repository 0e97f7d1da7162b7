"""Reading and writing GX tiled texture data.

RGBA8 textures are stored in 4x4 tiles of 64 bytes: 32 bytes of
alpha/red pairs followed by 32 bytes of green/blue pairs.  I8 textures are
stored in 8x4 tiles of one byte per pixel.  Pixels are packed
``0xRRGGBBAA`` colours.
"""

from __future__ import annotations

import struct
from collections.abc import Sequence

_U32 = 0xFFFFFFFF
_RGBA8_TILE_BYTES = 64


def _rgba8_offset(x: int, y: int, width: int) -> int:
    return (((y & ~3) << 2) * width) + ((x & ~3) << 4) + ((((y & 3) << 2) + (x & 3)) << 1)


def _checked_offset(data_len: int, x: int, y: int, width: int) -> int:
    if x < 0 or y < 0 or width <= 0 or x >= width:
        raise IndexError(f"pixel ({x}, {y}) is outside a texture of width {width}")
    offset = _rgba8_offset(x, y, width)
    if offset + 34 > data_len:
        raise IndexError(f"pixel ({x}, {y}) lies past the end of the texture data")
    return offset


def get_pixel_rgba8(data: bytes | bytearray | memoryview, x: int, y: int, width: int) -> int:
    """Return the colour of pixel (x, y) of an RGBA8 texture ``width`` pixels wide."""
    offset = _checked_offset(len(data), x, y, width)
    alpha, red = data[offset], data[offset + 1]
    green, blue = data[offset + 32], data[offset + 33]
    return (red << 24) | (green << 16) | (blue << 8) | alpha


def set_pixel_rgba8(data: bytearray | memoryview, x: int, y: int, width: int, color: int) -> None:
    """Store ``color`` at pixel (x, y) of an RGBA8 texture held in ``data``."""
    offset = _checked_offset(len(data), x, y, width)
    color &= _U32
    data[offset:offset + 2] = bytes((color & 0xFF, (color >> 24) & 0xFF))
    data[offset + 32:offset + 34] = bytes(((color >> 16) & 0xFF, (color >> 8) & 0xFF))


def _check_size(width: int, height: int, tile_width: int, tile_height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError("texture dimensions must be positive")
    if width % tile_width or height % tile_height:
        raise ValueError(
            f"texture dimensions must be multiples of {tile_width}x{tile_height}"
        )


def _as_pixels(pixels: Sequence[int] | bytes | bytearray | memoryview, count: int) -> list[int]:
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        raw = bytes(pixels)
        if len(raw) != count * 4:
            raise ValueError(f"expected {count * 4} bytes of RGBA data, got {len(raw)}")
        return list(struct.unpack(f">{count}I", raw))
    values = [int(p) & _U32 for p in pixels]
    if len(values) != count:
        raise ValueError(f"expected {count} pixels, got {len(values)}")
    return values


def decode_rgba8(data: bytes | bytearray | memoryview, width: int, height: int) -> list[int]:
    """Decode RGBA8 tiles into row-major packed colours."""
    _check_size(width, height, 4, 4)
    raw = bytes(data)
    needed = width * height * 4
    if len(raw) < needed:
        raise ValueError(f"RGBA8 data needs {needed} bytes, got {len(raw)}")

    pixels = [0] * (width * height)
    tiles = (
        (ty, tx) for ty in range(0, height, 4) for tx in range(0, width, 4)
    )
    for tile_index, (ty, tx) in enumerate(tiles):
        start = tile_index * _RGBA8_TILE_BYTES
        ar = raw[start:start + 32]
        gb = raw[start + 32:start + 64]
        for i in range(16):
            alpha, red = ar[2 * i], ar[2 * i + 1]
            green, blue = gb[2 * i], gb[2 * i + 1]
            pixels[(ty + i // 4) * width + tx + i % 4] = (
                (red << 24) | (green << 16) | (blue << 8) | alpha
            )
    return pixels


def encode_rgba8(
    pixels: Sequence[int] | bytes | bytearray | memoryview, width: int, height: int
) -> bytes:
    """Encode row-major colours (or RGBA bytes) into RGBA8 tiles."""
    _check_size(width, height, 4, 4)
    colors = _as_pixels(pixels, width * height)
    out = bytearray()
    for ty in range(0, height, 4):
        for tx in range(0, width, 4):
            block = [
                colors[(ty + row) * width + tx + col] for row in range(4) for col in range(4)
            ]
            for c in block:
                out += bytes((c & 0xFF, (c >> 24) & 0xFF))
            for c in block:
                out += bytes(((c >> 16) & 0xFF, (c >> 8) & 0xFF))
    return bytes(out)


def encode_i8(
    pixels: Sequence[int] | bytes | bytearray | memoryview, width: int, height: int
) -> bytes:
    """Encode the low byte of each row-major colour into I8 tiles."""
    _check_size(width, height, 8, 4)
    colors = _as_pixels(pixels, width * height)
    out = bytearray()
    for ty in range(0, height, 4):
        for tx in range(0, width, 8):
            for row in range(4):
                start = (ty + row) * width + tx
                out += bytes(c & 0xFF for c in colors[start:start + 8])
    return bytes(out)