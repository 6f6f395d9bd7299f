"""Conversion of 15-bit premultiplied RGBA pixels and plain-text PPM output."""

from __future__ import annotations

import os
from typing import Sequence, Union

_ONE = 1 << 15
_HALF = _ONE // 2


def fix15_to_rgba8(pixels: Sequence[int]) -> bytes:
    """Convert flat premultiplied fix15 RGBA values to straight 8-bit RGBA.

    ``pixels`` holds four values per pixel in the range ``0..2**15``.
    """
    if len(pixels) % 4:
        raise ValueError("pixel data length must be a multiple of 4")
    out = bytearray()
    for offset in range(0, len(pixels), 4):
        r, g, b, a = pixels[offset:offset + 4]
        if a:
            r = ((r << 15) + a // 2) // a
            g = ((g << 15) + a // 2) // a
            b = ((b << 15) + a // 2) // a
        else:
            r = g = b = 0
        out.extend(((c * 255 + _HALF) // _ONE) & 0xFF for c in (r, g, b, a))
    return bytes(out)


def write_ppm(
    path: Union[str, os.PathLike],
    width: int,
    height: int,
    pixels: Sequence[int],
) -> None:
    """Write ``width`` x ``height`` fix15 RGBA pixels, row by row, as a P3 PPM file."""
    if width < 0 or height < 0:
        raise ValueError("width and height must not be negative")
    if len(pixels) != width * height * 4:
        raise ValueError(
            f"expected {width * height * 4} values for a {width}x{height} image, "
            f"got {len(pixels)}"
        )
    rgba8 = fix15_to_rgba8(pixels)
    with open(path, "w", encoding="ascii") as fp:
        fp.write(f"P3\n#Handwritten\n{width} {height}\n255\n")
        for offset in range(0, len(rgba8), 4):
            r, g, b = rgba8[offset:offset + 3]
            fp.write(f"{r} {g} {b}\n")